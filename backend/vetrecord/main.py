"""
VetRecord - Veterinary Patient Records

Main FastAPI application entry point.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import get_settings
from .database import Database
from .exceptions import BlobError, RecordValidationError, RemoteQueryError
from .logging_setup import setup_logging
from .models.notification import Notification
from .routers import (
    patients_router,
    owners_router,
    medical_records_router,
    search_router
)
from .store.blob_store import PUBLIC_PREFIX

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting %s v%s", settings.APP_NAME, settings.APP_VERSION)
    await Database.connect()

    yield

    # Shutdown
    await Database.disconnect()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"]
)


# Trace Middleware
@app.middleware("http")
async def trace_middleware(request: Request, call_next):
    response = await call_next(request)
    logger.debug("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


def _error_response(status_code: int, message: str, description: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": {
                "message": message,
                "notification": Notification.error(description).model_dump(mode="json")
            }
        }
    )


@app.exception_handler(RemoteQueryError)
async def remote_query_error_handler(request: Request, exc: RemoteQueryError):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return _error_response(502, str(exc), "Erro ao acessar os dados. Tente novamente.")


@app.exception_handler(BlobError)
async def blob_error_handler(request: Request, exc: BlobError):
    logger.error("%s %s: %s", request.method, request.url.path, exc)
    return _error_response(502, str(exc), "Erro ao acessar o armazenamento. Tente novamente.")


@app.exception_handler(RecordValidationError)
async def record_validation_error_handler(request: Request, exc: RecordValidationError):
    return _error_response(400, str(exc), str(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(500, "Internal server error", "Erro inesperado. Tente novamente.")


# Serve uploaded photos
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
app.mount(PUBLIC_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

# Include routers
app.include_router(patients_router)
app.include_router(owners_router)
app.include_router(medical_records_router)
app.include_router(search_router)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - health check."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy",
        "docs": "/docs"
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "database": "connected" if Database.client else "disconnected",
        "version": settings.APP_VERSION
    }


def run():
    """Console entry point."""
    import uvicorn
    uvicorn.run(
        "vetrecord.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


# Entry point for running directly
if __name__ == "__main__":
    run()
