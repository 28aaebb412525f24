"""Routers package for VetRecord API."""

from .patients import router as patients_router
from .owners import router as owners_router
from .medical_records import router as medical_records_router
from .search import router as search_router

__all__ = [
    "patients_router",
    "owners_router",
    "medical_records_router",
    "search_router"
]
