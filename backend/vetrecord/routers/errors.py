"""
Turns store failures raised inside a route into HTTP errors that carry the
notification the client should show.
"""

import logging
from contextlib import contextmanager

from fastapi import HTTPException, status

from ..exceptions import BlobError, RecordValidationError, RemoteQueryError
from ..models.notification import Notification

logger = logging.getLogger(__name__)


def error_detail(message: str, description: str) -> dict:
    return {
        "message": message,
        "notification": Notification.error(description).model_dump(mode="json")
    }


@contextmanager
def notify_failure(description: str):
    """Report any store error in the block with ``description``. Nothing is retried."""
    try:
        yield
    except (RemoteQueryError, BlobError) as exc:
        logger.error("%s (%s)", description, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=error_detail(str(exc), description)
        ) from exc
    except RecordValidationError as exc:
        logger.info("Rejected request: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(str(exc), str(exc))
        ) from exc
