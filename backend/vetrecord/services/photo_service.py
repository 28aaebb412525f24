"""
Pet photo upload service.
"""

import logging
from pathlib import PurePosixPath
from typing import Optional

from ..config import get_settings
from ..exceptions import PhotoRejected
from ..store.blob_store import BlobStore, blob_store

settings = get_settings()
logger = logging.getLogger(__name__)

PHOTO_FOLDER = "pet-photos"


class PhotoService:
    """Validates and stores patient photos in the blob store."""

    def __init__(self, store: BlobStore, bucket: str, max_size_mb: int):
        self.store = store
        self.bucket = bucket
        self.max_size_mb = max_size_mb

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024

    def validate(self, content_type: Optional[str], size: int) -> None:
        """Reject anything that is not an image or is over the size ceiling."""
        if not content_type or not content_type.startswith("image/"):
            raise PhotoRejected("type", "Por favor, selecione uma imagem válida.")
        if size > self.max_size_bytes:
            raise PhotoRejected("size", f"A imagem deve ter no máximo {self.max_size_mb}MB.")

    async def upload_pet_photo(
        self,
        patient_id: str,
        filename: str,
        content_type: Optional[str],
        data: bytes
    ) -> str:
        """
        Store the photo as ``pet-photos/<patient_id>.<ext>``, replacing any
        previous one, and return its public URL.

        The URL is not saved on the patient; the caller does that when the
        patient form is submitted.
        """
        self.validate(content_type, len(data))

        ext = PurePosixPath(filename or "").suffix.lstrip(".").lower() or "jpg"
        path = f"{PHOTO_FOLDER}/{patient_id}.{ext}"

        await self.store.upload(self.bucket, path, data, overwrite=True)
        logger.info("Uploaded photo for patient %s (%d bytes)", patient_id, len(data))

        return self.store.get_public_url(self.bucket, path)

    async def delete_pet_photo(self, photo_url: str) -> None:
        """Remove the photo a public URL points at."""
        name = photo_url.rsplit("/", 1)[-1] if photo_url else ""
        if not name:
            return
        await self.store.remove(self.bucket, [f"{PHOTO_FOLDER}/{name}"])


# Global instance
photo_service = PhotoService(blob_store, settings.PHOTO_BUCKET, settings.MAX_PHOTO_SIZE_MB)
