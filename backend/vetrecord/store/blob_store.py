"""
Blob storage for uploaded files, kept under the upload directory and served
publicly by the app's static mount.
"""

import asyncio
from pathlib import Path
from typing import Iterable, Optional

from ..config import get_settings
from ..exceptions import BlobError

settings = get_settings()

# URL prefix the app mounts the upload directory on
PUBLIC_PREFIX = "/uploads"


def _write_file(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "wb") as f:
        f.write(data)


class BlobStore:
    """Bucketed file storage with public URLs."""

    def __init__(self, root: Optional[str] = None, public_base_url: Optional[str] = None):
        self.root = Path(root or settings.UPLOAD_DIR)
        self.public_base_url = (public_base_url or settings.PUBLIC_BASE_URL).rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise BlobError(bucket, path, ValueError("path escapes the bucket"))
        return target

    async def upload(self, bucket: str, path: str, data: bytes, overwrite: bool = False) -> None:
        """Write ``data`` to ``bucket/path``."""
        target = self._resolve(bucket, path)
        if target.exists() and not overwrite:
            raise BlobError(bucket, path, FileExistsError(str(target)))

        try:
            await asyncio.to_thread(_write_file, target, data)
        except OSError as exc:
            raise BlobError(bucket, path, exc) from exc

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_base_url}{PUBLIC_PREFIX}/{bucket}/{path}"

    async def remove(self, bucket: str, paths: Iterable[str]) -> None:
        """Delete blobs; missing ones are ignored."""
        for path in paths:
            target = self._resolve(bucket, path)
            try:
                await asyncio.to_thread(target.unlink, missing_ok=True)
            except OSError as exc:
                raise BlobError(bucket, path, exc) from exc


# Global instance
blob_store = BlobStore()
