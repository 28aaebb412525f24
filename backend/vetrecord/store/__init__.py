"""Table and blob storage for VetRecord."""

from .table_store import TableStore, Join, table_store
from .blob_store import BlobStore, blob_store

__all__ = ["TableStore", "Join", "table_store", "BlobStore", "blob_store"]
