"""
Error taxonomy for record keeping operations.
"""

from typing import Optional


class VetRecordError(Exception):
    """Base class for application errors."""


class RemoteQueryError(VetRecordError):
    """A read or write against the table store failed."""

    def __init__(self, table: str, operation: str, cause: Optional[BaseException] = None):
        self.table = table
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation} on '{table}' failed: {cause}")


class BlobError(VetRecordError):
    """A blob store upload or removal failed."""

    def __init__(self, bucket: str, path: str, cause: Optional[BaseException] = None):
        self.bucket = bucket
        self.path = path
        self.cause = cause
        super().__init__(f"blob '{bucket}/{path}' failed: {cause}")


class InvalidFilterValue(VetRecordError, ValueError):
    """Unknown filter name or option. Indicates a broken filter configuration."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"invalid value {value!r} for filter {name!r}")


class RecordValidationError(VetRecordError, ValueError):
    """Malformed identifier or a reference to a record that does not exist."""


class PhotoRejected(RecordValidationError):
    """Photo refused before upload (wrong MIME type or too large)."""

    def __init__(self, reason: str, message: str):
        self.reason = reason
        super().__init__(message)
