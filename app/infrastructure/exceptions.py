"""Infrastructure exceptions for blob storage and the metadata database.

Storage errors extend UploadServiceException so presentation can map them
to HTTP responses consistently.
"""

from app.domain.exceptions import UploadServiceException


class StorageException(UploadServiceException):
    """Base exception for blob storage operations."""


class StorageNotFoundError(StorageException):
    """Blob not found in storage."""

    def __init__(self, blob_id: str) -> None:
        super().__init__(
            f"Blob not found: {blob_id}",
            "STORAGE_NOT_FOUND",
            {"blob_id": blob_id},
        )


class StorageWriteError(StorageException):
    """Blob write failed (disk full, permission denied, identifier already taken)."""

    def __init__(self, blob_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to write blob: {blob_id}",
            "STORAGE_WRITE_ERROR",
            {"blob_id": blob_id, "reason": reason},
        )


class StorageReadError(StorageException):
    """Blob read failed."""

    def __init__(self, blob_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to read blob: {blob_id}",
            "STORAGE_READ_ERROR",
            {"blob_id": blob_id, "reason": reason},
        )


class StorageDeleteError(StorageException):
    """Blob removal failed (reconciliation only)."""

    def __init__(self, blob_id: str, reason: str) -> None:
        super().__init__(
            f"Failed to delete blob: {blob_id}",
            "STORAGE_DELETE_ERROR",
            {"blob_id": blob_id, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Blob identifier resolves outside the storage root."""

    def __init__(self, blob_id: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation} on {blob_id}",
            "STORAGE_PERMISSION_ERROR",
            {"blob_id": blob_id, "operation": operation},
        )


class MetadataStoreError(UploadServiceException):
    """Query or write against the metadata database failed."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(
            f"Metadata store {operation} failed",
            "METADATA_STORE_ERROR",
            {"operation": operation, "reason": reason},
        )


class DatabaseUnavailableError(UploadServiceException):
    """Database could not be reached at startup after all connection attempts."""

    def __init__(self, attempts: int, reason: str) -> None:
        super().__init__(
            f"Failed to connect to database after {attempts} attempts",
            "DATABASE_UNAVAILABLE",
            {"attempts": attempts, "reason": reason},
        )
