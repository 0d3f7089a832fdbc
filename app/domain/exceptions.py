"""Domain exceptions for the upload service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class UploadServiceException(Exception):
    """Base exception for all upload service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, document_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body (error, message, details when present)."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class MalformedRequestException(UploadServiceException):
    """Raised when an upload request is missing its file or the file is unusable."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of what is wrong with the request.
            field: Optional form field that failed.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "MALFORMED_REQUEST", details)


class DocumentNotFoundException(UploadServiceException):
    """Raised when no document exists under the requested identifier."""

    def __init__(self, document_id: str) -> None:
        super().__init__(
            f"Document not found: {document_id}",
            "DOCUMENT_NOT_FOUND",
            {"document_id": document_id},
        )


class DuplicateDocumentException(UploadServiceException):
    """Raised when a metadata record already exists for an identifier.

    Identifiers are random UUIDs so this signals a bug or out-of-band
    tampering, not a client mistake.
    """

    def __init__(self, document_id: str) -> None:
        super().__init__(
            f"Document already exists: {document_id}",
            "DUPLICATE_DOCUMENT",
            {"document_id": document_id},
        )
