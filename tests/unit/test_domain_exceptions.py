"""Tests for domain and infrastructure exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    MalformedRequestException,
    UploadServiceException,
)
from app.infrastructure.exceptions import (
    MetadataStoreError,
    StorageNotFoundError,
    StorageWriteError,
)


def test_base_exception_default_error_code() -> None:
    """Base UploadServiceException uses class name as error_code when not provided."""
    exc = UploadServiceException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "UploadServiceException"
    assert exc.details == {}
    assert exc.to_dict() == {"error": "UploadServiceException", "message": "Something failed"}


def test_base_exception_custom_error_code_and_details() -> None:
    exc = UploadServiceException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_malformed_request() -> None:
    exc = MalformedRequestException("No file", field="file")
    assert exc.error_code == "MALFORMED_REQUEST"
    assert exc.details == {"field": "file"}
    assert MalformedRequestException("No file").details == {}


def test_document_not_found() -> None:
    exc = DocumentNotFoundException("abc")
    assert exc.error_code == "DOCUMENT_NOT_FOUND"
    assert exc.details == {"document_id": "abc"}
    assert "abc" in exc.message


def test_duplicate_document() -> None:
    assert DuplicateDocumentException("abc").error_code == "DUPLICATE_DOCUMENT"


def test_infrastructure_errors_share_base() -> None:
    for exc in (
        StorageNotFoundError("x"),
        StorageWriteError("x", "disk full"),
        MetadataStoreError("insert", "timeout"),
    ):
        assert isinstance(exc, UploadServiceException)
    assert StorageWriteError("x", "disk full").details == {
        "blob_id": "x",
        "reason": "disk full",
    }
    assert MetadataStoreError("insert", "timeout").message == "Metadata store insert failed"
