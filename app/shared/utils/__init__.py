"""Shared utilities: datetime, generators, sanitization."""

from app.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    utc_now,
)
from app.shared.utils.generators import generate_document_id, parse_document_id
from app.shared.utils.sanitization import FilenameSanitizer, content_disposition

__all__ = [
    "generate_document_id",
    "parse_document_id",
    "utc_now",
    "ensure_utc",
    "from_timestamp_utc",
    "FilenameSanitizer",
    "content_disposition",
]
