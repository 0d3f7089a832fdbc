"""Shared utilities: request context, logging, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import get_request_id, reset_request_id, set_request_id
from app.shared.utils import (
    content_disposition,
    ensure_utc,
    generate_document_id,
    parse_document_id,
    utc_now,
)

__all__ = [
    "get_request_id",
    "set_request_id",
    "reset_request_id",
    "content_disposition",
    "ensure_utc",
    "generate_document_id",
    "parse_document_id",
    "utc_now",
]
