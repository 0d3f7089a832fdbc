"""Application DTOs (no ORM dependency)."""

from app.application.dtos.document import (
    BlobInfo,
    DocumentDownload,
    DocumentRecord,
    DocumentResult,
    ReconciliationReport,
)

__all__ = [
    "BlobInfo",
    "DocumentDownload",
    "DocumentRecord",
    "DocumentResult",
    "ReconciliationReport",
]
