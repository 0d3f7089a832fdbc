"""DTOs for document use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.application.interfaces.storage import BlobStream


@dataclass(frozen=True)
class DocumentRecord:
    """Metadata row as stored (read-model of the metadata store)."""

    id: str
    name: str
    uploaded_at: datetime


@dataclass(frozen=True)
class DocumentResult:
    """Document as returned to callers: metadata plus derived download URL."""

    id: str
    name: str
    url: str
    uploaded_at: datetime


@dataclass(frozen=True)
class DocumentDownload:
    """Result of fetch: suggested save-name, open byte stream, and its length.

    The caller owns the stream and must exhaust or aclose() it.
    """

    filename: str
    stream: BlobStream
    size: int


@dataclass(frozen=True)
class BlobInfo:
    """One stored blob as seen by reconciliation."""

    id: str
    size: int
    modified_at: datetime


@dataclass(frozen=True)
class ReconciliationReport:
    """Outcome of comparing the blob key space with the metadata key space."""

    orphaned_blobs: list[str] = field(default_factory=list)
    missing_blobs: list[str] = field(default_factory=list)
    skipped_recent_blobs: int = 0
    deleted_orphans: list[str] = field(default_factory=list)

    @property
    def consistent(self) -> bool:
        """True when every record has a blob and every old blob has a record."""
        return not self.orphaned_blobs and not self.missing_blobs
