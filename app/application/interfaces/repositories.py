"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.document import DocumentRecord


class IDocumentRepository(Protocol):
    """Protocol for the document metadata store (DIP)."""

    async def insert(
        self, document_id: str, name: str, uploaded_at: datetime
    ) -> DocumentRecord:
        """Create exactly one record. DuplicateDocumentException if id exists."""

    async def list_all(self) -> list[DocumentRecord]:
        """Return every record, oldest upload first."""

    async def find_name_by_id(self, document_id: str) -> str:
        """Return the stored name. DocumentNotFoundException if absent."""

    async def list_ids(self) -> set[str]:
        """Return every stored id (reconciliation)."""
