"""Document repository (metadata store). Returns application DTOs."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.application.dtos.document import DocumentRecord
from app.domain.exceptions import DocumentNotFoundException, DuplicateDocumentException
from app.infrastructure.exceptions import MetadataStoreError
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.models.document import Document
from app.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)


def _document_to_record(d: Document) -> DocumentRecord:
    """Map ORM Document to application DocumentRecord."""
    return DocumentRecord(id=d.id, name=d.name, uploaded_at=ensure_utc(d.uploaded_at))


class DocumentRepository:
    """Metadata store backed by the documents table.

    Each call runs in its own session; inserts commit before returning so a
    record is visible to list_all as soon as insert succeeds.
    """

    def __init__(self, database: Database) -> None:
        self.database = database

    async def insert(
        self, document_id: str, name: str, uploaded_at: datetime
    ) -> DocumentRecord:
        """Create one record. Raises DuplicateDocumentException if id exists."""
        orm = Document(id=document_id, name=name, uploaded_at=ensure_utc(uploaded_at))
        try:
            async with self.database.transaction() as session:
                session.add(orm)
                await session.flush()
        except IntegrityError as e:
            raise DuplicateDocumentException(document_id) from e
        except SQLAlchemyError as e:
            raise MetadataStoreError("insert", str(e)) from e
        return _document_to_record(orm)

    async def list_all(self) -> list[DocumentRecord]:
        """Return every record ordered by uploaded_at, then id."""
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(Document).order_by(Document.uploaded_at, Document.id)
                )
                rows = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise MetadataStoreError("list", str(e)) from e
        return [_document_to_record(row) for row in rows]

    async def find_name_by_id(self, document_id: str) -> str:
        """Return the stored name. Raises DocumentNotFoundException if absent."""
        try:
            async with self.database.session() as session:
                result = await session.execute(
                    select(Document.name).where(Document.id == document_id)
                )
                name = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise MetadataStoreError("lookup", str(e)) from e
        if name is None:
            raise DocumentNotFoundException(document_id)
        return name

    async def list_ids(self) -> set[str]:
        """Return every stored id."""
        try:
            async with self.database.session() as session:
                result = await session.execute(select(Document.id))
                return set(result.scalars().all())
        except SQLAlchemyError as e:
            raise MetadataStoreError("list_ids", str(e)) from e
