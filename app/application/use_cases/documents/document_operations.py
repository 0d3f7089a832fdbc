"""Document operations: ingest (write), list and fetch (read)."""

from __future__ import annotations

import logging
from typing import BinaryIO

from app.application.dtos.document import (
    DocumentDownload,
    DocumentRecord,
    DocumentResult,
)
from app.application.interfaces.repositories import IDocumentRepository
from app.application.interfaces.storage import IBlobStore
from app.domain.exceptions import DocumentNotFoundException, MalformedRequestException
from app.infrastructure.exceptions import StorageNotFoundError
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_document_id, parse_document_id

logger = logging.getLogger(__name__)


class DocumentService:
    """Keeps the blob store and the metadata store in step.

    Ingest writes the blob first and the record second, so a document is
    listed only once its bytes are durable. A failed record insert leaves an
    orphaned blob that is logged here and swept by reconciliation.
    """

    def __init__(
        self,
        blob_store: IBlobStore,
        document_repo: IDocumentRepository,
        public_base_url: str,
    ) -> None:
        self.blob_store = blob_store
        self.document_repo = document_repo
        self.public_base_url = public_base_url.rstrip("/")

    def download_url(self, document_id: str) -> str:
        """Absolute URL serving the document's bytes."""
        return f"{self.public_base_url}/dl/{document_id}"

    def _to_result(self, record: DocumentRecord) -> DocumentResult:
        return DocumentResult(
            id=record.id,
            name=record.name,
            url=self.download_url(record.id),
            uploaded_at=record.uploaded_at,
        )

    async def ingest(self, filename: str, file_data: BinaryIO) -> DocumentResult:
        """Store file_data as a new document named filename. Returns the created document."""
        if not filename or not filename.strip():
            raise MalformedRequestException("Uploaded file has no filename", field="file")
        document_id = generate_document_id()
        size = await self.blob_store.put(document_id, file_data)
        try:
            record = await self.document_repo.insert(document_id, filename, utc_now())
        except Exception:
            logger.error(
                "Metadata insert failed; blob %s (%d bytes) is orphaned",
                document_id,
                size,
                exc_info=True,
            )
            raise
        logger.info("Stored document %s (%d bytes)", document_id, size)
        return self._to_result(record)

    async def list_documents(self) -> list[DocumentResult]:
        """Return every present document. Reads metadata only."""
        records = await self.document_repo.list_all()
        return [self._to_result(r) for r in records]

    async def fetch(self, document_id: str) -> DocumentDownload:
        """Resolve a document for download. Caller owns the returned stream."""
        canonical_id = parse_document_id(document_id)
        if canonical_id is None:
            raise DocumentNotFoundException(document_id)
        filename = await self.document_repo.find_name_by_id(canonical_id)
        try:
            stream = await self.blob_store.get(canonical_id)
        except StorageNotFoundError as e:
            logger.warning("Document %s has a record but no blob", canonical_id)
            raise DocumentNotFoundException(canonical_id) from e
        try:
            size = await self.blob_store.size(canonical_id)
        except BaseException:
            await stream.aclose()
            raise
        return DocumentDownload(filename=filename, stream=stream, size=size)
