"""Reconcile storage: compare blob ids with metadata ids and report drift."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import TYPE_CHECKING

from app.application.dtos.document import ReconciliationReport
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IDocumentRepository
    from app.application.interfaces.storage import IBlobStore

logger = logging.getLogger(__name__)


class StorageReconciliationService:
    """Finds orphaned blobs (no record) and missing blobs (record, no bytes).

    Blobs younger than grace_seconds are skipped: their ingest may still be
    between the blob write and the record insert.
    """

    def __init__(
        self,
        blob_store: "IBlobStore",
        document_repo: "IDocumentRepository",
        grace_seconds: int = 3600,
    ) -> None:
        self._blob_store = blob_store
        self._document_repo = document_repo
        self._grace = timedelta(seconds=grace_seconds)

    async def run(self, delete_orphans: bool = False) -> ReconciliationReport:
        """Build the report; when delete_orphans is set, remove the orphans found."""
        cutoff = utc_now() - self._grace
        record_ids = await self._document_repo.list_ids()
        blob_ids: set[str] = set()
        orphaned: list[str] = []
        skipped = 0
        async for blob in self._blob_store.iter_blobs():
            blob_ids.add(blob.id)
            if blob.id in record_ids:
                continue
            if blob.modified_at > cutoff:
                skipped += 1
                continue
            orphaned.append(blob.id)
        missing = sorted(record_ids - blob_ids)
        orphaned.sort()

        deleted: list[str] = []
        if delete_orphans:
            for blob_id in orphaned:
                if await self._blob_store.delete(blob_id):
                    logger.info("Deleted orphaned blob %s", blob_id)
                    deleted.append(blob_id)
        for blob_id in missing:
            logger.warning("Document %s has a record but no blob", blob_id)
        return ReconciliationReport(
            orphaned_blobs=orphaned,
            missing_blobs=missing,
            skipped_recent_blobs=skipped,
            deleted_orphans=deleted,
        )
