"""Reconcile blob storage with document metadata.

Usage:
    python -m scripts.reconcile_storage [--delete-orphans]
Reports orphaned blobs (stored bytes with no metadata record, older than
ORPHAN_GRACE_SECONDS) and missing blobs (records whose bytes are gone).
With --delete-orphans, the reported orphaned blobs are removed.
Exits 1 when drift remains after the run.
"""

import asyncio
import sys

from app.application.use_cases.documents import StorageReconciliationService
from app.core.config import Settings, get_settings
from app.infrastructure.external.storage import LocalBlobStore
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.repositories import DocumentRepository
from app.shared.logging import setup_logging


async def main(argv: list[str], settings: Settings | None = None) -> int:
    """Run reconciliation once and print the report. Returns the exit status."""
    settings = settings or get_settings()
    setup_logging(settings)
    delete_orphans = "--delete-orphans" in argv

    database = Database.from_settings(settings)
    try:
        await database.connect(
            attempts=settings.db_connect_attempts,
            retry_delay=settings.db_connect_retry_delay_seconds,
        )
        service = StorageReconciliationService(
            LocalBlobStore(settings.storage_root),
            DocumentRepository(database),
            grace_seconds=settings.orphan_grace_seconds,
        )
        report = await service.run(delete_orphans=delete_orphans)
    finally:
        await database.dispose()

    for blob_id in report.orphaned_blobs:
        state = "deleted" if blob_id in report.deleted_orphans else "orphaned"
        print(f"{state}: {blob_id}")
    for blob_id in report.missing_blobs:
        print(f"missing blob: {blob_id}")
    print(
        f"Done. Orphaned: {len(report.orphaned_blobs)}, "
        f"deleted: {len(report.deleted_orphans)}, "
        f"missing: {len(report.missing_blobs)}, "
        f"skipped (recent): {report.skipped_recent_blobs}"
    )
    remaining_orphans = set(report.orphaned_blobs) - set(report.deleted_orphans)
    return 1 if remaining_orphans or report.missing_blobs else 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(sys.argv[1:])))
