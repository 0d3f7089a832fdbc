"""Document use cases: ingest/list/fetch and storage reconciliation."""

from app.application.use_cases.documents.document_operations import DocumentService
from app.application.use_cases.documents.reconcile_storage import (
    StorageReconciliationService,
)

__all__ = [
    "DocumentService",
    "StorageReconciliationService",
]
