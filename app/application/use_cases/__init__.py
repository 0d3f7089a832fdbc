"""Application use cases."""

from app.application.use_cases.documents import (
    DocumentService,
    StorageReconciliationService,
)

__all__ = ["DocumentService", "StorageReconciliationService"]
