"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (metadata repository, blob store).
"""

from app.application.interfaces import BlobStream, IBlobStore, IDocumentRepository
from app.application.use_cases.documents import (
    DocumentService,
    StorageReconciliationService,
)

__all__ = [
    "BlobStream",
    "DocumentService",
    "IBlobStore",
    "IDocumentRepository",
    "StorageReconciliationService",
]
