"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the shared database pool, the blob store
and the document use cases. Long-lived objects are built once in the
lifespan and read from app.state; routes depend only on these functions.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from app.application.use_cases.documents import DocumentService
from app.core.config import Settings, get_settings
from app.infrastructure.external.storage import LocalBlobStore
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.repositories import DocumentRepository


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with (falls back to the cached env settings)."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_database(request: Request) -> Database:
    """Database pool opened in the lifespan."""
    return request.app.state.database


def get_blob_store(request: Request) -> LocalBlobStore:
    """Blob store created in the lifespan."""
    return request.app.state.blob_store


def get_document_repo(
    database: Annotated[Database, Depends(get_database)],
) -> DocumentRepository:
    """Build DocumentRepository over the shared pool."""
    return DocumentRepository(database)


def get_document_service(
    blob_store: Annotated[LocalBlobStore, Depends(get_blob_store)],
    document_repo: Annotated[DocumentRepository, Depends(get_document_repo)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> DocumentService:
    """Build DocumentService (blob store + metadata repository)."""
    return DocumentService(
        blob_store=blob_store,
        document_repo=document_repo,
        public_base_url=settings.public_base_url,
    )
