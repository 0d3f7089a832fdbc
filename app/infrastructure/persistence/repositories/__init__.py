"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.document_repo import DocumentRepository

__all__ = ["DocumentRepository"]
