"""SQLAlchemy ORM models. Importing this package registers tables on Base.metadata."""

from app.infrastructure.persistence.models.document import Document

__all__ = ["Document"]
