"""Pytest configuration and fixtures for upload-service.

Every test gets its own SQLite (aiosqlite) database file and blob directory
under tmp_path, so tests run without Postgres. The HTTP client talks to an
app built by create_app() with those stores placed on app.state directly
(ASGITransport does not run the lifespan).
"""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from app.application.use_cases.documents import DocumentService
from app.core.config import Settings
from app.infrastructure.external.storage import LocalBlobStore
from app.infrastructure.persistence.database import Database
from app.infrastructure.persistence.repositories import DocumentRepository
from app.main import create_app

PUBLIC_BASE_URL = "http://localhost:8080"
MAX_UPLOAD_SIZE = 1024 * 1024


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a per-test SQLite file and upload directory."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'documents.db'}",
        storage_root=str(tmp_path / "uploads"),
        public_base_url=PUBLIC_BASE_URL,
        max_upload_size=MAX_UPLOAD_SIZE,
        db_connect_attempts=1,
        db_connect_retry_delay_seconds=0,
    )


@pytest.fixture
async def database(settings: Settings) -> AsyncIterator[Database]:
    """Database with the documents table created; disposed after the test."""
    db = Database.from_settings(settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest.fixture
def blob_store(settings: Settings) -> LocalBlobStore:
    return LocalBlobStore(settings.storage_root)


@pytest.fixture
def document_repo(database: Database) -> DocumentRepository:
    return DocumentRepository(database)


@pytest.fixture
def document_service(
    blob_store: LocalBlobStore, document_repo: DocumentRepository
) -> DocumentService:
    return DocumentService(blob_store, document_repo, PUBLIC_BASE_URL)


@pytest.fixture
def app(settings: Settings, database: Database, blob_store: LocalBlobStore):
    """FastAPI app wired to the per-test stores."""
    application = create_app(settings)
    application.state.database = database
    application.state.blob_store = blob_store
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
