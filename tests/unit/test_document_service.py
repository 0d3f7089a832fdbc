"""Tests for DocumentService (ingest ordering, orphan logging, fetch resolution)."""

import io
import logging
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from app.application.dtos.document import DocumentRecord
from app.application.use_cases.documents import DocumentService
from app.domain.exceptions import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    MalformedRequestException,
)
from app.infrastructure.exceptions import MetadataStoreError, StorageWriteError
from app.infrastructure.external.storage import LocalBlobStore

BASE_URL = "http://localhost:8080"
UPLOADED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


def _echo_insert() -> AsyncMock:
    """Repository insert that returns what it was given."""

    async def insert(document_id: str, name: str, uploaded_at: datetime) -> DocumentRecord:
        return DocumentRecord(id=document_id, name=name, uploaded_at=uploaded_at)

    return AsyncMock(side_effect=insert)


@pytest.fixture
def store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(str(tmp_path / "blobs"))


@pytest.fixture
def repo() -> AsyncMock:
    repo = AsyncMock()
    repo.insert = _echo_insert()
    return repo


@pytest.fixture
def service(store: LocalBlobStore, repo: AsyncMock) -> DocumentService:
    return DocumentService(store, repo, BASE_URL + "/")


async def test_ingest_writes_blob_then_record(
    service: DocumentService, store: LocalBlobStore, repo: AsyncMock
) -> None:
    result = await service.ingest("report.txt", io.BytesIO(b"hello"))
    assert result.name == "report.txt"
    assert result.url == f"{BASE_URL}/dl/{result.id}"
    assert len(result.id) == 36
    assert result.uploaded_at.tzinfo is not None
    repo.insert.assert_awaited_once()
    args = repo.insert.await_args.args
    assert args[0] == result.id
    assert args[1] == "report.txt"
    assert await store.size(result.id) == 5


async def test_ingest_generates_distinct_ids(service: DocumentService) -> None:
    first = await service.ingest("a.txt", io.BytesIO(b"same"))
    second = await service.ingest("a.txt", io.BytesIO(b"same"))
    assert first.id != second.id


@pytest.mark.parametrize("filename", ["", "   "])
async def test_ingest_rejects_empty_filename(
    service: DocumentService, store: LocalBlobStore, repo: AsyncMock, filename: str
) -> None:
    with pytest.raises(MalformedRequestException):
        await service.ingest(filename, io.BytesIO(b"data"))
    repo.insert.assert_not_awaited()
    assert [b async for b in store.iter_blobs()] == []


async def test_ingest_blob_failure_writes_no_record(repo: AsyncMock) -> None:
    store = AsyncMock()
    store.put.side_effect = StorageWriteError("x", "disk full")
    service = DocumentService(store, repo, BASE_URL)
    with pytest.raises(StorageWriteError):
        await service.ingest("a.txt", io.BytesIO(b"data"))
    repo.insert.assert_not_awaited()


@pytest.mark.parametrize(
    "error",
    [MetadataStoreError("insert", "connection reset"), DuplicateDocumentException("x")],
)
async def test_ingest_record_failure_logs_orphan(
    service: DocumentService,
    store: LocalBlobStore,
    repo: AsyncMock,
    caplog: pytest.LogCaptureFixture,
    error: Exception,
) -> None:
    repo.insert.side_effect = error
    with caplog.at_level(logging.ERROR):
        with pytest.raises(type(error)):
            await service.ingest("a.txt", io.BytesIO(b"data"))
    blobs = [b async for b in store.iter_blobs()]
    assert len(blobs) == 1
    orphan_logs = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert any(blobs[0].id in r.getMessage() for r in orphan_logs)


async def test_list_documents_adds_urls(service: DocumentService, repo: AsyncMock) -> None:
    repo.list_all.return_value = [
        DocumentRecord(id="id-1", name="a.txt", uploaded_at=UPLOADED_AT),
        DocumentRecord(id="id-2", name="b.txt", uploaded_at=UPLOADED_AT),
    ]
    results = await service.list_documents()
    assert [r.url for r in results] == [f"{BASE_URL}/dl/id-1", f"{BASE_URL}/dl/id-2"]


async def test_list_documents_empty(service: DocumentService, repo: AsyncMock) -> None:
    repo.list_all.return_value = []
    assert await service.list_documents() == []


@pytest.mark.parametrize("bad_id", ["not-a-uuid", "", "../etc/passwd"])
async def test_fetch_malformed_id_touches_no_store(bad_id: str) -> None:
    store = AsyncMock()
    repo = AsyncMock()
    service = DocumentService(store, repo, BASE_URL)
    with pytest.raises(DocumentNotFoundException):
        await service.fetch(bad_id)
    repo.find_name_by_id.assert_not_awaited()
    store.get.assert_not_awaited()


async def test_fetch_unknown_record_skips_blob_store() -> None:
    store = AsyncMock()
    repo = AsyncMock()
    repo.find_name_by_id.side_effect = DocumentNotFoundException("x")
    service = DocumentService(store, repo, BASE_URL)
    with pytest.raises(DocumentNotFoundException):
        await service.fetch("00000000-0000-0000-0000-000000000000")
    store.get.assert_not_awaited()


async def test_fetch_returns_name_stream_and_size(
    service: DocumentService, repo: AsyncMock
) -> None:
    created = await service.ingest("report.txt", io.BytesIO(b"hello"))
    repo.find_name_by_id.return_value = "report.txt"
    download = await service.fetch(created.id.upper())
    repo.find_name_by_id.assert_awaited_once_with(created.id)
    assert download.filename == "report.txt"
    assert download.size == 5
    assert await download.stream.read_all() == b"hello"


async def test_fetch_record_without_blob_logs_warning(
    service: DocumentService, repo: AsyncMock, caplog: pytest.LogCaptureFixture
) -> None:
    document_id = "6f1c2b1e-0d3a-4c59-8f0e-2b7d9a1c4e55"
    repo.find_name_by_id.return_value = "gone.txt"
    with caplog.at_level(logging.WARNING):
        with pytest.raises(DocumentNotFoundException):
            await service.fetch(document_id)
    assert any(
        r.levelno == logging.WARNING and document_id in r.getMessage()
        for r in caplog.records
    )
