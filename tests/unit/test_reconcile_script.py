"""Tests for the reconcile_storage command (exit status and printed report)."""

import io
import os
import time

import pytest

from app.core.config import Settings
from app.infrastructure.external.storage import LocalBlobStore
from app.infrastructure.persistence.repositories import DocumentRepository
from app.shared.utils.datetime import utc_now
from scripts import reconcile_storage

RECORDED = "11111111-1111-4111-8111-111111111111"
ORPHAN = "22222222-2222-4222-8222-222222222222"
MISSING = "44444444-4444-4444-8444-444444444444"


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    # Root handlers bound to the captured stdout would outlive the test.
    monkeypatch.setattr(reconcile_storage, "setup_logging", lambda settings: None)


async def _put_old(blob_store: LocalBlobStore, blob_id: str) -> None:
    await blob_store.put(blob_id, io.BytesIO(b"bytes"))
    two_hours_ago = time.time() - 7200
    os.utime(blob_store.storage_root / blob_id, (two_hours_ago, two_hours_ago))


async def test_consistent_storage_exits_zero(
    settings: Settings,
    blob_store: LocalBlobStore,
    document_repo: DocumentRepository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    await _put_old(blob_store, RECORDED)
    await document_repo.insert(RECORDED, "a.txt", utc_now())

    status = await reconcile_storage.main([], settings)

    assert status == 0
    out = capsys.readouterr().out
    assert "Done. Orphaned: 0, deleted: 0, missing: 0, skipped (recent): 0" in out


async def test_drift_is_reported_and_exits_one(
    settings: Settings,
    blob_store: LocalBlobStore,
    document_repo: DocumentRepository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    await _put_old(blob_store, ORPHAN)
    await document_repo.insert(MISSING, "gone.txt", utc_now())

    status = await reconcile_storage.main([], settings)

    assert status == 1
    out = capsys.readouterr().out
    assert f"orphaned: {ORPHAN}" in out
    assert f"missing blob: {MISSING}" in out
    assert "Done. Orphaned: 1, deleted: 0, missing: 1, skipped (recent): 0" in out
    assert await blob_store.exists(ORPHAN)


async def test_delete_orphans_clears_drift(
    settings: Settings,
    blob_store: LocalBlobStore,
    document_repo: DocumentRepository,
    capsys: pytest.CaptureFixture[str],
) -> None:
    await _put_old(blob_store, ORPHAN)
    await blob_store.put(RECORDED, io.BytesIO(b"recent"))

    status = await reconcile_storage.main(["--delete-orphans"], settings)

    assert status == 0
    out = capsys.readouterr().out
    assert f"deleted: {ORPHAN}" in out
    assert "Done. Orphaned: 1, deleted: 1, missing: 0, skipped (recent): 1" in out
    assert not await blob_store.exists(ORPHAN)
    assert await blob_store.exists(RECORDED)
