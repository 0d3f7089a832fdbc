"""Local filesystem blob store with path validation and atomic publication."""

from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, BinaryIO

import aiofiles
import aiofiles.os

from app.application.dtos.document import BlobInfo
from app.infrastructure.exceptions import (
    StorageDeleteError,
    StorageNotFoundError,
    StoragePermissionError,
    StorageReadError,
    StorageWriteError,
)
from app.shared.utils.datetime import from_timestamp_utc

TEMP_PREFIX = ".tmp_"


class LocalBlobStream:
    """Chunked async reader over an already-open blob file.

    Iterating yields CHUNK_SIZE pieces and closes the file at EOF; callers
    that stop early must call aclose().
    """

    def __init__(self, handle: Any, blob_id: str, chunk_size: int) -> None:
        self._handle = handle
        self._blob_id = blob_id
        self._chunk_size = chunk_size
        self._closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            while True:
                try:
                    chunk = await self._handle.read(self._chunk_size)
                except OSError as e:
                    raise StorageReadError(self._blob_id, str(e)) from e
                if not chunk:
                    break
                yield chunk
        finally:
            await self.aclose()

    async def read_all(self) -> bytes:
        """Drain the stream into memory (tests and small blobs)."""
        return b"".join([chunk async for chunk in self])

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._handle.close()


class LocalBlobStore:
    """Blob store keeping one file per blob id directly under storage_root.

    Writes go to a temp file in the same directory, are fsynced, then
    hard-linked to the final name, so a blob is either absent or complete
    and an existing id is never overwritten.
    """

    CHUNK_SIZE = 64 * 1024  # 64KB

    def __init__(self, storage_root: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all blobs; created if missing.
        """
        self.storage_root = Path(storage_root).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, blob_id: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / blob_id).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(blob_id, "path_validation") from e
        if full_path == self.storage_root or full_path.name.startswith(TEMP_PREFIX):
            raise StoragePermissionError(blob_id, "path_validation")
        return full_path

    async def put(self, blob_id: str, file_data: BinaryIO) -> int:
        """Copy file_data to the blob named blob_id. Returns bytes written.

        Every blocking call (temp file creation, source reads, fsync, link)
        runs in a worker thread so large uploads do not stall the event loop.
        """
        target_path = self._get_full_path(blob_id)
        try:
            temp_fd, temp_path = await asyncio.to_thread(
                tempfile.mkstemp, dir=self.storage_root, prefix=TEMP_PREFIX
            )
            await asyncio.to_thread(os.close, temp_fd)
        except OSError as e:
            raise StorageWriteError(blob_id, str(e)) from e
        written = 0
        try:
            async with aiofiles.open(temp_path, "wb") as f:
                while True:
                    chunk = await asyncio.to_thread(file_data.read, self.CHUNK_SIZE)
                    if not chunk:
                        break
                    await f.write(chunk)
                    written += len(chunk)
                await f.flush()
                await asyncio.to_thread(os.fsync, f.fileno())
            await asyncio.to_thread(os.chmod, temp_path, 0o640)
            await aiofiles.os.link(temp_path, target_path)
        except FileExistsError as e:
            raise StorageWriteError(blob_id, "blob already exists") from e
        except OSError as e:
            raise StorageWriteError(blob_id, str(e)) from e
        finally:
            try:
                await aiofiles.os.remove(temp_path)
            except FileNotFoundError:
                pass
        return written

    async def get(self, blob_id: str) -> LocalBlobStream:
        """Open blob for streaming. The file is opened before returning."""
        file_path = self._get_full_path(blob_id)
        try:
            handle = await aiofiles.open(file_path, "rb")
        except FileNotFoundError as e:
            raise StorageNotFoundError(blob_id) from e
        except OSError as e:
            raise StorageReadError(blob_id, str(e)) from e
        return LocalBlobStream(handle, blob_id, self.CHUNK_SIZE)

    async def size(self, blob_id: str) -> int:
        """Return blob length in bytes."""
        file_path = self._get_full_path(blob_id)
        try:
            stat = await aiofiles.os.stat(file_path)
        except FileNotFoundError as e:
            raise StorageNotFoundError(blob_id) from e
        except OSError as e:
            raise StorageReadError(blob_id, str(e)) from e
        return stat.st_size

    async def exists(self, blob_id: str) -> bool:
        """Return True if blob exists."""
        try:
            return await aiofiles.os.path.isfile(self._get_full_path(blob_id))
        except StoragePermissionError:
            return False

    async def iter_blobs(self) -> AsyncIterator[BlobInfo]:
        """Yield every published blob; in-flight temp files are skipped."""
        with os.scandir(self.storage_root) as entries:
            for entry in entries:
                if entry.name.startswith(TEMP_PREFIX) or not entry.is_file():
                    continue
                stat = entry.stat()
                yield BlobInfo(
                    id=entry.name,
                    size=stat.st_size,
                    modified_at=from_timestamp_utc(stat.st_mtime),
                )

    async def delete(self, blob_id: str) -> bool:
        """Delete blob. Returns True if deleted."""
        file_path = self._get_full_path(blob_id)
        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageDeleteError(blob_id, str(e)) from e
        return True
