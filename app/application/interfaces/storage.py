"""Blob storage interfaces (ports) for the application layer.

The blob store is a flat identifier -> bytes map. It knows nothing about
filenames or metadata rows; the document service keeps the two in sync.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, BinaryIO, Protocol

if TYPE_CHECKING:
    from app.application.dtos.document import BlobInfo


class BlobStream(Protocol):
    """Open read stream over one blob, positioned at byte 0."""

    def __aiter__(self) -> AsyncIterator[bytes]:
        """Yield the blob content in chunks; closes the stream when exhausted."""
        ...

    async def aclose(self) -> None:
        """Release the underlying file handle. Safe to call twice."""
        ...


class IBlobStore(Protocol):
    """Protocol for durable blob storage addressed by document id (DIP)."""

    async def put(self, blob_id: str, file_data: BinaryIO) -> int:
        """Write the full stream under blob_id; return bytes written.

        Raises StorageWriteError on medium failure or if blob_id is taken.
        """
        ...

    async def get(self, blob_id: str) -> BlobStream:
        """Open blob_id for reading. Raises StorageNotFoundError if absent."""
        ...

    async def size(self, blob_id: str) -> int:
        """Return byte length. Raises StorageNotFoundError if absent."""
        ...

    async def exists(self, blob_id: str) -> bool:
        """Return True if a blob is stored under blob_id."""
        ...

    def iter_blobs(self) -> AsyncIterator[BlobInfo]:
        """Enumerate stored blobs (reconciliation only)."""
        ...

    async def delete(self, blob_id: str) -> bool:
        """Remove a blob (out-of-band administration only). True if removed."""
        ...
