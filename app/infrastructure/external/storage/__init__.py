"""Storage: local filesystem blob store.

LocalBlobStore implements IBlobStore (put, get, size, exists, iter_blobs,
delete). Blobs are plain files named by document id under storage_root.
"""

from app.infrastructure.external.storage.local_storage import (
    LocalBlobStore,
    LocalBlobStream,
)

__all__ = [
    "LocalBlobStore",
    "LocalBlobStream",
]
