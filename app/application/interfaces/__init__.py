"""Application interfaces (ports): repository and storage protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import IDocumentRepository
from app.application.interfaces.storage import BlobStream, IBlobStore

__all__ = [
    "BlobStream",
    "IBlobStore",
    "IDocumentRepository",
]
