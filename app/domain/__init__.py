"""Domain layer: exceptions shared by every other layer.

No dependencies on infrastructure or presentation.
"""

from app.domain.exceptions import (
    DocumentNotFoundException,
    DuplicateDocumentException,
    MalformedRequestException,
    UploadServiceException,
)

__all__ = [
    "DocumentNotFoundException",
    "DuplicateDocumentException",
    "MalformedRequestException",
    "UploadServiceException",
]
