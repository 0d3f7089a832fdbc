"""Pydantic request/response schemas for the API."""

from app.schemas.document import DocumentItem
from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

__all__ = [
    "DocumentItem",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
]
