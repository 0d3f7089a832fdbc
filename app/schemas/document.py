"""Document API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentItem(BaseModel):
    """Entry of GET /documents."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Document id (UUID)")
    name: str = Field(..., description="Original filename as uploaded")
    url: str = Field(..., description="Absolute download URL")
    uploaded_at: datetime = Field(..., description="Upload time (UTC, RFC 3339)")
