"""Bodies returned by the liveness and readiness routes."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health: the process is up and answering HTTP."""

    status: str = Field(
        default="ok",
        description="Always 'ok' while the upload service can serve requests",
    )


class ReadinessResponse(BaseModel):
    """GET /health/ready once the metadata database answers."""

    status: str = Field(
        default="ok",
        description="'ok' when SELECT 1 against the documents database succeeds",
    )


class ReadinessErrorResponse(BaseModel):
    """GET /health/ready body sent with 503 while uploads cannot be recorded."""

    status: str = Field(default="not_ready", description="Fixed 'not_ready' marker")
    message: str = Field(
        ..., description="Which dependency failed, e.g. 'Database unreachable'"
    )
