"""Service status schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    service: str = "lakepath"
    mode: str = "dev"
