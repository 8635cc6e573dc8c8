"""Common schemas used across multiple API endpoints."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness of the service and its stores.

    Attributes:
        status: "healthy" when every check passed, else "degraded".
        version: Application version.
        checks: Per-dependency status ("ok" or "unavailable").
    """

    status: str = Field(..., examples=["healthy"])
    version: str
    checks: dict[str, str] = Field(default_factory=dict)
