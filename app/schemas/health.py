"""Schema for the health endpoint."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness plus a database round-trip check (SELECT 1)."""

    status: Literal["ok", "degraded"] = Field(
        description="'degraded' when the database cannot be reached"
    )
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"]
