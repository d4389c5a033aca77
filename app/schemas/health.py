"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    storage_backend: str = Field(description="Configured storage backend (memory, file, sql)")
    storage: Literal["reachable", "unreachable"] | None = Field(
        default=None,
        description="Storage reachability when check is performed",
    )
