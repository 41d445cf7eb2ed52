"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="APP_ENV the service runs with (dev or prod)")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the users and refresh_credentials database is reachable",
    )
