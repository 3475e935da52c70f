"""API-specific schemas for FastAPI routes.

Responses serialize with the camelCase keys the web client expects.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ServiceStatus(BaseModel):
    """Response body for the root endpoint."""

    status: Literal["ok"] = "ok"
    service: str


class HealthStatus(BaseModel):
    """Response body for the /health endpoint."""

    status: Literal["ok", "degraded"]
    sessions: int


class UploadResponse(_CamelModel):
    """Acknowledgement returned by /api/upload."""

    session_id: str
    names_total: int


class PreviewResponse(_CamelModel):
    """A single rendered invitation as a data URL."""

    preview: str


class GenerateResponse(_CamelModel):
    """Progress of a batch generation request."""

    download_url: str
    processed: int
    total: int
