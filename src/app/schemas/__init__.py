"""Pydantic schemas shared across the service.

Contains:
- ServiceFailure, ErrorCodes
- Record, ParsedList
- TextElement, RenderSettings, BatchSettings, BatchResult
- API request/response envelopes
"""

from app.schemas.api import (
    GenerateResponse,
    HealthStatus,
    PreviewResponse,
    ServiceStatus,
    UploadResponse,
)
from app.schemas.base import ErrorCodes, ListFormat, ServiceFailure
from app.schemas.records import ParsedList, Record
from app.schemas.render import BatchResult, BatchSettings, RenderSettings, TextElement


__all__ = [
    # Base
    "ServiceFailure",
    "ErrorCodes",
    "ListFormat",
    # Records
    "Record",
    "ParsedList",
    # Rendering
    "TextElement",
    "RenderSettings",
    "BatchSettings",
    "BatchResult",
    # API
    "ServiceStatus",
    "HealthStatus",
    "UploadResponse",
    "PreviewResponse",
    "GenerateResponse",
]
