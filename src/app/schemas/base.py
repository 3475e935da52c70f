"""Base schemas and shared models.

Holds the standard failure payload returned by every component and the
error codes it may carry.
"""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ServiceFailure(BaseModel):
    """Standardized error object for component failures."""

    component: str
    error_code: str
    message: str
    recoverable: bool = False
    details: dict[str, Any] | None = None
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorCodes:
    """Standard error codes for service failures."""

    # Sessions
    SESSION_INVALID = "ERR_SESSION_INVALID"

    # Uploads
    UPLOAD_MISSING_FILE = "ERR_UPLOAD_MISSING_FILE"
    UPLOAD_TOO_LARGE = "ERR_UPLOAD_TOO_LARGE"

    # Rendering
    RENDER_UNSUPPORTED_MODEL = "ERR_RENDER_UNSUPPORTED_MODEL"
    RENDER_INVALID_MODEL = "ERR_RENDER_INVALID_MODEL"

    # Archive
    ARCHIVE_NOT_FOUND = "ERR_ARCHIVE_NOT_FOUND"

    # General
    INTERNAL = "ERR_INTERNAL"


# Type aliases for common literals
ListFormat = Literal["text", "csv", "spreadsheet", "docx", "pdf"]
