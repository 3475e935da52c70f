"""Application configuration powered by pydantic-settings."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOCAL_FRONTEND_ORIGIN = "http://localhost:5173"


class APISettings(BaseSettings):
    """Runtime configuration for the FastAPI application."""

    app_name: str = Field(default="Namster API", alias="APP_NAME")
    frontend_url: str = Field(
        default="",
        alias="FRONTEND_URL",
        description="Deployed web client origin allowed by CORS",
    )

    # Storage
    public_dir: Path = Field(
        default=Path("public"),
        alias="PUBLIC_DIR",
        description="Directory served as static files",
    )
    upload_dir: Path = Field(
        default=Path("uploads"),
        alias="UPLOAD_DIR",
        description="Where uploaded models and lists are stored",
    )
    work_dir: Path = Field(
        default=Path("work"),
        alias="WORK_DIR",
        description="Per-session render output and archives",
    )
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        alias="MAX_UPLOAD_BYTES",
        description="Largest accepted upload, per file",
    )

    # Rendering
    batch_limit: int = Field(
        default=50,
        alias="BATCH_LIMIT",
        description="Maximum invitations rendered per /api/generate call",
    )
    default_font_family: str = Field(default="Arial", alias="DEFAULT_FONT_FAMILY")
    default_font_size: int = Field(default=48, alias="DEFAULT_FONT_SIZE")

    # Sessions
    session_ttl_seconds: int = Field(
        default=3600,
        alias="SESSION_TTL_SECONDS",
        description="Idle sessions older than this are removed with their files",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="NAMSTER_",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("batch_limit", "max_upload_bytes", "default_font_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate sizes and limits are positive."""
        if v <= 0:
            raise ValueError(f"Value must be positive, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the log level is one the logging module knows."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def allowed_origins(self) -> list[str]:
        """Origins accepted by the CORS middleware."""
        return [origin for origin in (LOCAL_FRONTEND_ORIGIN, self.frontend_url) if origin]


@lru_cache(maxsize=1)
def get_settings() -> APISettings:
    """Return a cached settings instance."""

    return APISettings()
