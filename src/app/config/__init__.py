"""Configuration management using pydantic-settings."""

from app.config.settings import APISettings, get_settings

__all__ = ["APISettings", "get_settings"]
