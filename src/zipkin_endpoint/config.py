"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration from
environment variables and a `.env` file. The settings only steer the
command-line front end (logging level, fallback service name, JSON layout);
the endpoint model itself takes no configuration.

The `get_settings` function provides a cached, singleton instance of the
configuration.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict


class Settings(BaseSettings):
    """Defines all application configuration parameters."""

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DEFAULT_SERVICE_NAME: str = Field(
        default="",
        description=(
            "Service name used by the CLI when --service is omitted. "
            "Blank means unknown; 'unknown' is the conventional explicit value."
        ),
    )
    PRETTY_JSON: bool = Field(
        default=False, description="Indent JSON printed by the CLI"
    )

    @field_validator("DEFAULT_SERVICE_NAME", mode="before")
    @classmethod
    def strip_service_name(cls, v: Any) -> str:
        """Trim whitespace; a missing or blank value becomes ``""``."""
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return str(v)

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def upper_log_level(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip():
            return v.strip().upper()
        return "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
