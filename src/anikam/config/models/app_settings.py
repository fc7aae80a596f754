"""Application and logging configuration models.

This module contains configuration models for application-level
settings and logging configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from anikam.shared.constants import Application

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AppSettings(BaseModel):
    """Application configuration."""

    name: str = Field(default=Application.NAME, description="Application name")
    version: str = Field(default=Application.VERSION, description="Application version")
    description: str = Field(
        default=Application.DESCRIPTION,
        description="Application description",
    )
    debug: bool = Field(default=False, description="Enable debug mode")


class LoggingSettings(BaseModel):
    """Logging configuration.

    This class manages logging behavior including level, file output,
    and console rendering.
    """

    level: str = Field(default="INFO", description="Logging level")
    file: str | None = Field(
        default=None,
        description="Optional JSON-lines log file path",
    )
    rich_console: bool = Field(
        default=True,
        description="Render console logs with rich instead of JSON",
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"Invalid log level: {value}. Expected one of {', '.join(_LOG_LEVELS)}"
            raise ValueError(msg)
        return level


__all__ = [
    "AppSettings",
    "LoggingSettings",
]
