"""
CLI Context Management Module

Holds the global options parsed by the main callback so that commands can
read them. Stored in a ContextVar.
"""

from __future__ import annotations

import contextvars
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """Log level enumeration for type safety."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class CliContext(BaseModel):
    """
    CLI context model for managing global state.

    Attributes:
        log_level: Logging level
        config_path: Optional TOML configuration file
    """

    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Logging level")
    config_path: Path | None = Field(default=None, description="Configuration file")


_cli_context: contextvars.ContextVar[CliContext | None] = contextvars.ContextVar(
    "cli_context",
    default=None,
)


def set_cli_context(context: CliContext) -> None:
    _cli_context.set(context)


def get_cli_context() -> CliContext:
    """Return the current context, or defaults when no callback ran."""
    return _cli_context.get() or CliContext()
