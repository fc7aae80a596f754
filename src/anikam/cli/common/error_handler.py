"""
CLI Error Handling Utilities

This module provides utilities for consistent error handling across CLI commands,
including standardized error output formatting and exception mapping.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from anikam.cli.json_formatter import format_json_output, write_json_output
from anikam.shared.errors import (
    AniKamError,
    CliError,
    DomainError,
    UpstreamError,
    create_cli_error,
)

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context: dict[str, Any] = {
        "command": command,
        "error_type": type(error).__name__,
    }
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)

    if json_output:
        write_json_output(
            format_json_output(
                success=False,
                command=command,
                data={
                    "error_code": error_context.get("error_code", cli_error.code.value),
                    "error_type": type(error).__name__,
                    "exit_code": cli_error.exit_code,
                },
                errors=[cli_error.message],
            )
        )
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")

    return cli_error.exit_code


def _map_error_to_cli_error(
    error: BaseException,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    # Upstream and validation messages are already worded for end users
    if isinstance(error, (UpstreamError, DomainError)):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
        )

    if isinstance(error, AniKamError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Application error: {error.message}",
            command=command,
            original_error=error,
        )

    if isinstance(error, KeyboardInterrupt):
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            exit_code=EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error if isinstance(error, Exception) else None,
    )


def _log_error(
    error: BaseException,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context.

    Known errors are logged without a traceback; anything else is a bug
    and keeps it.
    """
    if isinstance(error, (AniKamError, KeyboardInterrupt)):
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )
    else:
        logger.error(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
            exc_info=error,
        )
