"""AniKam Error Handling Module

This module defines the error handling system for AniKam, providing
structured error classes with context information and user-friendly messages.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Tagged Upstream Failures: FetchErrorKind classifies every failed API call
- Proper Exception Chaining: Original exceptions are preserved
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for AniKam application.

    This enum serves as the single source of truth for all error codes
    used throughout the application.
    """

    # Network and API Errors
    NETWORK_ERROR = "NETWORK_ERROR"
    API_RATE_LIMIT = "API_RATE_LIMIT"
    API_REQUEST_FAILED = "API_REQUEST_FAILED"
    API_TIMEOUT = "API_TIMEOUT"
    API_INVALID_RESPONSE = "API_INVALID_RESPONSE"

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_METADATA = "INVALID_METADATA"

    # Configuration Errors
    CONFIG_ERROR = "CONFIG_ERROR"
    CONFIG_INVALID = "CONFIG_INVALID"
    FILE_READ_ERROR = "FILE_READ_ERROR"

    # Scheduling Errors
    QUEUE_FULL = "QUEUE_FULL"
    SCHEDULER_CLOSED = "SCHEDULER_CLOSED"

    # CLI Errors
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


class FetchErrorKind(str, Enum):
    """Closed set of failure kinds produced by the resilient fetcher.

    Downstream logic (retry policy, user messages, fallback policy)
    switches on this tag instead of inspecting message text.
    """

    RATE_LIMITED = "rate_limited"
    NETWORK_FAILURE = "network_failure"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PARSE_ERROR = "parse_error"


_KIND_TO_CODE: dict[FetchErrorKind, ErrorCode] = {
    FetchErrorKind.RATE_LIMITED: ErrorCode.API_RATE_LIMIT,
    FetchErrorKind.NETWORK_FAILURE: ErrorCode.NETWORK_ERROR,
    FetchErrorKind.TIMEOUT: ErrorCode.API_TIMEOUT,
    FetchErrorKind.HTTP_ERROR: ErrorCode.API_REQUEST_FAILED,
    FetchErrorKind.PARSE_ERROR: ErrorCode.API_INVALID_RESPONSE,
}


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Converts Path, Enum, Decimal to primitive types.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Path):
            coerced[key] = str(val)
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, Decimal):
            coerced[key] = float(val)
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, Path, Enum, Decimal are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data to ensure safe serialization in structured logs.

    Attributes:
        endpoint: Optional upstream endpoint associated with the error
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    endpoint: str | None = None
    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export the context for structured logs.

        Unset fields are left out; ``additional_data`` is always present.

        Example:
            >>> ErrorContext(endpoint="/anime").safe_dict()
            {'endpoint': '/anime', 'additional_data': {}}
        """
        data: dict[str, Any] = {}
        if self.endpoint is not None:
            data["endpoint"] = self.endpoint
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = dict(self.additional_data or {})
        return data


class AniKamError(Exception):
    """Base exception class for all AniKam errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize AniKamError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        super().__init__(f"{code.value}: {message}")

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for structured logging."""
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class DomainError(AniKamError):
    """Domain-specific errors.

    Examples:
    - Unknown query parameter values
    - Upstream records that cannot be normalized
    """


class InfrastructureError(AniKamError):
    """Infrastructure-related errors (network, upstream API, files)."""


class ApplicationError(AniKamError):
    """Application-level errors (configuration, scheduling, CLI flow)."""


class UpstreamError(InfrastructureError):
    """Failure of a call to the upstream metadata API.

    Carries a FetchErrorKind tag, the HTTP status where one exists, and
    the message meant for end users. After retries are exhausted the
    resilient fetcher raises exactly one of these with ``message`` set
    to the user-facing text.
    """

    def __init__(
        self,
        kind: FetchErrorKind,
        message: str,
        *,
        status: int | None = None,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(_KIND_TO_CODE[kind], message, context, original_error)
        self.kind = kind
        self.status = status

    @property
    def user_message(self) -> str:
        """Message suitable for showing to an end user."""
        return self.message

    @property
    def is_network(self) -> bool:
        """Whether this failure is a connectivity problem rather than an API answer."""
        return self.kind in (FetchErrorKind.NETWORK_FAILURE, FetchErrorKind.TIMEOUT)

    @property
    def is_rate_limited(self) -> bool:
        return self.kind is FetchErrorKind.RATE_LIMITED

    def with_message(self, message: str) -> UpstreamError:
        """Return a copy of this error carrying a different message."""
        return UpstreamError(
            self.kind,
            message,
            status=self.status,
            context=self.context,
            original_error=self.original_error or self,
        )

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["kind"] = self.kind.value
        data["status"] = self.status
        return data


class CliError(ApplicationError):
    """CLI-specific error with an exit code."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


# Convenience functions for common error scenarios
def create_validation_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> DomainError:
    """Create a validation error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return DomainError(
        ErrorCode.VALIDATION_ERROR,
        message,
        context,
        original_error,
    )


def create_metadata_error(
    message: str,
    field: str | None = None,
    operation: str | None = None,
) -> DomainError:
    """Create an invalid-metadata error for records that cannot be normalized."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"field": field} if field else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return DomainError(ErrorCode.INVALID_METADATA, message, context)


def create_config_error(
    message: str,
    config_key: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
) -> ApplicationError:
    """Create a configuration error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"config_key": config_key} if config_key else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return ApplicationError(
        ErrorCode.CONFIG_ERROR,
        message,
        context,
        original_error,
    )


def create_upstream_error(
    kind: FetchErrorKind,
    message: str,
    endpoint: str,
    *,
    status: int | None = None,
    attempt: int | None = None,
    original_error: Exception | None = None,
) -> UpstreamError:
    """Create an upstream API error with endpoint context."""
    additional_data: dict[str, PrimitiveContextValue] = {}
    if status is not None:
        additional_data["status"] = status
    if attempt is not None:
        additional_data["attempt"] = attempt
    context = ErrorContext(
        endpoint=endpoint,
        operation="fetch_json",
        additional_data=additional_data or None,
    )
    return UpstreamError(
        kind,
        message,
        status=status,
        context=context,
        original_error=original_error,
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation="cli",
        additional_data=additional_data,
    )
    return CliError(
        ErrorCode.CLI_UNEXPECTED_ERROR,
        message,
        context,
        original_error,
        command,
        exit_code,
    )
