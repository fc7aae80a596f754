"""API configuration models (Jikan, connectivity probe).

This module contains configuration models for the upstream Jikan API
and for the network monitor's liveness probe.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from anikam.shared.constants import JikanAPIConfig, NetworkMonitorConfig


class JikanSettings(BaseModel):
    """Jikan API configuration.

    Pacing, per-attempt timeout and retry backoff for the upstream API.
    All durations are in seconds.
    """

    base_url: str = Field(
        default=JikanAPIConfig.BASE_URL,
        description="Jikan API base URL",
    )
    user_agent: str = Field(
        default=JikanAPIConfig.USER_AGENT,
        description="User-Agent header sent with every request",
    )

    # Request settings
    timeout: float = Field(
        default=JikanAPIConfig.REQUEST_TIMEOUT,
        gt=0,
        description="Per-attempt request timeout in seconds",
    )

    # Retry settings
    retry_attempts: int = Field(
        default=JikanAPIConfig.RETRY_ATTEMPTS,
        ge=1,
        description="Number of attempts per logical request",
    )
    rate_limit_backoff_base: float = Field(
        default=JikanAPIConfig.RATE_LIMIT_BACKOFF_BASE,
        ge=0,
        description="Base delay after a 429 answer, doubled per attempt",
    )
    rate_limit_backoff_max: float = Field(
        default=JikanAPIConfig.RATE_LIMIT_BACKOFF_MAX,
        ge=0,
        description="Upper bound of the 429 delay",
    )
    http_error_backoff: float = Field(
        default=JikanAPIConfig.HTTP_ERROR_BACKOFF,
        ge=0,
        description="Delay after an HTTP error, multiplied by attempt number",
    )
    network_error_backoff: float = Field(
        default=JikanAPIConfig.NETWORK_ERROR_BACKOFF,
        ge=0,
        description="Delay after a network failure, multiplied by attempt number",
    )

    # Rate limiting settings
    min_request_interval: float = Field(
        default=JikanAPIConfig.MIN_REQUEST_INTERVAL,
        ge=0,
        description="Minimum spacing between request dispatches in seconds",
    )
    max_queue_depth: int | None = Field(
        default=None,
        description="Maximum number of queued requests (unbounded when unset)",
    )

    @field_validator("max_queue_depth")
    @classmethod
    def _positive_depth(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("max_queue_depth must be positive")
        return value


class NetworkMonitorSettings(BaseModel):
    """Connectivity probe configuration."""

    probe_url: str = Field(
        default=NetworkMonitorConfig.PROBE_URL,
        description="URL probed with HEAD requests",
    )
    probe_interval: float = Field(
        default=NetworkMonitorConfig.PROBE_INTERVAL,
        gt=0,
        description="Seconds between periodic probes",
    )
    probe_timeout: float = Field(
        default=NetworkMonitorConfig.PROBE_TIMEOUT,
        gt=0,
        description="Probe timeout in seconds",
    )
    slow_threshold: float = Field(
        default=NetworkMonitorConfig.SLOW_CONNECTION_THRESHOLD,
        gt=0,
        description="Probe round trip above which the connection counts as slow",
    )


class APISettings(BaseModel):
    """API configuration container.

    Note: Environment variable loading is handled by the parent Settings class.
    """

    jikan: JikanSettings = Field(
        default_factory=JikanSettings,
        description="Jikan API configuration",
    )
    network: NetworkMonitorSettings = Field(
        default_factory=NetworkMonitorSettings,
        description="Connectivity probe configuration",
    )


__all__ = [
    "APISettings",
    "JikanSettings",
    "NetworkMonitorSettings",
]
