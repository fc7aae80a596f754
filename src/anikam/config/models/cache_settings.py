"""Cache configuration model.

This module contains the cache configuration model for the in-memory
response cache.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from anikam.shared.constants import Cache


class CacheSettings(BaseModel):
    """Cache configuration.

    ``max_entries`` left unset keeps the cache unbounded; setting it
    enables least-recently-used eviction for long-lived processes.
    """

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl: float = Field(
        default=Cache.TTL,
        gt=0,
        description="Cache time-to-live in seconds",
    )
    max_entries: int | None = Field(
        default=Cache.MAX_ENTRIES,
        description="Maximum number of cached responses (unbounded when unset)",
    )

    @field_validator("max_entries")
    @classmethod
    def _positive_size(cls, value: int | None) -> int | None:
        if value is not None and value <= 0:
            raise ValueError("max_entries must be positive")
        return value


__all__ = [
    "CacheSettings",
]
