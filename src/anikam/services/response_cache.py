"""In-memory response cache with TTL.

This module provides the time-boxed key to response memo used by the
Jikan client so that repeated queries within the TTL window never reach
the request scheduler or the upstream.
"""

from __future__ import annotations

import copy
import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable

from anikam.shared.constants import Cache
from anikam.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """One cached response.

    Attributes:
        key: Full endpoint plus query string
        value: Parsed response body
        timestamp: Monotonic instant the entry was written
    """

    key: str
    value: Any
    timestamp: float

    def is_valid(self, now: float, ttl: float) -> bool:
        return now - self.timestamp < ttl


class ResponseCache:
    """Time-boxed response memo with lazy eviction.

    An entry is valid while ``now - timestamp < ttl``. Expired entries are
    treated as absent and removed by the lookup that finds them; there is
    no background sweep. ``set`` always overwrites.

    Values are deep-copied on the way in and on the way out, so a caller
    editing a returned response never changes later hits.

    The cache is unbounded by default. Passing ``max_entries`` enables
    least-recently-used eviction once the bound is reached.

    Args:
        ttl: Entry time-to-live in seconds (default: 300)
        max_entries: Optional size bound enabling LRU eviction
        clock: Monotonic clock returning seconds (default: time.monotonic)

    Example:
        >>> cache = ResponseCache(ttl=300)
        >>> cache.set("/anime?q=naruto", {"data": []})
        >>> cache.get("/anime?q=naruto")
        {'data': []}
    """

    def __init__(
        self,
        ttl: float = Cache.TTL,
        max_entries: int | None = Cache.MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ApplicationError(
                code=ErrorCode.CONFIG_INVALID,
                message=f"Cache TTL must be positive, got: {ttl}",
                context=ErrorContext(
                    operation="response_cache_init",
                    additional_data={"ttl": ttl},
                ),
            )
        if max_entries is not None and max_entries <= 0:
            raise ApplicationError(
                code=ErrorCode.CONFIG_INVALID,
                message=f"Cache max_entries must be positive, got: {max_entries}",
                context=ErrorContext(
                    operation="response_cache_init",
                    additional_data={"max_entries": max_entries},
                ),
            )

        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        """Return the cached value for ``key`` or None when absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if not entry.is_valid(self._clock(), self.ttl):
            del self._entries[key]
            self._misses += 1
            logger.debug("Cache entry expired: %s", key)
            return None

        if self.max_entries is not None:
            self._entries.move_to_end(key)
        self._hits += 1
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        self._entries[key] = CacheEntry(
            key=key,
            value=copy.deepcopy(value),
            timestamp=self._clock(),
        )
        self._entries.move_to_end(key)

        if self.max_entries is not None:
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache entry evicted (LRU): %s", evicted)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def stats(self) -> dict[str, int]:
        """Return hit, miss and size counters."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "size": len(self._entries),
        }

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        entry = self._entries.get(key)
        return entry is not None and entry.is_valid(self._clock(), self.ttl)

    def __len__(self) -> int:
        return len(self._entries)
