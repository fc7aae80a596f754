"""Cache configuration constants."""

from .system import BASE_MINUTE


class Cache:
    """Response cache defaults."""

    TTL = 5 * BASE_MINUTE  # seconds
    MAX_ENTRIES = None  # unbounded; set a value to enable LRU eviction
