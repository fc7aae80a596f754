"""Services module for AniKam.

This module contains the Jikan API access layer: response caching, request
pacing, resilient fetching, normalization, fallback data and feeds.
"""

from .catalog_feeds import (
    ContentType,
    FeedState,
    MediaDetailsLoader,
    MediaSearchFeed,
    SeasonFeed,
    TopMediaFeed,
)
from .jikan_client import JikanClient
from .network_monitor import NetworkMonitor, NetworkStatus
from .request_scheduler import RequestScheduler
from .resilient_fetcher import ResilientFetcher
from .response_cache import ResponseCache

__all__ = [
    "ContentType",
    "FeedState",
    "JikanClient",
    "MediaDetailsLoader",
    "MediaSearchFeed",
    "NetworkMonitor",
    "NetworkStatus",
    "RequestScheduler",
    "ResilientFetcher",
    "ResponseCache",
    "SeasonFeed",
    "TopMediaFeed",
]
