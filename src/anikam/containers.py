"""Dependency Injection container for AniKam.

This module provides a centralized DI container using dependency-injector
to manage service dependencies.

The container manages:
- Settings (Singleton)
- Response cache, network monitor and request scheduler (Singletons shared
  by every consumer)
- Resilient fetcher and Jikan client (Singletons)
- Feeds and the details loader (Factories, one per browsing surface)
"""

from __future__ import annotations

import logging

from dependency_injector import containers, providers

from anikam.config.loader import load_settings
from anikam.config.models.settings import Settings
from anikam.services import (
    JikanClient,
    MediaDetailsLoader,
    MediaSearchFeed,
    NetworkMonitor,
    RequestScheduler,
    ResilientFetcher,
    ResponseCache,
    SeasonFeed,
    TopMediaFeed,
)

logger = logging.getLogger(__name__)


def _build_cache(config: Settings) -> ResponseCache | None:
    if not config.cache.enabled:
        logger.debug("Response cache disabled by configuration")
        return None
    return ResponseCache(ttl=config.cache.ttl, max_entries=config.cache.max_entries)


class Container(containers.DeclarativeContainer):
    """Dependency Injection container for AniKam services.

    Example:
        >>> container = Container()
        >>> feed = container.top_media_feed()
        >>> state = await feed.load()
        >>> await shutdown(container)
    """

    # Configuration
    config = providers.Singleton(load_settings)

    # Shared state
    response_cache = providers.Singleton(_build_cache, config=config)

    network_monitor = providers.Singleton(
        NetworkMonitor,
        probe_url=config.provided.api.network.probe_url,
        probe_interval=config.provided.api.network.probe_interval,
        probe_timeout=config.provided.api.network.probe_timeout,
        slow_threshold=config.provided.api.network.slow_threshold,
    )

    request_scheduler = providers.Singleton(
        RequestScheduler,
        min_interval=config.provided.api.jikan.min_request_interval,
        max_queue_depth=config.provided.api.jikan.max_queue_depth,
    )

    # API access
    resilient_fetcher = providers.Singleton(
        ResilientFetcher,
        settings=config.provided.api.jikan,
        network_monitor=network_monitor,
    )

    jikan_client = providers.Singleton(
        JikanClient,
        fetcher=resilient_fetcher,
        scheduler=request_scheduler,
        cache=response_cache,
    )

    # Feeds
    search_feed = providers.Factory(
        MediaSearchFeed,
        client=jikan_client,
        network_monitor=network_monitor,
    )

    top_media_feed = providers.Factory(
        TopMediaFeed,
        client=jikan_client,
        network_monitor=network_monitor,
    )

    season_feed = providers.Factory(
        SeasonFeed,
        client=jikan_client,
        network_monitor=network_monitor,
    )

    details_loader = providers.Factory(
        MediaDetailsLoader,
        client=jikan_client,
        network_monitor=network_monitor,
    )


async def startup(container: Container) -> None:
    """Start the container's background services.

    Runs the first connectivity check and schedules the periodic ones, so
    network failures are worded for the host's actual state.
    """
    await container.network_monitor().start()
    logger.debug("Container services started")


async def shutdown(container: Container) -> None:
    """Release the container's network resources.

    Stops the request scheduler and network monitor and closes the HTTP
    session. Safe to call when the services were never used.
    """
    await container.request_scheduler().close()
    await container.network_monitor().stop()
    await container.resilient_fetcher().close()
    logger.debug("Container resources released")
