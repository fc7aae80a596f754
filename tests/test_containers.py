"""Tests for the dependency injection container."""

import aiohttp
import pytest
from dependency_injector import providers

from anikam.config.models import CacheSettings, Settings
from anikam.containers import Container, shutdown, startup
from anikam.services import JikanClient, MediaSearchFeed, ResponseCache, TopMediaFeed
from anikam.services.network_monitor import NetworkMonitor
from anikam.services.request_scheduler import RequestScheduler
from anikam.services.resilient_fetcher import ResilientFetcher
from anikam.shared.constants import UserMessages
from anikam.shared.errors import ApplicationError


@pytest.fixture
def container():
    container = Container()
    container.config.override(providers.Object(Settings()))
    return container


class TestContainer:
    def test_client_shares_singletons(self, container):
        client = container.jikan_client()

        assert isinstance(client, JikanClient)
        assert client.scheduler is container.request_scheduler()
        assert client.fetcher is container.resilient_fetcher()
        assert isinstance(client.cache, ResponseCache)

    def test_settings_flow_into_services(self):
        container = Container()
        settings = Settings(cache=CacheSettings(ttl=42, max_entries=10))
        settings.api.jikan.min_request_interval = 2.5
        container.config.override(providers.Object(settings))

        assert container.response_cache().ttl == 42
        assert container.response_cache().max_entries == 10
        assert container.request_scheduler().min_interval == 2.5

    def test_cache_can_be_disabled(self):
        container = Container()
        container.config.override(
            providers.Object(Settings(cache=CacheSettings(enabled=False)))
        )

        assert container.response_cache() is None
        assert container.jikan_client().cache is None

    def test_feeds_are_factories(self, container):
        first = container.top_media_feed()
        second = container.top_media_feed()

        assert isinstance(first, TopMediaFeed)
        assert first is not second
        assert first.client is second.client

    def test_feed_arguments(self, container):
        feed = container.search_feed(query="bebop", content_type="manga")

        assert isinstance(feed, MediaSearchFeed)
        assert feed.query == "bebop"
        assert feed.network_monitor is container.network_monitor()

    @pytest.mark.asyncio
    async def test_shutdown_closes_scheduler(self, container):
        scheduler = container.request_scheduler()

        await shutdown(container)

        with pytest.raises(ApplicationError):
            scheduler.enqueue(lambda: None)

    @pytest.mark.asyncio
    async def test_offline_host_gets_offline_message(self, container, session_factory, clock):
        check_session = session_factory(aiohttp.ClientConnectionError())
        monitor = NetworkMonitor(session=check_session)
        fetcher = ResilientFetcher(
            session=session_factory(*(aiohttp.ClientConnectionError() for _ in range(3))),
            network_monitor=monitor,
            sleep=clock.sleep,
        )
        container.network_monitor.override(providers.Object(monitor))
        container.resilient_fetcher.override(providers.Object(fetcher))
        container.request_scheduler.override(
            providers.Object(RequestScheduler(min_interval=0, clock=clock, sleep=clock.sleep))
        )

        try:
            await startup(container)
            state = await container.details_loader().load(1)
        finally:
            await shutdown(container)

        assert [method for method, _ in check_session.requests] == ["HEAD"]
        assert monitor.is_online is False
        assert state.media is None
        assert state.error == UserMessages.OFFLINE

    @pytest.mark.asyncio
    async def test_startup_checks_connectivity_once(self, container, session_factory, response):
        check_session = session_factory(response())
        monitor = NetworkMonitor(session=check_session)
        container.network_monitor.override(providers.Object(monitor))

        await startup(container)
        assert monitor.is_online is True
        await shutdown(container)

        assert [method for method, _ in check_session.requests] == ["HEAD"]
