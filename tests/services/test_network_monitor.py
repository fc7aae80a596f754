"""Tests for NetworkMonitor."""

import aiohttp
import pytest

from anikam.services.network_monitor import NetworkMonitor, NetworkStatus


class TestNetworkMonitor:
    @pytest.fixture
    def monitor(self, fake_session):
        return NetworkMonitor(probe_url="https://probe.test/ok", session=fake_session)

    def test_starts_online(self, monitor):
        status = monitor.get_status()

        assert status.is_online is True
        assert status.is_slow_connection is False

    def test_reports_notify_listeners(self, monitor):
        seen: list[NetworkStatus] = []
        monitor.subscribe(seen.append)

        monitor.report_offline()
        monitor.report_online()

        assert [status.is_online for status in seen] == [False, True]
        assert monitor.is_online

    def test_unsubscribe(self, monitor):
        seen: list[NetworkStatus] = []
        unsubscribe = monitor.subscribe(seen.append)

        unsubscribe()
        monitor.report_offline()

        assert seen == []

    def test_failing_listener_does_not_break_others(self, monitor):
        seen: list[NetworkStatus] = []

        def broken(status: NetworkStatus) -> None:
            raise RuntimeError("listener bug")

        monitor.subscribe(broken)
        monitor.subscribe(seen.append)
        monitor.report_offline()

        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_check_connection_success(self, monitor, fake_session, response):
        fake_session.queue(response(status=200))

        status = await monitor.check_connection()

        assert status.is_online is True
        assert fake_session.requests == [("HEAD", "https://probe.test/ok")]

    @pytest.mark.asyncio
    async def test_check_connection_failure(self, monitor, fake_session):
        fake_session.queue(aiohttp.ClientConnectionError())

        status = await monitor.check_connection()

        assert status.is_online is False

    @pytest.mark.asyncio
    async def test_check_connection_slow(self, fake_session, mocker):
        monitor = NetworkMonitor(session=fake_session, slow_threshold=3)
        mocker.patch.object(monitor, "_head", mocker.AsyncMock(return_value=(True, 4.5)))

        status = await monitor.check_connection()

        assert status.is_online is True
        assert status.is_slow_connection is True

    @pytest.mark.asyncio
    async def test_api_connection(self, monitor, fake_session, response):
        fake_session.queue(response(status=200), response(status=503), OSError("down"))

        assert await monitor.test_api_connection("https://api.test") is True
        assert await monitor.test_api_connection("https://api.test") is False
        assert await monitor.test_api_connection("https://api.test") is False

    @pytest.mark.asyncio
    async def test_start_and_stop(self, monitor, fake_session, response):
        fake_session.queue(response(status=200))

        await monitor.start()
        assert monitor._probe_task is not None
        await monitor.stop()

        assert monitor._probe_task is None
        # External sessions are left to their owner
        assert fake_session.closed is False
