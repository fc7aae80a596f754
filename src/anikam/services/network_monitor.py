"""Connectivity monitor.

Tracks whether the host appears to be online and whether the connection is
slow. Status changes come from explicit reports and from a periodic HEAD
probe. The status is consulted only to choose user-facing error messages;
it never gates retries.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable

import aiohttp

from anikam.shared.constants import NetworkMonitorConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetworkStatus:
    """Snapshot of connectivity state.

    Attributes:
        is_online: Whether the last report or probe succeeded
        is_slow_connection: Whether the last probe exceeded the slow threshold
        last_check: Wall-clock time (epoch seconds) of the last update
    """

    is_online: bool = True
    is_slow_connection: bool = False
    last_check: float = field(default_factory=time.time)


StatusListener = Callable[[NetworkStatus], None]


class NetworkMonitor:
    """Explicitly constructed connectivity monitor.

    Construct one per process and share it by reference. ``start()`` runs an
    initial probe and schedules the periodic one; ``stop()`` cancels it and
    closes the probe session if the monitor created it.

    Args:
        probe_url: URL probed with HEAD requests
        probe_interval: Seconds between periodic probes
        probe_timeout: Probe timeout in seconds
        slow_threshold: Round trip in seconds above which the link counts as slow
        session: Optional externally owned aiohttp session
    """

    def __init__(
        self,
        probe_url: str = NetworkMonitorConfig.PROBE_URL,
        probe_interval: float = NetworkMonitorConfig.PROBE_INTERVAL,
        probe_timeout: float = NetworkMonitorConfig.PROBE_TIMEOUT,
        slow_threshold: float = NetworkMonitorConfig.SLOW_CONNECTION_THRESHOLD,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self.probe_url = probe_url
        self.probe_interval = probe_interval
        self.probe_timeout = probe_timeout
        self.slow_threshold = slow_threshold
        self._session = session
        self._owns_session = session is None
        self._status = NetworkStatus()
        self._listeners: list[StatusListener] = []
        self._probe_task: asyncio.Task[None] | None = None

    def get_status(self) -> NetworkStatus:
        """Return the current status snapshot."""
        return self._status

    @property
    def is_online(self) -> bool:
        return self._status.is_online

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register ``listener`` for status updates.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def report_online(self) -> None:
        """Record that the host regained connectivity."""
        self._update(is_online=True, is_slow_connection=False)

    def report_offline(self) -> None:
        """Record that the host lost connectivity."""
        self._update(is_online=False, is_slow_connection=False)

    def _update(self, **changes: bool | float) -> None:
        changes.setdefault("last_check", time.time())
        previous = self._status
        self._status = replace(self._status, **changes)

        if previous.is_online != self._status.is_online:
            logger.info(
                "Network status changed: %s",
                "online" if self._status.is_online else "offline",
            )

        for listener in list(self._listeners):
            try:
                listener(self._status)
            except Exception:  # noqa: BLE001
                logger.exception("Network status listener failed")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def _head(self, url: str) -> tuple[bool, float]:
        timeout = aiohttp.ClientTimeout(total=self.probe_timeout)
        started = time.monotonic()
        async with self._get_session().head(url, timeout=timeout) as response:
            ok = 200 <= response.status < 300
        return ok, time.monotonic() - started

    async def check_connection(self) -> NetworkStatus:
        """Probe ``probe_url`` once and update the status.

        Returns:
            The updated status
        """
        try:
            ok, elapsed = await self._head(self.probe_url)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.debug("Connectivity probe failed: %s", e)
            self._update(is_online=False, is_slow_connection=False)
        else:
            self._update(is_online=ok, is_slow_connection=elapsed > self.slow_threshold)
        return self._status

    async def test_api_connection(self, api_url: str) -> bool:
        """Return whether a HEAD request to ``api_url`` succeeds within the probe timeout."""
        try:
            ok, _ = await self._head(api_url)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.debug("API connection test failed for %s: %s", api_url, e)
            return False
        return ok

    async def _probe_loop(self) -> None:
        while True:
            await asyncio.sleep(self.probe_interval)
            # Offline hosts wait for an explicit report_online()
            if self._status.is_online:
                await self.check_connection()

    async def start(self) -> None:
        """Run an initial probe and start periodic probing."""
        if self._probe_task is not None and not self._probe_task.done():
            return
        await self.check_connection()
        self._probe_task = asyncio.create_task(self._probe_loop())

    async def stop(self) -> None:
        """Stop periodic probing and release the probe session."""
        if self._probe_task is not None:
            self._probe_task.cancel()
            try:
                await self._probe_task
            except asyncio.CancelledError:
                logger.debug("Network probe task stopped")
            self._probe_task = None

        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None
