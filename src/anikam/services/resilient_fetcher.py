"""Resilient HTTP fetcher for the Jikan API.

One call to ``fetch_json`` is one logical GET: up to ``retry_attempts``
attempts, each with its own timeout, separated by backoff delays that
depend on how the previous attempt failed. Exhausted retries end in a
single ``UpstreamError`` whose message is already fit for end users.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable

import aiohttp

from anikam.config.models.api_settings import JikanSettings
from anikam.services.error_classifier import classify_exception, get_user_message
from anikam.services.network_monitor import NetworkMonitor
from anikam.shared.constants import HTTPStatusCodes, JikanAPIConfig
from anikam.shared.errors import (
    FetchErrorKind,
    UpstreamError,
    create_config_error,
    create_upstream_error,
)
from anikam.shared.logging import (
    log_api_call,
    log_operation_error,
    log_operation_success,
)

logger = logging.getLogger(__name__)


class ResilientFetcher:
    """GET with timeout, bounded retries and failure-specific backoff.

    Backoff policy (``attempt`` counts from 1):

    - HTTP 429: ``min(rate_limit_backoff_base * 2**attempt, rate_limit_backoff_max)``
      after every rate-limited attempt, the last one included
    - other non-2xx status: ``http_error_backoff * attempt``
    - connection failure or timeout: ``network_error_backoff * attempt``
    - malformed JSON: no retry

    The fetcher never touches the response cache; caching is the client's
    concern.

    Args:
        settings: Jikan API settings (defaults used when omitted)
        session: Optional externally owned aiohttp session
        network_monitor: Optional monitor consulted to word network errors
        sleep: Coroutine used for backoff waits (default: asyncio.sleep)
    """

    def __init__(
        self,
        settings: JikanSettings | None = None,
        session: aiohttp.ClientSession | None = None,
        network_monitor: NetworkMonitor | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.settings = settings or JikanSettings()
        self._session = session
        self._owns_session = session is None
        self._network_monitor = network_monitor
        self._sleep = sleep
        self._headers = {
            "Accept": JikanAPIConfig.ACCEPT,
            "User-Agent": self.settings.user_agent,
        }

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily so construction needs no running event loop
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    def backoff_delay(self, error: UpstreamError, attempt: int) -> float:
        """Return the wait in seconds before the attempt after ``attempt``."""
        if error.kind is FetchErrorKind.RATE_LIMITED:
            return min(
                self.settings.rate_limit_backoff_base * 2**attempt,
                self.settings.rate_limit_backoff_max,
            )
        if error.is_network:
            return self.settings.network_error_backoff * attempt
        return self.settings.http_error_backoff * attempt

    async def fetch_json(self, endpoint: str) -> Any:
        """GET ``base_url + endpoint`` and return the parsed JSON body.

        Args:
            endpoint: Path with its already encoded query string

        Returns:
            Parsed JSON body

        Raises:
            UpstreamError: Terminal failure after retries, or a parse error
        """
        attempts = self.settings.retry_attempts
        started = time.monotonic()

        for attempt in range(1, attempts + 1):
            try:
                body = await self._attempt(endpoint, attempt)
            except UpstreamError as e:
                error = e
            else:
                log_operation_success(
                    logger,
                    operation="fetch_json",
                    duration_ms=(time.monotonic() - started) * 1000,
                    result_info={"attempts": attempt},
                    context={"endpoint": endpoint},
                )
                return body

            if error.kind is FetchErrorKind.PARSE_ERROR:
                log_operation_error(logger, error, operation="fetch_json")
                raise error

            is_final = attempt == attempts
            if not is_final or error.is_rate_limited:
                delay = self.backoff_delay(error, attempt)
                logger.warning(
                    "Jikan request failed (%s), attempt %d/%d, waiting %.1fs: %s",
                    error.kind.value,
                    attempt,
                    attempts,
                    delay,
                    endpoint,
                )
                await self._sleep(delay)

            if is_final:
                raise self._terminal_error(error, attempts)

        raise create_config_error(
            f"retry_attempts must be at least 1, got: {attempts}",
            config_key="api.jikan.retry_attempts",
            operation="fetch_json",
        )

    def _terminal_error(self, error: UpstreamError, attempts: int) -> UpstreamError:
        status = self._network_monitor.get_status() if self._network_monitor else None
        terminal = error.with_message(get_user_message(error, status))
        log_operation_error(
            logger,
            terminal,
            operation="fetch_json",
            additional_context={"attempts": attempts},
        )
        return terminal

    async def _attempt(self, endpoint: str, attempt: int) -> Any:
        url = f"{self.settings.base_url}{endpoint}"
        timeout = aiohttp.ClientTimeout(total=self.settings.timeout)
        started = time.monotonic()

        try:
            async with self._get_session().get(
                url,
                headers=self._headers,
                timeout=timeout,
            ) as response:
                log_api_call(
                    logger,
                    endpoint=endpoint,
                    status_code=response.status,
                    duration_ms=(time.monotonic() - started) * 1000,
                    context={"attempt": attempt},
                )

                if HTTPStatusCodes.is_rate_limited(response.status):
                    raise create_upstream_error(
                        FetchErrorKind.RATE_LIMITED,
                        "Jikan API rate limit exceeded (429 Too Many Requests)",
                        endpoint,
                        status=response.status,
                        attempt=attempt,
                    )

                if not HTTPStatusCodes.is_success(response.status):
                    raise create_upstream_error(
                        FetchErrorKind.HTTP_ERROR,
                        f"Jikan API error: {response.status} {response.reason or ''}".rstrip(),
                        endpoint,
                        status=response.status,
                        attempt=attempt,
                    )

                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise create_upstream_error(
                        FetchErrorKind.PARSE_ERROR,
                        f"Malformed JSON from Jikan API: {e}",
                        endpoint,
                        status=response.status,
                        attempt=attempt,
                        original_error=e,
                    ) from e

        except UpstreamError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            kind = classify_exception(e)
            message = (
                "Jikan API request timed out"
                if kind is FetchErrorKind.TIMEOUT
                else f"Jikan API request failed: {e}"
            )
            raise create_upstream_error(
                kind,
                message,
                endpoint,
                attempt=attempt,
                original_error=e,
            ) from e

    async def close(self) -> None:
        """Close the HTTP session if this fetcher created it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("Jikan HTTP session closed")
        if self._owns_session:
            self._session = None

    async def __aenter__(self) -> ResilientFetcher:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
