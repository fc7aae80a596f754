"""Single-lane request scheduler.

Every outbound call to the upstream API goes through one FIFO queue that is
drained by one task, so consecutive dispatches are never closer together
than ``min_interval`` no matter how many callers enqueue work at once.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from anikam.shared.constants import JikanAPIConfig
from anikam.shared.errors import ApplicationError, ErrorCode, ErrorContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class _QueuedRequest:
    """A zero-argument coroutine factory and the future its caller awaits."""

    thunk: Callable[[], Awaitable[Any]]
    future: asyncio.Future[Any]


class RequestScheduler:
    """Serializing FIFO queue with minimum dispatch spacing.

    A single drain task pops requests in order, sleeps out the remainder of
    ``min_interval`` since the previous dispatch, runs the thunk and resolves
    the caller's future with its result or exception. A failing thunk never
    stops the loop. Enqueueing while a drain is in progress never starts a
    second one.

    Requests whose future was cancelled before dispatch are skipped. With
    ``max_queue_depth`` set, enqueueing onto a full queue fails fast.

    Args:
        min_interval: Minimum seconds between consecutive dispatches (default: 1.0)
        max_queue_depth: Optional bound on waiting requests
        clock: Monotonic clock in seconds (default: time.monotonic)
        sleep: Coroutine used to wait (default: asyncio.sleep)
    """

    def __init__(
        self,
        min_interval: float = JikanAPIConfig.MIN_REQUEST_INTERVAL,
        max_queue_depth: int | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if min_interval < 0:
            raise ApplicationError(
                code=ErrorCode.CONFIG_INVALID,
                message=f"min_interval must not be negative, got: {min_interval}",
                context=ErrorContext(
                    operation="request_scheduler_init",
                    additional_data={"min_interval": min_interval},
                ),
            )

        self.min_interval = min_interval
        self.max_queue_depth = max_queue_depth
        self._clock = clock
        self._sleep = sleep
        self._queue: deque[_QueuedRequest] = deque()
        self._processing = False
        self._closed = False
        self._last_dispatch: float | None = None
        self._drain_task: asyncio.Task[None] | None = None

    @property
    def pending(self) -> int:
        """Number of requests waiting for dispatch."""
        return len(self._queue)

    @property
    def is_processing(self) -> bool:
        return self._processing

    def enqueue(self, thunk: Callable[[], Awaitable[T]]) -> asyncio.Future[T]:
        """Queue ``thunk`` for dispatch and return the future of its result.

        Args:
            thunk: Zero-argument callable returning an awaitable

        Returns:
            Future resolved or rejected once the thunk has run

        Raises:
            ApplicationError: SCHEDULER_CLOSED after close(), QUEUE_FULL when
                the optional depth bound is reached
        """
        if self._closed:
            raise ApplicationError(
                code=ErrorCode.SCHEDULER_CLOSED,
                message="Request scheduler is closed",
                context=ErrorContext(operation="enqueue"),
            )

        if self.max_queue_depth is not None and len(self._queue) >= self.max_queue_depth:
            raise ApplicationError(
                code=ErrorCode.QUEUE_FULL,
                message=f"Request queue is full ({self.max_queue_depth} pending)",
                context=ErrorContext(
                    operation="enqueue",
                    additional_data={"max_queue_depth": self.max_queue_depth},
                ),
            )

        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._queue.append(_QueuedRequest(thunk=thunk, future=future))

        if not self._processing:
            self._processing = True
            self._drain_task = loop.create_task(self._drain())

        return future

    async def _drain(self) -> None:
        try:
            while self._queue:
                request = self._queue.popleft()
                if request.future.cancelled():
                    logger.debug("Skipping cancelled request before dispatch")
                    continue

                if self._last_dispatch is not None:
                    elapsed = self._clock() - self._last_dispatch
                    if elapsed < self.min_interval:
                        await self._sleep(self.min_interval - elapsed)

                # The caller may have given up while we were waiting
                if request.future.cancelled():
                    logger.debug("Skipping cancelled request before dispatch")
                    continue

                self._last_dispatch = self._clock()
                await self._run(request)
        finally:
            self._processing = False

    async def _run(self, request: _QueuedRequest) -> None:
        try:
            result = await request.thunk()
        except asyncio.CancelledError:
            if not request.future.done():
                request.future.cancel()
            raise
        except Exception as e:  # noqa: BLE001
            if request.future.done():
                logger.debug("Dropping failure of abandoned request: %s", e)
            else:
                request.future.set_exception(e)
        else:
            if not request.future.done():
                request.future.set_result(result)

    async def close(self) -> None:
        """Reject all waiting requests and stop the drain task."""
        self._closed = True

        while self._queue:
            request = self._queue.popleft()
            if not request.future.done():
                request.future.set_exception(
                    ApplicationError(
                        code=ErrorCode.SCHEDULER_CLOSED,
                        message="Request scheduler closed before dispatch",
                        context=ErrorContext(operation="close"),
                    )
                )

        if self._drain_task is not None and not self._drain_task.done():
            self._drain_task.cancel()
            try:
                await self._drain_task
            except asyncio.CancelledError:
                logger.debug("Request scheduler drain task stopped")
        self._drain_task = None
