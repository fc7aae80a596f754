"""Unit tests for RequestScheduler."""

import asyncio

import pytest

from anikam.services.request_scheduler import RequestScheduler
from anikam.shared.errors import ApplicationError, ErrorCode


def _recorder(clock, log, name, duration=0.0, result=None, error=None):
    """Thunk that records its dispatch time and optionally takes time or fails."""

    async def thunk():
        log.append((name, clock()))
        clock.advance(duration)
        if error is not None:
            raise error
        return result if result is not None else name

    return thunk


class TestRequestScheduler:
    """Test cases for RequestScheduler."""

    @pytest.fixture
    def scheduler(self, clock):
        return RequestScheduler(min_interval=1.0, clock=clock, sleep=clock.sleep)

    @pytest.mark.asyncio
    async def test_first_request_dispatches_immediately(self, scheduler, clock):
        log = []

        result = await scheduler.enqueue(_recorder(clock, log, "a"))

        assert result == "a"
        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_dispatches_are_fifo_and_spaced(self, scheduler, clock):
        log = []
        start = clock()

        futures = [scheduler.enqueue(_recorder(clock, log, name)) for name in "abc"]
        results = await asyncio.gather(*futures)

        assert results == ["a", "b", "c"]
        assert [name for name, _ in log] == ["a", "b", "c"]
        assert [t - start for _, t in log] == [0.0, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_request_duration_counts_toward_interval(self, scheduler, clock):
        log = []

        first = scheduler.enqueue(_recorder(clock, log, "slow", duration=0.25))
        second = scheduler.enqueue(_recorder(clock, log, "next"))
        await asyncio.gather(first, second)

        assert clock.sleeps == [0.75]
        assert log[1][1] - log[0][1] == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_idle_gap_longer_than_interval_needs_no_wait(self, scheduler, clock):
        log = []
        await scheduler.enqueue(_recorder(clock, log, "a"))
        clock.advance(5)

        await scheduler.enqueue(_recorder(clock, log, "b"))

        assert clock.sleeps == []

    @pytest.mark.asyncio
    async def test_failure_is_delivered_and_queue_keeps_draining(self, scheduler, clock):
        log = []
        boom = ValueError("boom")

        failing = scheduler.enqueue(_recorder(clock, log, "bad", error=boom))
        following = scheduler.enqueue(_recorder(clock, log, "good"))

        with pytest.raises(ValueError, match="boom"):
            await failing
        assert await following == "good"
        assert not scheduler.is_processing

    @pytest.mark.asyncio
    async def test_single_drain_task(self, scheduler, clock):
        log = []
        scheduler.enqueue(_recorder(clock, log, "a"))
        first_task = scheduler._drain_task

        second = scheduler.enqueue(_recorder(clock, log, "b"))

        assert scheduler._drain_task is first_task
        assert scheduler.is_processing
        await second

    @pytest.mark.asyncio
    async def test_cancelled_request_is_skipped(self, scheduler, clock):
        log = []
        first = scheduler.enqueue(_recorder(clock, log, "a"))
        abandoned = scheduler.enqueue(_recorder(clock, log, "b"))
        third = scheduler.enqueue(_recorder(clock, log, "c"))

        abandoned.cancel()
        await asyncio.gather(first, third)

        assert [name for name, _ in log] == ["a", "c"]

    @pytest.mark.asyncio
    async def test_queue_depth_bound(self, clock):
        scheduler = RequestScheduler(
            min_interval=1.0, max_queue_depth=1, clock=clock, sleep=clock.sleep
        )
        log = []

        accepted = scheduler.enqueue(_recorder(clock, log, "a"))
        with pytest.raises(ApplicationError) as exc_info:
            scheduler.enqueue(_recorder(clock, log, "b"))

        assert exc_info.value.code == ErrorCode.QUEUE_FULL
        assert await accepted == "a"

    @pytest.mark.asyncio
    async def test_close_rejects_pending_and_new_requests(self, scheduler, clock):
        log = []
        pending = scheduler.enqueue(_recorder(clock, log, "a"))

        await scheduler.close()

        with pytest.raises(ApplicationError) as exc_info:
            await pending
        assert exc_info.value.code == ErrorCode.SCHEDULER_CLOSED
        with pytest.raises(ApplicationError):
            scheduler.enqueue(_recorder(clock, log, "b"))
        assert log == []

    def test_negative_interval_rejected(self):
        with pytest.raises(ApplicationError) as exc_info:
            RequestScheduler(min_interval=-1)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID
