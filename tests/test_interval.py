"""Tests for the weakly bound repeating timer."""

import asyncio
import gc

import pytest

from lockswitch.core import Interval


class Counter:
    """Owner that counts its ticks."""

    def __init__(self):
        self.ticks = 0

    def tick(self) -> None:
        self.ticks += 1

    async def tick_async(self) -> None:
        await asyncio.sleep(0)
        self.ticks += 1

    def explode(self) -> None:
        self.ticks += 1
        raise RuntimeError("tick failed")


@pytest.mark.unit
class TestInterval:
    """Test Interval."""

    @pytest.mark.asyncio
    async def test_does_not_call_immediately(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick, 0.05)

        await asyncio.sleep(0)

        assert counter.ticks == 0
        interval.cancel()

    @pytest.mark.asyncio
    async def test_ticks_repeatedly(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick, 0.01)

        await asyncio.sleep(0.1)

        assert counter.ticks >= 3
        assert not interval.finished
        interval.cancel()

    @pytest.mark.asyncio
    async def test_cancel_stops_ticks(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick, 0.01)
        await asyncio.sleep(0.05)

        assert interval.cancel() is True
        ticks = counter.ticks
        await asyncio.sleep(0.05)

        assert counter.ticks == ticks
        assert interval.finished
        assert interval.cancel() is False

    @pytest.mark.asyncio
    async def test_stops_when_owner_collected(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick, 0.01)
        await asyncio.sleep(0.03)

        del counter
        gc.collect()
        await asyncio.sleep(0.03)

        assert interval.finished
        assert interval.cancel() is False

    @pytest.mark.asyncio
    async def test_awaitable_result_is_scheduled(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick_async, 0.01)

        await asyncio.sleep(0.1)
        interval.cancel()
        await asyncio.sleep(0.01)

        assert counter.ticks >= 3
        assert interval.pending_tasks == 0

    @pytest.mark.asyncio
    async def test_errors_do_not_stop_interval(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.explode, 0.01)

        await asyncio.sleep(0.1)

        assert counter.ticks >= 2
        assert not interval.finished
        interval.cancel()

    @pytest.mark.asyncio
    async def test_callback_may_cancel_its_interval(self):
        class SelfStopping:
            interval = None
            ticks = 0

            def tick(self):
                self.ticks += 1
                self.interval.cancel()

        owner = SelfStopping()
        owner.interval = Interval.start(owner, SelfStopping.tick, 0.01)

        await asyncio.sleep(0.05)

        assert owner.ticks == 1
        assert owner.interval.finished

    @pytest.mark.asyncio
    @pytest.mark.parametrize("period", [0, -1.0])
    async def test_period_must_be_positive(self, period):
        with pytest.raises(ValueError):
            Interval.start(Counter(), Counter.tick, period)

    def test_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            Interval.start(Counter(), Counter.tick, 1.0)

    @pytest.mark.asyncio
    async def test_period_property(self):
        counter = Counter()
        interval = Interval.start(counter, Counter.tick, 2.5)

        assert interval.period == 2.5
        assert "tick" in repr(interval)
        interval.cancel()
