"""Unit tests for transition schedulers."""

import asyncio
from unittest.mock import Mock

import pytest

from daypicker.ui.timer import (
    AsyncioTransitionScheduler,
    ClockTransitionScheduler,
    default_scheduler,
)


class TestClockTransitionScheduler:
    """Test the polled monotonic-clock scheduler."""

    def test_callback_fires_only_after_deadline(self, fake_clock):
        scheduler = ClockTransitionScheduler(clock=fake_clock)
        callback = Mock()
        scheduler.schedule(0.3, callback)

        fake_clock.advance(0.2)
        scheduler.poll()
        callback.assert_not_called()

        fake_clock.advance(0.2)
        scheduler.poll()
        callback.assert_called_once_with()
        assert scheduler.pending == 0

    def test_cancelled_timer_never_fires(self, fake_clock):
        scheduler = ClockTransitionScheduler(clock=fake_clock)
        callback = Mock()
        timer = scheduler.schedule(0.1, callback)

        timer.cancel()
        fake_clock.advance(1)
        scheduler.poll()

        callback.assert_not_called()
        assert scheduler.pending == 0

    def test_due_timers_fire_in_deadline_order(self, fake_clock):
        scheduler = ClockTransitionScheduler(clock=fake_clock)
        order = []
        scheduler.schedule(0.5, lambda: order.append("late"))
        scheduler.schedule(0.1, lambda: order.append("early"))

        fake_clock.advance(1)
        scheduler.poll()

        assert order == ["early", "late"]

    def test_timer_fires_once(self, fake_clock):
        scheduler = ClockTransitionScheduler(clock=fake_clock)
        callback = Mock()
        scheduler.schedule(0, callback)

        scheduler.poll()
        scheduler.poll()

        callback.assert_called_once_with()


class TestAsyncioTransitionScheduler:
    """Test the event-loop scheduler."""

    @pytest.mark.asyncio
    async def test_callback_runs_on_loop(self):
        scheduler = AsyncioTransitionScheduler()
        fired = asyncio.Event()

        scheduler.schedule(0.01, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1)

        assert fired.is_set()

    @pytest.mark.asyncio
    async def test_cancelled_handle_does_not_run(self):
        scheduler = AsyncioTransitionScheduler()
        callback = Mock()

        handle = scheduler.schedule(0.01, callback)
        handle.cancel()
        await asyncio.sleep(0.05)

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_default_scheduler_inside_loop_uses_asyncio(self):
        assert isinstance(default_scheduler(), AsyncioTransitionScheduler)

    def test_schedule_without_running_loop_falls_back_to_clock(self, fake_clock):
        scheduler = AsyncioTransitionScheduler(clock=fake_clock)
        callback = Mock()

        scheduler.schedule(0.1, callback)
        scheduler.poll()
        callback.assert_not_called()

        fake_clock.advance(0.2)
        scheduler.poll()
        callback.assert_called_once_with()

    def test_schedule_on_closed_loop_falls_back_to_clock(self, fake_clock):
        loop = asyncio.new_event_loop()
        loop.close()
        scheduler = AsyncioTransitionScheduler(loop=loop, clock=fake_clock)
        callback = Mock()

        scheduler.schedule(0.1, callback)
        fake_clock.advance(0.2)
        scheduler.poll()

        callback.assert_called_once_with()
        assert scheduler.clock is fake_clock


class TestDefaultScheduler:
    """Test scheduler selection outside an event loop."""

    def test_default_scheduler_without_loop_uses_clock(self):
        assert isinstance(default_scheduler(), ClockTransitionScheduler)
