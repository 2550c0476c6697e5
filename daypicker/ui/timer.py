"""Cancellable one-shot timers for month transitions."""

import asyncio
import logging
import time
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        ...


class TransitionScheduler(Protocol):
    """Schedules the end of a month transition."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay`` seconds."""
        ...

    def poll(self) -> None:
        """Fire callbacks that are due, for schedulers without their own loop."""
        ...

    @property
    def clock(self) -> Callable[[], float]:
        """Monotonic clock the scheduler measures delays against."""
        ...


class AsyncioTransitionScheduler:
    """Schedules callbacks on an asyncio event loop.

    When no usable loop exists at schedule time (the loop has finished or
    was closed) the callback goes to a polled clock scheduler instead.
    """

    def __init__(
        self,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loop = loop
        self._fallback = ClockTransitionScheduler(clock=clock)

    @property
    def clock(self) -> Callable[[], float]:
        return self._fallback.clock

    def _usable_loop(self) -> Optional[asyncio.AbstractEventLoop]:
        if self._loop is not None:
            return None if self._loop.is_closed() else self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def schedule(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._usable_loop()
        if loop is None:
            logger.debug("No usable event loop, falling back to clock timer")
            return self._fallback.schedule(delay, callback)
        return loop.call_later(delay, callback)

    def poll(self) -> None:
        self._fallback.poll()


class ClockTimer:
    """Deadline-based timer owned by :class:`ClockTransitionScheduler`."""

    __slots__ = ("callback", "cancelled", "deadline")

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ClockTransitionScheduler:
    """Cooperative scheduler driven by polling a monotonic clock.

    Nothing runs in the background: due callbacks fire when :meth:`poll` is
    called, which the navigation state machine does before handling any
    request or reporting its phase.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._timers: list[ClockTimer] = []

    @property
    def clock(self) -> Callable[[], float]:
        return self._clock

    @property
    def pending(self) -> int:
        return sum(1 for timer in self._timers if not timer.cancelled)

    def schedule(self, delay: float, callback: Callable[[], None]) -> ClockTimer:
        timer = ClockTimer(self._clock() + delay, callback)
        self._timers.append(timer)
        return timer

    def poll(self) -> None:
        now = self._clock()
        due = [t for t in self._timers if not t.cancelled and t.deadline <= now]
        self._timers = [t for t in self._timers if not t.cancelled and t.deadline > now]
        for timer in sorted(due, key=lambda t: t.deadline):
            timer.callback()


def default_scheduler() -> TransitionScheduler:
    """Asyncio scheduler inside a running event loop, clock scheduler otherwise."""
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop, using clock transition scheduler")
        return ClockTransitionScheduler()
    return AsyncioTransitionScheduler()
