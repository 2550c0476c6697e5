"""Navigation state management for browsing visible calendar months."""

import logging
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Iterator, List, Optional

from ..utils.dates import add_months, months_between, start_of_month, to_calendar_date
from ..utils.exceptions import (
    ControllerTornDown,
    NavigationBoundExceeded,
    NavigationError,
    NavigationInProgress,
)
from .timer import TimerHandle, TransitionScheduler, default_scheduler

logger = logging.getLogger(__name__)


class NavigationDirection(Enum):
    """Direction for navigation."""

    FORWARD = "forward"
    BACKWARD = "backward"

    @property
    def step(self) -> int:
        return 1 if self is NavigationDirection.FORWARD else -1


class NavigationPhase(Enum):
    """Phase of the navigation state machine."""

    IDLE = "idle"
    TRANSITIONING = "transitioning"


@dataclass(frozen=True)
class VisibleMonths:
    """Ordered, contiguous run of first-of-month dates currently on screen."""

    months: tuple[date, ...]

    def __post_init__(self) -> None:
        if not self.months:
            raise ValueError("VisibleMonths needs at least one month")
        for month in self.months:
            if month.day != 1:
                raise ValueError(f"Visible month {month} is not the first of a month")
        for earlier, later in zip(self.months, self.months[1:]):
            if months_between(earlier, later) != 1:
                raise ValueError(f"Visible months are not contiguous: {earlier} -> {later}")

    @classmethod
    def starting_at(cls, month: date, count: int = 1) -> "VisibleMonths":
        """Build ``count`` contiguous months beginning with the month of ``month``."""
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        first = start_of_month(month)
        return cls(tuple(add_months(first, i) for i in range(count)))

    @property
    def first(self) -> date:
        return self.months[0]

    @property
    def last(self) -> date:
        return self.months[-1]

    def shifted(self, months: int) -> "VisibleMonths":
        """The same number of months, moved by ``months``."""
        return VisibleMonths.starting_at(add_months(self.first, months), len(self.months))

    def index_of(self, day: date) -> int:
        """Position of the month containing ``day``; ``ValueError`` if not visible."""
        offset = months_between(self.first, day)
        if not 0 <= offset < len(self.months):
            raise ValueError(f"{day} is not in a visible month")
        return offset

    def __contains__(self, day: object) -> bool:
        if not isinstance(day, date):
            return False
        return 0 <= months_between(self.first, day) < len(self.months)

    def __iter__(self) -> Iterator[date]:
        return iter(self.months)

    def __len__(self) -> int:
        return len(self.months)

    def __str__(self) -> str:
        return "[" + ", ".join(m.strftime("%Y-%m") for m in self.months) + "]"


@dataclass(frozen=True)
class NavigationState:
    """Snapshot of the navigation state."""

    visible_months: VisibleMonths
    transition_in_progress: bool = False


@dataclass(frozen=True)
class NavigationResult:
    """Outcome of a navigation request; rejections leave state untouched."""

    success: bool
    visible_months: VisibleMonths
    error: Optional[NavigationError] = None

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


NavigationCallback = Callable[[Optional[NavigationDirection], VisibleMonths], None]


class NavigationStateMachine:
    """Owns the visible months and gates month navigation."""

    def __init__(
        self,
        initial_month: Optional[date] = None,
        number_of_months: int = 1,
        transition_duration: int = 0,
        min_month: Optional[date] = None,
        max_month: Optional[date] = None,
        scheduler: Optional[TransitionScheduler] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize navigation state.

        Args:
            initial_month: Any day in the first month to show, defaults to today
            number_of_months: How many contiguous months are visible
            transition_duration: Transition length in milliseconds; 0 is instant
            min_month: Earliest month navigation may show
            max_month: Latest month navigation may show
            scheduler: Timer source for transitions
            clock: Monotonic clock for transition deadlines, defaults to the
                scheduler's clock
        """
        if number_of_months < 1:
            raise ValueError(f"number_of_months must be at least 1, got {number_of_months}")
        if transition_duration < 0:
            raise ValueError(f"transition_duration must be >= 0, got {transition_duration}")

        self._number_of_months = number_of_months
        self._transition_duration = transition_duration
        self._min_month = start_of_month(min_month) if min_month is not None else None
        self._max_month = start_of_month(max_month) if max_month is not None else None
        if self._min_month and self._max_month and self._min_month > self._max_month:
            raise ValueError(f"min_month {self._min_month} is after max_month {self._max_month}")
        if (
            self._min_month
            and self._max_month
            and months_between(self._min_month, self._max_month) + 1 < number_of_months
        ):
            raise ValueError(
                f"Bounds {self._min_month:%Y-%m}..{self._max_month:%Y-%m} cannot hold "
                f"{number_of_months} visible months"
            )

        self._scheduler = scheduler
        if self._scheduler is None and transition_duration > 0:
            self._scheduler = default_scheduler()
        self._clock: Callable[[], float] = (
            clock or getattr(self._scheduler, "clock", None) or time.monotonic
        )

        first = self._clamp(to_calendar_date(initial_month or date.today()))
        self._visible = VisibleMonths.starting_at(first, number_of_months)
        self._phase = NavigationPhase.IDLE
        self._timer: Optional[TimerHandle] = None
        self._transition_ends_at: Optional[float] = None
        self._torn_down = False
        self._change_callbacks: List[NavigationCallback] = []

        logger.debug(f"Navigation state initialized with months: {self._visible}")

    @property
    def visible_months(self) -> VisibleMonths:
        """Get the currently visible months."""
        return self._visible

    @property
    def number_of_months(self) -> int:
        return self._number_of_months

    @property
    def transition_duration(self) -> int:
        return self._transition_duration

    @property
    def min_month(self) -> Optional[date]:
        return self._min_month

    @property
    def max_month(self) -> Optional[date]:
        return self._max_month

    @property
    def phase(self) -> NavigationPhase:
        """Current phase, after firing any transition timer that is due."""
        self._poll()
        return self._phase

    @property
    def transition_in_progress(self) -> bool:
        return self.phase is NavigationPhase.TRANSITIONING

    @property
    def state(self) -> NavigationState:
        """Snapshot of visible months and transition flag."""
        return NavigationState(self._visible, self.transition_in_progress)

    @property
    def is_torn_down(self) -> bool:
        return self._torn_down

    def can_navigate_prev(self) -> bool:
        """Whether a backward step stays inside the bounds."""
        return self._within_bounds(self._visible.shifted(-1))

    def can_navigate_next(self) -> bool:
        """Whether a forward step stays inside the bounds."""
        return self._within_bounds(self._visible.shifted(1))

    def navigate(self, direction: NavigationDirection) -> NavigationResult:
        """Move the visible months one month in ``direction``.

        Args:
            direction: Forward or backward

        Returns:
            Result carrying the new visible months, or the rejection reason
        """
        error = self._check_request()
        if error is not None:
            return self._reject(error, f"navigate {direction.value}")

        candidate = self._visible.shifted(direction.step)
        if not self._within_bounds(candidate):
            error = NavigationBoundExceeded(candidate, self._min_month, self._max_month)
            return self._reject(error, f"navigate {direction.value}")

        old_months = self._visible
        # Arm the timer first so a scheduler failure leaves the state untouched.
        self._begin_transition()
        self._visible = candidate

        logger.debug(f"Navigated {direction.value}: {old_months} -> {self._visible}")
        self._notify_change(direction)
        return NavigationResult(True, self._visible)

    def navigate_prev(self) -> NavigationResult:
        """Navigate one month backward."""
        return self.navigate(NavigationDirection.BACKWARD)

    def navigate_next(self) -> NavigationResult:
        """Navigate one month forward."""
        return self.navigate(NavigationDirection.FORWARD)

    def jump_to(self, month: date) -> NavigationResult:
        """Show ``month`` as the first visible month, without a transition.

        Args:
            month: Any day in the target month

        Returns:
            Result carrying the new visible months, or the rejection reason
        """
        error = self._check_request()
        if error is not None:
            return self._reject(error, "jump")

        candidate = VisibleMonths.starting_at(to_calendar_date(month), self._number_of_months)
        if not self._within_bounds(candidate):
            error = NavigationBoundExceeded(candidate, self._min_month, self._max_month)
            return self._reject(error, "jump")

        old_months = self._visible
        self._visible = candidate

        logger.debug(f"Jumped to months: {old_months} -> {self._visible}")
        self._notify_change(None)
        return NavigationResult(True, self._visible)

    def teardown(self) -> None:
        """Cancel any pending transition timer and stop all notifications."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._transition_ends_at = None
        self._phase = NavigationPhase.IDLE
        self._torn_down = True
        self._change_callbacks.clear()
        logger.debug("Navigation state torn down")

    def add_change_callback(self, callback: NavigationCallback) -> None:
        """Add a callback to be called when the visible months change.

        Args:
            callback: Function called with the direction (``None`` for jumps)
                and the new visible months
        """
        self._change_callbacks.append(callback)
        logger.debug("Added navigation change callback")

    def remove_change_callback(self, callback: NavigationCallback) -> None:
        """Remove a navigation change callback.

        Args:
            callback: Callback function to remove
        """
        if callback in self._change_callbacks:
            self._change_callbacks.remove(callback)
            logger.debug("Removed navigation change callback")

    def _poll(self) -> None:
        if self._phase is not NavigationPhase.TRANSITIONING:
            return
        if self._scheduler is not None:
            self._scheduler.poll()
        # A timer stranded on a finished event loop never fires; the deadline still ends it.
        if (
            self._phase is NavigationPhase.TRANSITIONING
            and self._transition_ends_at is not None
            and self._clock() >= self._transition_ends_at
        ):
            logger.debug("Transition timer overdue, finishing transition by deadline")
            if self._timer is not None:
                self._timer.cancel()
            self._finish_transition()

    def _check_request(self) -> Optional[NavigationError]:
        if self._torn_down:
            return ControllerTornDown()
        if self.phase is NavigationPhase.TRANSITIONING:
            return NavigationInProgress()
        return None

    def _reject(self, error: NavigationError, action: str) -> NavigationResult:
        logger.debug(f"Navigation {action} rejected: {error}")
        return NavigationResult(False, self._visible, error)

    def _within_bounds(self, candidate: VisibleMonths) -> bool:
        if self._min_month is not None and candidate.first < self._min_month:
            return False
        if self._max_month is not None and candidate.last > self._max_month:
            return False
        return True

    def _clamp(self, month: date) -> date:
        first = start_of_month(month)
        if self._max_month is not None:
            latest = add_months(self._max_month, -(self._number_of_months - 1))
            if first > latest:
                first = latest
        if self._min_month is not None and first < self._min_month:
            first = self._min_month
        if first != start_of_month(month):
            logger.debug(f"Initial month {month:%Y-%m} clamped to {first:%Y-%m}")
        return first

    def _begin_transition(self) -> None:
        if self._transition_duration == 0 or self._scheduler is None:
            return
        delay = self._transition_duration / 1000.0
        ends_at = self._clock() + delay
        self._timer = self._scheduler.schedule(delay, self._finish_transition)
        self._transition_ends_at = ends_at
        self._phase = NavigationPhase.TRANSITIONING

    def _finish_transition(self) -> None:
        self._timer = None
        self._transition_ends_at = None
        if self._torn_down:
            return
        self._phase = NavigationPhase.IDLE
        logger.debug("Month transition finished")

    def _notify_change(self, direction: Optional[NavigationDirection]) -> None:
        """Notify all registered callbacks of a visible month change."""
        for callback in list(self._change_callbacks):
            try:
                callback(direction, self._visible)
            except Exception as e:
                logger.error(f"Error in navigation change callback: {e}")

    def __str__(self) -> str:
        """String representation of navigation state."""
        return f"NavigationStateMachine(visible={self._visible}, phase={self._phase.value})"

    def __repr__(self) -> str:
        """Detailed string representation."""
        return (
            f"NavigationStateMachine(visible_months={self._visible!r}, "
            f"phase={self._phase!r}, torn_down={self._torn_down})"
        )
