"""Selected date and focus handling."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Optional

from ..constraints.evaluator import ConstraintEvaluator
from ..utils.dates import to_calendar_date
from ..utils.exceptions import DayNotSelectable, NotFocused, SelectionError
from .navigation import VisibleMonths

logger = logging.getLogger(__name__)

DateChangeCallback = Callable[[Optional[date], VisibleMonths], None]
FocusChangeCallback = Callable[[bool], None]


@dataclass(frozen=True)
class SelectionState:
    """Snapshot of the selection state."""

    selected_date: Optional[date]
    focused: bool
    hovered_date: Optional[date] = None


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a selection request; rejections leave state untouched."""

    success: bool
    date: date
    error: Optional[SelectionError] = None

    def __bool__(self) -> bool:
        return self.success

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class SelectionController:
    """Owns the selected date and the focus flag that gates selection."""

    def __init__(
        self,
        evaluator: ConstraintEvaluator,
        visible_months: Callable[[], VisibleMonths],
        selected_date: Optional[date] = None,
        focused: bool = False,
        on_date_change: Optional[DateChangeCallback] = None,
        on_focus_change: Optional[FocusChangeCallback] = None,
    ) -> None:
        """Initialize the selection controller.

        Args:
            evaluator: Source of day statuses
            visible_months: Returns the currently visible months, reported
                with every date change
            selected_date: Initially selected date
            focused: Whether selection gestures are accepted initially
            on_date_change: Called with the new date (or ``None``) and the
                visible months
            on_focus_change: Called with the new focus flag when it changes
        """
        self.evaluator = evaluator
        self._visible_months = visible_months
        self._selected = to_calendar_date(selected_date) if selected_date is not None else None
        self._focused = focused
        self._hovered: Optional[date] = None
        self._on_date_change = on_date_change
        self._on_focus_change = on_focus_change
        self._muted = False

    @property
    def selected_date(self) -> Optional[date]:
        return self._selected

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def hovered_date(self) -> Optional[date]:
        return self._hovered

    @property
    def state(self) -> SelectionState:
        return SelectionState(self._selected, self._focused, self._hovered)

    def set_focused(self, focused: bool) -> None:
        """Set the focus flag; losing focus clears any hover intent."""
        focused = bool(focused)
        if focused == self._focused:
            return
        self._focused = focused
        if not focused:
            self._hovered = None
        logger.debug(f"Focus changed to {focused}")
        self._emit(self._on_focus_change, "focus change", focused)

    def request_select(self, day: Any) -> SelectionResult:
        """Select ``day`` if the controller is focused and the day is selectable.

        Re-selecting the currently selected day succeeds and notifies again.

        Raises:
            InvalidDate: If ``day`` is not a date
        """
        day = to_calendar_date(day)
        if not self._focused:
            logger.debug(f"Selection of {day} rejected: not focused")
            return SelectionResult(False, day, NotFocused(day))

        status = self.evaluator.evaluate(day)
        if not status.is_selectable:
            logger.debug(f"Selection of {day} rejected: {status.value}")
            return SelectionResult(False, day, DayNotSelectable(day, status))

        old_date = self._selected
        self._selected = day
        logger.debug(f"Selected date changed: {old_date} -> {day}")
        self._emit(self._on_date_change, "date change", day, self._visible_months())
        return SelectionResult(True, day)

    def clear_selection(self) -> None:
        """Drop the selected date, notifying only when one was selected."""
        if self._selected is None:
            return
        old_date = self._selected
        self._selected = None
        logger.debug(f"Selection cleared (was {old_date})")
        self._emit(self._on_date_change, "date change", None, self._visible_months())

    def hover(self, day: Any) -> bool:
        """Record a hover intent over ``day``; ignored unless it is interactive."""
        day = to_calendar_date(day)
        if not self.is_day_interactive(day):
            return False
        self._hovered = day
        return True

    def unhover(self) -> None:
        self._hovered = None

    def is_day_interactive(self, day: Any) -> bool:
        """Whether a gesture on ``day`` could select it right now."""
        if not self._focused:
            return False
        return self.evaluator.evaluate(to_calendar_date(day)).is_selectable

    def reset(self, selected_date: Optional[date] = None, focused: bool = False) -> None:
        """Replace the whole selection state without notifying anyone."""
        self._selected = to_calendar_date(selected_date) if selected_date is not None else None
        self._focused = focused
        self._hovered = None
        logger.debug(f"Selection reset: selected={self._selected}, focused={focused}")

    def mute(self) -> None:
        """Stop all notifications and refuse further selections."""
        self._muted = True
        self._focused = False
        self._hovered = None

    def _emit(self, callback: Optional[Callable[..., None]], name: str, *args: Any) -> None:
        if callback is None or self._muted:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"Error in {name} callback: {e}")
