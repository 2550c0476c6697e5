"""Controller components for single-date selection and month navigation."""

from .controller import CalendarView, DayPickerSingleDateController
from .navigation import NavigationDirection, NavigationStateMachine, VisibleMonths
from .selection import SelectionController, SelectionResult

__all__ = [
    "CalendarView",
    "DayPickerSingleDateController",
    "NavigationDirection",
    "NavigationStateMachine",
    "SelectionController",
    "SelectionResult",
    "VisibleMonths",
]
