"""Rendering hook contracts.

Hooks are optional callables supplied by the caller. They receive frozen
render data only; any state change they want must go back through the
controller's public operations.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Protocol

from ..constraints.models import DayStatus
from .models import DayCell, MonthCaptionContext

DEFAULT_NAV_PREV = "<"
DEFAULT_NAV_NEXT = ">"


class DayContentsRenderer(Protocol):
    """Produces the contents of a single day cell."""

    def __call__(self, day: date) -> Any:
        ...


class CalendarDayRenderer(Protocol):
    """Renders a whole day cell, replacing the default cell composition."""

    def __call__(self, cell: DayCell, style_set: "DayStyleSet") -> Any:
        ...


class MonthTextRenderer(Protocol):
    """Produces the caption text for a month."""

    def __call__(self, month: date) -> str:
        ...


class MonthElementRenderer(Protocol):
    """Composes a month caption, e.g. with month and year pickers."""

    def __call__(self, context: MonthCaptionContext) -> Any:
        ...


class CalendarInfoRenderer(Protocol):
    """Produces an auxiliary info panel shown with the calendar."""

    def __call__(self) -> Any:
        ...


@dataclass(frozen=True)
class DayStyleSet:
    """Text templates applied to day contents by the default day renderer.

    Each template receives the contents through ``{}``. The first matching
    state wins, in the order selected, hovered, then the day's status.
    """

    default: str = "{}"
    selected: str = "[{}]"
    hovered: str = "<{}>"
    highlighted: str = "{}*"
    blocked: str = "{}x"
    outside_range: str = "{}."
    outside_day: str = "({})"
    width: int = 5

    def template_for(self, cell: DayCell) -> str:
        if cell.is_selected:
            return self.selected
        if cell.is_hovered:
            return self.hovered
        if cell.status is DayStatus.OUTSIDE_RANGE:
            return self.outside_range
        if cell.status is DayStatus.BLOCKED:
            return self.blocked
        if cell.status is DayStatus.HIGHLIGHTED:
            return self.highlighted
        if cell.is_outside_day:
            return self.outside_day
        return self.default


DEFAULT_STYLES = DayStyleSet()


def default_day_contents(day: date) -> str:
    """Day of month as text."""
    return str(day.day)


def default_calendar_day(cell: DayCell, style_set: DayStyleSet, contents: Any = None) -> str:
    """Compose a day cell from its contents and the matching style template."""
    if contents is None:
        contents = default_day_contents(cell.date)
    text = style_set.template_for(cell).format(contents)
    return text.rjust(style_set.width)


@dataclass(frozen=True)
class RenderHooks:
    """Optional rendering hooks; ``None`` selects the built-in default."""

    render_day_contents: Optional[DayContentsRenderer] = None
    render_calendar_day: Optional[CalendarDayRenderer] = None
    render_month_text: Optional[MonthTextRenderer] = None
    render_month_element: Optional[MonthElementRenderer] = None
    render_calendar_info: Optional[CalendarInfoRenderer] = None
    nav_prev: Any = None
    nav_next: Any = None

    def day_contents(self, day: date) -> Any:
        if self.render_day_contents is not None:
            return self.render_day_contents(day)
        return default_day_contents(day)

    def calendar_day(self, cell: DayCell, style_set: DayStyleSet = DEFAULT_STYLES) -> Any:
        if self.render_calendar_day is not None:
            return self.render_calendar_day(cell, style_set)
        return default_calendar_day(cell, style_set, self.day_contents(cell.date))

    def calendar_info(self) -> Any:
        if self.render_calendar_info is None:
            return None
        return self.render_calendar_info()

    def nav_prev_contents(self) -> Any:
        return DEFAULT_NAV_PREV if self.nav_prev is None else self.nav_prev

    def nav_next_contents(self) -> Any:
        return DEFAULT_NAV_NEXT if self.nav_next is None else self.nav_next
