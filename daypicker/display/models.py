"""Immutable render-pass data shared by the grid builder, hooks and renderers."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Iterator, Optional

from ..constraints.models import DayModifiers, DayStatus

MonthSelectCallback = Callable[[date, int], None]
YearSelectCallback = Callable[[date, int], None]


@dataclass(frozen=True)
class DayCell:
    """One day in a month grid."""

    date: date
    belongs_to_visible_month: bool
    status: DayStatus
    modifiers: DayModifiers = field(default_factory=DayModifiers)
    is_today: bool = False
    is_selected: bool = False
    is_hovered: bool = False

    @property
    def is_selectable(self) -> bool:
        return self.status.is_selectable

    @property
    def is_outside_day(self) -> bool:
        return not self.belongs_to_visible_month


@dataclass(frozen=True)
class MonthCaptionContext:
    """Arguments handed to a custom month caption renderer."""

    month: date
    on_month_select: MonthSelectCallback
    on_year_select: YearSelectCallback


# Rows of a month grid; ``None`` is an empty placeholder slot.
WeekRow = tuple[Optional[DayCell], ...]


@dataclass(frozen=True)
class MonthGrid:
    """A rendered month: caption data plus week rows of day cells."""

    month: date
    label: str
    weekday_labels: tuple[str, ...]
    weeks: tuple[WeekRow, ...]
    week_numbers: tuple[int, ...]
    caption_context: MonthCaptionContext
    caption: Any = None

    def cells(self) -> Iterator[DayCell]:
        """All non-placeholder cells in row order."""
        for week in self.weeks:
            for cell in week:
                if cell is not None:
                    yield cell

    def find(self, day: date) -> Optional[DayCell]:
        """The in-month cell for ``day``, falling back to an outside-day cell."""
        outside = None
        for cell in self.cells():
            if cell.date == day:
                if cell.belongs_to_visible_month:
                    return cell
                outside = cell
        return outside
