"""Month grid generation."""

import calendar
import logging
from datetime import date
from typing import Iterable, Optional

from ..constraints.evaluator import EvaluationPass
from ..utils.dates import iso_week_of, start_of_month
from .hooks import RenderHooks
from .locales import DEFAULT_LOCALE, format_month, get_locale
from .models import (
    DayCell,
    MonthCaptionContext,
    MonthGrid,
    MonthSelectCallback,
    WeekRow,
    YearSelectCallback,
)

logger = logging.getLogger(__name__)


def _ignore_select(month: date, value: int) -> None:
    logger.debug(f"Caption select ignored for {month:%Y-%m}: {value}")


class MonthGridBuilder:
    """Builds week-by-week grids of day cells for anchor months."""

    def __init__(
        self,
        locale: Optional[str] = None,
        month_format: Optional[str] = None,
        first_weekday: Optional[int] = None,
        hooks: Optional[RenderHooks] = None,
        on_month_select: Optional[MonthSelectCallback] = None,
        on_year_select: Optional[YearSelectCallback] = None,
    ) -> None:
        """Initialize the grid builder.

        Args:
            locale: Locale code used for captions and the week start
            month_format: Caption template, defaults to the locale's own
            first_weekday: Override for the locale's first day of week (0=Monday)
            hooks: Caller rendering hooks
            on_month_select: Callback exposed to custom month captions
            on_year_select: Callback exposed to custom month captions
        """
        self.locale = locale or DEFAULT_LOCALE
        self.locale_info = get_locale(self.locale)
        self.month_format = month_format
        self.first_weekday = (
            self.locale_info.first_weekday if first_weekday is None else first_weekday
        )
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0-6, got {self.first_weekday}")
        self.hooks = hooks or RenderHooks()
        self._on_month_select = on_month_select or _ignore_select
        self._on_year_select = on_year_select or _ignore_select
        self._calendar = calendar.Calendar(firstweekday=self.first_weekday)

    def month_label(self, month: date) -> str:
        if self.hooks.render_month_text is not None:
            return self.hooks.render_month_text(month)
        return format_month(month, self.month_format, self.locale)

    def weekday_labels(self) -> tuple[str, ...]:
        return tuple(self.locale_info.weekday_headers(self.first_weekday))

    def build(
        self,
        visible_months: Iterable[date],
        evaluation_pass: EvaluationPass,
        include_outside_days: bool = False,
        selected_date: Optional[date] = None,
        hovered_date: Optional[date] = None,
    ) -> list[MonthGrid]:
        """Build one grid per anchor month, in the order given."""
        return [
            self.build_month(
                month, evaluation_pass, include_outside_days, selected_date, hovered_date
            )
            for month in visible_months
        ]

    def build_month(
        self,
        month: date,
        evaluation_pass: EvaluationPass,
        include_outside_days: bool = False,
        selected_date: Optional[date] = None,
        hovered_date: Optional[date] = None,
    ) -> MonthGrid:
        month = start_of_month(month)
        weeks: list[WeekRow] = []
        week_numbers: list[int] = []

        for week in self._calendar.monthdatescalendar(month.year, month.month):
            row: list[Optional[DayCell]] = []
            for day in week:
                in_month = day.month == month.month
                if not in_month and not include_outside_days:
                    row.append(None)
                    continue
                modifiers = evaluation_pass.modifiers(day)
                row.append(
                    DayCell(
                        date=day,
                        belongs_to_visible_month=in_month,
                        status=evaluation_pass.evaluate(day),
                        modifiers=modifiers,
                        is_today=day == evaluation_pass.today,
                        is_selected=selected_date is not None and day == selected_date,
                        is_hovered=hovered_date is not None and day == hovered_date,
                    )
                )
            weeks.append(tuple(row))
            first_in_month = next(d for d in week if d.month == month.month)
            week_numbers.append(iso_week_of(first_in_month))

        context = MonthCaptionContext(
            month=month,
            on_month_select=self._on_month_select,
            on_year_select=self._on_year_select,
        )
        caption = None
        if self.hooks.render_month_element is not None:
            caption = self.hooks.render_month_element(context)

        return MonthGrid(
            month=month,
            label=self.month_label(month),
            weekday_labels=self.weekday_labels(),
            weeks=tuple(weeks),
            week_numbers=tuple(week_numbers),
            caption_context=context,
            caption=caption,
        )

