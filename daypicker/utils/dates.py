"""Pure calendar-day arithmetic and comparison helpers.

Every function here works on civil dates (``datetime.date``) and has no state.
Values that cannot be treated as a calendar date raise :class:`InvalidDate`.
"""

from datetime import MAXYEAR, date, datetime, timedelta
from typing import Any

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .exceptions import InvalidDate


def to_calendar_date(value: Any) -> date:
    """Normalize a date-like value to a plain ``date``.

    Args:
        value: ``date``, ``datetime`` (time of day is dropped) or ISO-8601 string

    Returns:
        The calendar day the value denotes

    Raises:
        InvalidDate: If the value is not date-like or cannot be parsed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidDate(f"Cannot parse date string: {e}", value) from e
    raise InvalidDate(f"Expected a date, got {type(value).__name__}", value)


def _shift(day: Any, delta: relativedelta) -> date:
    base = to_calendar_date(day)
    try:
        return base + delta
    except (OverflowError, ValueError) as e:
        raise InvalidDate(f"Date arithmetic out of range: {e}", base) from e


def add_days(day: Any, days: int) -> date:
    """Return ``day`` moved by ``days`` days (negative moves backward)."""
    return _shift(day, relativedelta(days=days))


def add_weeks(day: Any, weeks: int) -> date:
    """Return ``day`` moved by ``weeks`` weeks."""
    return _shift(day, relativedelta(weeks=weeks))


def add_months(day: Any, months: int) -> date:
    """Return ``day`` moved by ``months`` months.

    The day of month is clamped to the length of the target month, so
    2024-01-31 plus one month is 2024-02-29.
    """
    return _shift(day, relativedelta(months=months))


def same_day(a: Any, b: Any) -> bool:
    """True iff both values denote the same calendar day."""
    return to_calendar_date(a) == to_calendar_date(b)


def same_month(a: Any, b: Any) -> bool:
    """True iff both values fall in the same month of the same year."""
    first, second = to_calendar_date(a), to_calendar_date(b)
    return (first.year, first.month) == (second.year, second.month)


def month_of(day: Any) -> int:
    """Month number (1-12) of ``day``."""
    return to_calendar_date(day).month


def year_of(day: Any) -> int:
    """Year of ``day``."""
    return to_calendar_date(day).year


def iso_week_of(day: Any) -> int:
    """ISO-8601 week number of ``day``."""
    return to_calendar_date(day).isocalendar()[1]


def is_inclusively_after_day(a: Any, b: Any) -> bool:
    """True iff ``a`` is the same day as ``b`` or strictly later."""
    return to_calendar_date(a) >= to_calendar_date(b)


def is_inclusively_before_day(a: Any, b: Any) -> bool:
    """True iff ``a`` is the same day as ``b`` or strictly earlier."""
    return to_calendar_date(a) <= to_calendar_date(b)


def start_of_month(day: Any) -> date:
    """First day of the month containing ``day``."""
    return to_calendar_date(day).replace(day=1)


def months_between(a: Any, b: Any) -> int:
    """Number of whole months from the month of ``a`` to the month of ``b``."""
    first, second = to_calendar_date(a), to_calendar_date(b)
    return (second.year - first.year) * 12 + (second.month - first.month)


def start_of_week(day: Any, first_weekday: int = 0) -> date:
    """First day of the week containing ``day``.

    Args:
        day: Any date-like value
        first_weekday: Weekday that starts a week (0=Monday .. 6=Sunday)
    """
    if not 0 <= first_weekday <= 6:
        raise ValueError(f"first_weekday must be 0-6, got {first_weekday}")
    base = to_calendar_date(day)
    offset = (base.weekday() - first_weekday) % 7
    try:
        return base - timedelta(days=offset)
    except OverflowError as e:
        raise InvalidDate(f"Date arithmetic out of range: {e}", base) from e


def week_of_year(day: Any, first_weekday: int = 6) -> int:
    """Locale week number of ``day``.

    Week 1 is the week containing 1 January; weeks start on ``first_weekday``
    (Sunday by default, the US convention). The last days of December belong
    to week 1 of the next year when that week contains 1 January.
    """
    base = to_calendar_date(day)
    week_year = base.year
    if week_year < MAXYEAR:
        next_year_start = start_of_week(date(week_year + 1, 1, 1), first_weekday)
        if base >= next_year_start:
            week_year += 1
    year_start = start_of_week(date(week_year, 1, 1), first_weekday)
    return (start_of_week(base, first_weekday) - year_start).days // 7 + 1
