"""Locale data and month caption formatting.

Only the formatting contract is implemented here: a locale supplies month
names, weekday abbreviations, the first day of the week and a default month
caption template. A handful of locales ship built in; callers can register
more with :func:`register_locale`.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..utils.dates import to_calendar_date

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class LocaleInfo:
    """Formatting data for one locale.

    Weekday abbreviations are in Python weekday order (Monday first);
    ``first_weekday`` uses the same numbering (0=Monday .. 6=Sunday).
    """

    code: str
    first_weekday: int
    month_names: tuple[str, ...]
    month_abbreviations: tuple[str, ...]
    weekday_abbreviations: tuple[str, ...]
    default_month_format: str = "MMMM yyyy"

    def __post_init__(self) -> None:
        if len(self.month_names) != 12 or len(self.month_abbreviations) != 12:
            raise ValueError(f"Locale {self.code} must define 12 month names")
        if len(self.weekday_abbreviations) != 7:
            raise ValueError(f"Locale {self.code} must define 7 weekday abbreviations")
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(f"Locale {self.code} has invalid first_weekday {self.first_weekday}")

    def weekday_headers(self, first_weekday: Optional[int] = None) -> list[str]:
        """Weekday abbreviations rotated to start on ``first_weekday``."""
        start = self.first_weekday if first_weekday is None else first_weekday
        return [self.weekday_abbreviations[(start + i) % 7] for i in range(7)]


_EN_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
_EN_WEEKDAYS = ("Mo", "Tu", "We", "Th", "Fr", "Sa", "Su")

_LOCALES: dict[str, LocaleInfo] = {}


def _normalize(code: str) -> str:
    return code.strip().replace("_", "-").lower()


def register_locale(info: LocaleInfo) -> None:
    """Add or replace a locale in the registry."""
    _LOCALES[_normalize(info.code)] = info
    logger.debug(f"Registered locale {info.code}")


def available_locales() -> list[str]:
    return sorted(info.code for info in _LOCALES.values())


def get_locale(code: Optional[str]) -> LocaleInfo:
    """Look up a locale, falling back to its language and then to English.

    ``pt_br``, ``PT-BR`` and ``pt-BR`` all resolve to the same entry; ``de-AT``
    resolves to ``de`` when no exact entry exists.
    """
    if not code:
        return _LOCALES[DEFAULT_LOCALE]
    key = _normalize(code)
    if key in _LOCALES:
        return _LOCALES[key]
    language = key.split("-", 1)[0]
    if language in _LOCALES:
        return _LOCALES[language]
    logger.warning(f"Unknown locale {code!r}, using {DEFAULT_LOCALE}")
    return _LOCALES[DEFAULT_LOCALE]


_TOKEN_RE = re.compile(r"\[([^\]]*)\]|'([^']*)'|yyyy|YYYY|yy|YY|MMMM|MMM|MM|M")


def format_month(month: date, template: Optional[str] = None, locale: Optional[str] = None) -> str:
    """Format a month caption.

    Supported tokens: ``yyyy``/``YYYY`` (year), ``yy``/``YY`` (two-digit year),
    ``MMMM`` (month name), ``MMM`` (abbreviation), ``MM`` (zero padded), ``M``.
    Text in ``[brackets]`` or ``'quotes'`` is copied literally, so
    ``yyyy[年]MMMM`` renders as ``2024年三月`` for ``zh-CN``.
    """
    month = to_calendar_date(month)
    info = get_locale(locale)
    pattern = template or info.default_month_format

    def _replace(match: "re.Match[str]") -> str:
        bracketed, quoted = match.group(1), match.group(2)
        if bracketed is not None:
            return bracketed
        if quoted is not None:
            return quoted
        token = match.group(0)
        if token in ("yyyy", "YYYY"):
            return f"{month.year:04d}"
        if token in ("yy", "YY"):
            return f"{month.year % 100:02d}"
        if token == "MMMM":
            return info.month_names[month.month - 1]
        if token == "MMM":
            return info.month_abbreviations[month.month - 1]
        if token == "MM":
            return f"{month.month:02d}"
        return str(month.month)

    return _TOKEN_RE.sub(_replace, pattern)


for _info in (
    LocaleInfo(
        code="en",
        first_weekday=6,
        month_names=_EN_MONTHS,
        month_abbreviations=tuple(m[:3] for m in _EN_MONTHS),
        weekday_abbreviations=_EN_WEEKDAYS,
    ),
    LocaleInfo(
        code="en-US",
        first_weekday=6,
        month_names=_EN_MONTHS,
        month_abbreviations=tuple(m[:3] for m in _EN_MONTHS),
        weekday_abbreviations=_EN_WEEKDAYS,
    ),
    LocaleInfo(
        code="en-GB",
        first_weekday=0,
        month_names=_EN_MONTHS,
        month_abbreviations=tuple(m[:3] for m in _EN_MONTHS),
        weekday_abbreviations=_EN_WEEKDAYS,
    ),
    LocaleInfo(
        code="de",
        first_weekday=0,
        month_names=(
            "Januar", "Februar", "März", "April", "Mai", "Juni",
            "Juli", "August", "September", "Oktober", "November", "Dezember",
        ),
        month_abbreviations=(
            "Jan", "Feb", "Mär", "Apr", "Mai", "Jun",
            "Jul", "Aug", "Sep", "Okt", "Nov", "Dez",
        ),
        weekday_abbreviations=("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So"),
    ),
    LocaleInfo(
        code="fr",
        first_weekday=0,
        month_names=(
            "janvier", "février", "mars", "avril", "mai", "juin",
            "juillet", "août", "septembre", "octobre", "novembre", "décembre",
        ),
        month_abbreviations=(
            "janv.", "févr.", "mars", "avr.", "mai", "juin",
            "juil.", "août", "sept.", "oct.", "nov.", "déc.",
        ),
        weekday_abbreviations=("lu", "ma", "me", "je", "ve", "sa", "di"),
    ),
    LocaleInfo(
        code="es",
        first_weekday=0,
        month_names=(
            "enero", "febrero", "marzo", "abril", "mayo", "junio",
            "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
        ),
        month_abbreviations=(
            "ene", "feb", "mar", "abr", "may", "jun",
            "jul", "ago", "sept", "oct", "nov", "dic",
        ),
        weekday_abbreviations=("lu", "ma", "mi", "ju", "vi", "sá", "do"),
        default_month_format="MMMM [de] yyyy",
    ),
    LocaleInfo(
        code="pt-BR",
        first_weekday=6,
        month_names=(
            "janeiro", "fevereiro", "março", "abril", "maio", "junho",
            "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
        ),
        month_abbreviations=(
            "jan", "fev", "mar", "abr", "mai", "jun",
            "jul", "ago", "set", "out", "nov", "dez",
        ),
        weekday_abbreviations=("seg", "ter", "qua", "qui", "sex", "sáb", "dom"),
        default_month_format="MMMM [de] yyyy",
    ),
    LocaleInfo(
        code="ru",
        first_weekday=0,
        month_names=(
            "январь", "февраль", "март", "апрель", "май", "июнь",
            "июль", "август", "сентябрь", "октябрь", "ноябрь", "декабрь",
        ),
        month_abbreviations=(
            "янв", "фев", "мар", "апр", "май", "июн",
            "июл", "авг", "сен", "окт", "ноя", "дек",
        ),
        weekday_abbreviations=("пн", "вт", "ср", "чт", "пт", "сб", "вс"),
    ),
    LocaleInfo(
        code="zh-CN",
        first_weekday=0,
        month_names=(
            "一月", "二月", "三月", "四月", "五月", "六月",
            "七月", "八月", "九月", "十月", "十一月", "十二月",
        ),
        month_abbreviations=tuple(f"{i}月" for i in range(1, 13)),
        weekday_abbreviations=("一", "二", "三", "四", "五", "六", "日"),
        default_month_format="yyyy[年]M[月]",
    ),
    LocaleInfo(
        code="ja",
        first_weekday=6,
        month_names=tuple(f"{i}月" for i in range(1, 13)),
        month_abbreviations=tuple(f"{i}月" for i in range(1, 13)),
        weekday_abbreviations=("月", "火", "水", "木", "金", "土", "日"),
        default_month_format="yyyy[年]M[月]",
    ),
):
    register_locale(_info)
