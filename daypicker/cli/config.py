"""Configuration helpers for the day picker CLI.

Turns parsed arguments into settings overrides and day predicates.
"""

import logging
from datetime import date
from typing import Any

from ..config.settings import Orientation
from ..constraints.models import DayPredicates

logger = logging.getLogger(__name__)

_SETTINGS_ARGS = {
    "months": "number_of_months",
    "locale": "locale",
    "month_format": "month_format",
    "first_day_of_week": "first_day_of_week",
    "min_month": "min_month",
    "max_month": "max_month",
    "config_file": "config_file",
}


def build_settings_overrides(args: Any) -> dict[str, Any]:
    """Collect the settings fields given on the command line.

    Only options the user actually passed become overrides, so environment
    variables and the YAML file still apply to the rest. Transitions are
    disabled because the CLI renders a single frame.

    Args:
        args: Parsed command-line arguments

    Returns:
        Keyword arguments for ``load_settings``
    """
    overrides: dict[str, Any] = {"transition_duration": 0}
    for arg_name, field_name in _SETTINGS_ARGS.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value

    if getattr(args, "outside_days", False):
        overrides["enable_outside_days"] = True
    if getattr(args, "vertical", False):
        overrides["orientation"] = Orientation.VERTICAL

    logger.debug(f"Settings overrides from command line: {sorted(overrides)}")
    return overrides


def build_predicates(args: Any) -> DayPredicates:
    """Build day predicates from ``--block-weekday``, ``--highlight`` and ``--allow-past``."""
    blocked_weekdays = frozenset(getattr(args, "block_weekday", None) or ())
    highlighted = frozenset(getattr(args, "highlight", None) or ())

    def is_day_blocked(day: date) -> bool:
        return day.weekday() in blocked_weekdays

    def is_day_highlighted(day: date) -> bool:
        return day in highlighted

    def never_outside_range(day: date) -> bool:
        return False

    return DayPredicates(
        is_outside_range=never_outside_range if getattr(args, "allow_past", False) else None,
        is_day_blocked=is_day_blocked if blocked_weekdays else None,
        is_day_highlighted=is_day_highlighted if highlighted else None,
    )
