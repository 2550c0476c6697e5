"""Command-line argument parsing for the day picker.

This module handles all command-line argument parsing functionality,
including setup of argument groups and date validation.
"""

import argparse
import logging
from datetime import date
from pathlib import Path

from .. import __version__
from ..display.locales import available_locales
from ..utils.dates import to_calendar_date
from ..utils.exceptions import InvalidDate

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "VERBOSE", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_date(date_str: str) -> date:
    """Parse an ISO date string for command-line arguments.

    Accepts full dates (``2024-03-15``) and months (``2024-03``, read as the
    first of the month).

    Args:
        date_str: Date string to parse

    Returns:
        Parsed calendar date

    Raises:
        argparse.ArgumentTypeError: If the string is not an ISO date

    Example:
        >>> parse_date("2024-03")
        datetime.date(2024, 3, 1)
    """
    try:
        return to_calendar_date(date_str)
    except InvalidDate as err:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: {date_str}. Use YYYY-MM-DD or YYYY-MM"
        ) from err


def parse_weekday(value: str) -> int:
    """Parse a weekday number, 0 (Monday) to 6 (Sunday)."""
    try:
        weekday = int(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(f"Invalid weekday: {value}. Use 0-6") from err
    if not 0 <= weekday <= 6:
        raise argparse.ArgumentTypeError(f"Invalid weekday: {value}. Use 0-6")
    return weekday


def create_parser() -> argparse.ArgumentParser:
    """Create command line argument parser.

    Options are grouped into calendar layout, constraints, actions and
    logging.

    Returns:
        Fully configured ArgumentParser instance

    Example:
        >>> parser = create_parser()
        >>> args = parser.parse_args(["--months", "3", "--next", "1"])
        >>> args.months
        3
    """
    parser = argparse.ArgumentParser(
        prog="daypicker",
        description="Day picker - render a single-date calendar in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                                 # Current month, past days disabled
  %(prog)s --months 3 --month 2024-01      # January to March 2024
  %(prog)s --locale zh-CN --month-format "yyyy[年]M[月]"
  %(prog)s --block-weekday 4 --select 2024-03-14 --today 2024-03-01
        """,
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}", help="Show version information"
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging and detailed output"
    )

    parser.add_argument("--config", type=Path, dest="config_file", help="YAML settings file")

    # Layout arguments
    layout_group = parser.add_argument_group("layout", "Calendar layout and locale options")

    layout_group.add_argument("--months", type=int, help="Number of visible months")

    layout_group.add_argument(
        "--month", type=parse_date, help="First visible month (YYYY-MM), defaults to the selected date"
    )

    layout_group.add_argument(
        "--locale",
        help=f"Locale code (built in: {', '.join(available_locales())})",
    )

    layout_group.add_argument("--month-format", help="Month caption template, e.g. 'MMMM yyyy'")

    layout_group.add_argument(
        "--first-day-of-week",
        type=parse_weekday,
        help="First day of the week, 0 (Monday) to 6 (Sunday)",
    )

    layout_group.add_argument(
        "--outside-days", action="store_true", help="Show days of adjacent months"
    )

    layout_group.add_argument(
        "--vertical", action="store_true", help="Stack months vertically instead of side by side"
    )

    layout_group.add_argument(
        "--week-numbers", action="store_true", help="Show ISO week numbers"
    )

    # Constraint arguments
    constraint_group = parser.add_argument_group("constraints", "Which days may be selected")

    constraint_group.add_argument(
        "--today", type=parse_date, help="Pretend today is this date (YYYY-MM-DD)"
    )

    constraint_group.add_argument(
        "--allow-past", action="store_true", help="Do not disable days before today"
    )

    constraint_group.add_argument(
        "--block-weekday",
        type=parse_weekday,
        action="append",
        default=[],
        help="Block a weekday, 0 (Monday) to 6 (Sunday); may be repeated",
    )

    constraint_group.add_argument(
        "--highlight",
        type=parse_date,
        action="append",
        default=[],
        help="Highlight a date; may be repeated",
    )

    constraint_group.add_argument("--min-month", type=parse_date, help="Earliest navigable month")

    constraint_group.add_argument("--max-month", type=parse_date, help="Latest navigable month")

    # Action arguments
    action_group = parser.add_argument_group("actions", "Interactions applied before rendering")

    action_group.add_argument("--date", type=parse_date, help="Initially selected date")

    action_group.add_argument(
        "--next", type=int, default=0, metavar="N", help="Navigate forward N months"
    )

    action_group.add_argument(
        "--prev", type=int, default=0, metavar="N", help="Navigate backward N months"
    )

    action_group.add_argument("--select", type=parse_date, help="Select a date")

    # Logging arguments
    logging_group = parser.add_argument_group("logging", "Logging configuration options")

    logging_group.add_argument(
        "--log-level", choices=LOG_LEVELS, help="Set both console and file log levels"
    )

    logging_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only show errors on console (sets console level to ERROR)",
    )

    logging_group.add_argument(
        "--log-dir", type=Path, help="Directory for log files (enables file logging)"
    )

    logging_group.add_argument(
        "--no-log-colors", action="store_true", help="Disable colored console output"
    )

    return parser


__all__ = [
    "create_parser",
    "parse_date",
    "parse_weekday",
]
