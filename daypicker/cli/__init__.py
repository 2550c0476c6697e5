"""CLI module for the day picker.

Renders a configured calendar to the terminal, optionally after navigating
and selecting a date, so the controller can be inspected by hand.
"""

import logging
import sys
from datetime import date
from typing import Optional, Sequence

from ..config.exceptions import SettingsError
from ..config.settings import load_settings
from ..display.console_renderer import ConsoleRenderer
from ..display.renderer_protocol import RendererProtocol
from ..ui.controller import DayPickerSingleDateController
from ..utils.logging import apply_command_line_overrides, setup_logging
from .config import build_predicates, build_settings_overrides
from .parser import create_parser, parse_date

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point with argument parsing.

    Args:
        argv: Command-line arguments, defaults to ``sys.argv[1:]``

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(**build_settings_overrides(args))
    except SettingsError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    apply_command_line_overrides(settings, args)
    setup_logging(settings)

    today = args.today or date.today()
    renderer: RendererProtocol = ConsoleRenderer(show_week_numbers=args.week_numbers)
    exit_code = 0

    with DayPickerSingleDateController(
        settings,
        selected_date=args.date,
        focused=True,
        initial_visible_month=(lambda: args.month) if args.month else None,
        predicates=build_predicates(args),
        today=lambda: today,
    ) as controller:
        for _ in range(max(args.next, 0)):
            result = controller.navigate_next()
            if not result:
                logger.warning(f"Stopped navigating forward: {result.error}")
                break

        for _ in range(max(args.prev, 0)):
            result = controller.navigate_prev()
            if not result:
                logger.warning(f"Stopped navigating backward: {result.error}")
                break

        if args.select is not None:
            selection = controller.request_select(args.select)
            if not selection:
                print(renderer.render_error(f"Cannot select {args.select}: {selection.error}"))
                exit_code = 1

        print(renderer.render(controller.render()))

    return exit_code


__all__ = [
    "create_parser",
    "main",
    "parse_date",
]
