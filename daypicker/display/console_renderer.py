"""Console-based calendar renderer."""

import logging
from typing import TYPE_CHECKING, Any, List, Optional

from ..config.settings import Orientation
from .hooks import DEFAULT_STYLES, DayStyleSet, RenderHooks
from .models import MonthGrid

if TYPE_CHECKING:
    from ..ui.controller import CalendarView

logger = logging.getLogger(__name__)

MONTH_GAP = "   "


class ConsoleRenderer:
    """Renders calendar views as plain text for terminals and tests."""

    def __init__(
        self,
        hooks: Optional[RenderHooks] = None,
        style_set: DayStyleSet = DEFAULT_STYLES,
        show_week_numbers: bool = False,
    ) -> None:
        """Initialize console renderer.

        Args:
            hooks: Rendering hooks used for day cells
            style_set: Text templates for day states
            show_week_numbers: Prefix each week row with its ISO week number
        """
        self.hooks = hooks or RenderHooks()
        self.style_set = style_set
        self.show_week_numbers = show_week_numbers

        logger.debug("Console renderer initialized")

    @property
    def month_width(self) -> int:
        width = 7 * self.style_set.width
        if self.show_week_numbers:
            width += 4
        return width

    def render(self, view: "CalendarView") -> str:
        """Render a calendar view.

        Args:
            view: Month grids and navigation data

        Returns:
            Formatted string for console display
        """
        blocks = [self.render_month(grid) for grid in view.months]
        if view.orientation is Orientation.VERTICAL:
            body = self._stack(blocks, view.vertical_border_spacing)
            total_width = self.month_width
        else:
            body = self._side_by_side(blocks)
            total_width = len(blocks) * self.month_width + (len(blocks) - 1) * len(MONTH_GAP)

        lines = [self._nav_line(view, total_width)]
        lines.extend(body)
        lines.append("-" * total_width)
        selected = view.selected_date.isoformat() if view.selected_date else "none"
        lines.append(f"Selected: {selected}")
        if view.calendar_info is not None:
            lines.append(str(view.calendar_info))
        return "\n".join(line.rstrip() for line in lines)

    def render_month(self, grid: MonthGrid) -> List[str]:
        """Render one month as fixed-width lines.

        Args:
            grid: Month grid to render

        Returns:
            Caption, weekday header and one line per week
        """
        width = self.style_set.width
        prefix_blank = "    " if self.show_week_numbers else ""
        caption = grid.caption if grid.caption is not None else grid.label

        lines = [str(caption).center(self.month_width)]
        lines.append(prefix_blank + "".join(label.rjust(width) for label in grid.weekday_labels))
        for week_number, week in zip(grid.week_numbers, grid.weeks):
            prefix = f"{week_number:>3} " if self.show_week_numbers else ""
            cells = []
            for cell in week:
                if cell is None:
                    cells.append(" " * width)
                else:
                    cells.append(self._fit(self.hooks.calendar_day(cell, self.style_set)))
            lines.append(prefix + "".join(cells))
        return [line.ljust(self.month_width) for line in lines]

    def render_error(self, error_message: str) -> str:
        """Render an error message.

        Args:
            error_message: Error message to display

        Returns:
            Formatted error display
        """
        rule = "=" * self.month_width
        return "\n".join([rule, "ERROR", rule, error_message, rule])

    def _fit(self, contents: Any) -> str:
        return str(contents).rjust(self.style_set.width)

    def _nav_line(self, view: "CalendarView", total_width: int) -> str:
        prev_text = str(view.nav_prev) if view.can_navigate_prev else ""
        next_text = str(view.nav_next) if view.can_navigate_next else ""
        padding = max(total_width - len(prev_text) - len(next_text), 1)
        return prev_text + " " * padding + next_text

    def _side_by_side(self, blocks: List[List[str]]) -> List[str]:
        height = max(len(block) for block in blocks)
        blank = " " * self.month_width
        padded = [block + [blank] * (height - len(block)) for block in blocks]
        return [MONTH_GAP.join(row) for row in zip(*padded)]

    def _stack(self, blocks: List[List[str]], spacing: int) -> List[str]:
        lines: List[str] = []
        for index, block in enumerate(blocks):
            if index:
                lines.extend([""] * spacing)
            lines.extend(block)
        return lines
