"""Renderer protocol interface for type consistency."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..ui.controller import CalendarView


class RendererProtocol(Protocol):
    """Protocol defining the interface that all calendar renderers must implement."""

    def render(self, view: "CalendarView") -> str:
        """Render a calendar view to formatted output.

        Args:
            view: Month grids and navigation data for one frame

        Returns:
            Formatted string for display
        """
        ...

    def render_error(self, error_message: str) -> str:
        """Render an error message.

        Args:
            error_message: Error message to display

        Returns:
            Formatted error display
        """
        ...
