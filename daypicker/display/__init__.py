"""Month grids, locales, rendering hooks and the console renderer."""

from .console_renderer import ConsoleRenderer
from .grid import MonthGridBuilder
from .hooks import DayStyleSet, RenderHooks
from .renderer_protocol import RendererProtocol

__all__ = ["ConsoleRenderer", "DayStyleSet", "MonthGridBuilder", "RenderHooks", "RendererProtocol"]
