"""Unit tests for rendering hooks and day styles."""

from datetime import date
from unittest.mock import Mock

import pytest

from daypicker.constraints.models import DayStatus
from daypicker.display.hooks import (
    DEFAULT_NAV_NEXT,
    DEFAULT_NAV_PREV,
    DEFAULT_STYLES,
    DayStyleSet,
    RenderHooks,
    default_calendar_day,
)
from daypicker.display.models import DayCell


def make_cell(status=DayStatus.SELECTABLE, **kwargs):
    values = {"date": date(2024, 3, 20), "belongs_to_visible_month": True, "status": status}
    values.update(kwargs)
    return DayCell(**values)


class TestDayStyleSet:
    """Test template selection for day states."""

    @pytest.mark.parametrize(
        "cell,expected",
        [
            (make_cell(), "{}"),
            (make_cell(DayStatus.BLOCKED), "{}x"),
            (make_cell(DayStatus.HIGHLIGHTED), "{}*"),
            (make_cell(DayStatus.OUTSIDE_RANGE), "{}."),
            (make_cell(belongs_to_visible_month=False), "({})"),
            (make_cell(DayStatus.BLOCKED, is_selected=True), "[{}]"),
            (make_cell(DayStatus.HIGHLIGHTED, is_hovered=True), "<{}>"),
        ],
    )
    def test_template_for(self, cell, expected):
        assert DEFAULT_STYLES.template_for(cell) == expected

    def test_default_calendar_day_pads_to_width(self):
        assert default_calendar_day(make_cell(), DEFAULT_STYLES) == "   20"
        assert default_calendar_day(make_cell(is_selected=True), DEFAULT_STYLES) == " [20]"

    def test_custom_style_set(self):
        styles = DayStyleSet(blocked="~{}~", width=6)
        assert default_calendar_day(make_cell(DayStatus.BLOCKED), styles) == "  ~20~"


class TestRenderHooks:
    """Test hook defaults and overrides."""

    def test_defaults(self):
        hooks = RenderHooks()
        assert hooks.day_contents(date(2024, 3, 5)) == "5"
        assert hooks.calendar_info() is None
        assert hooks.nav_prev_contents() == DEFAULT_NAV_PREV
        assert hooks.nav_next_contents() == DEFAULT_NAV_NEXT

    def test_day_contents_hook_feeds_default_day_renderer(self):
        hooks = RenderHooks(render_day_contents=lambda day: f"{day:%d}")
        assert hooks.calendar_day(make_cell(date=date(2024, 3, 5))) == "   05"

    def test_calendar_day_hook_replaces_composition(self):
        render_day = Mock(return_value="custom")
        hooks = RenderHooks(render_calendar_day=render_day)
        cell = make_cell()

        assert hooks.calendar_day(cell) == "custom"
        render_day.assert_called_once_with(cell, DEFAULT_STYLES)

    def test_calendar_info_and_nav_overrides(self):
        hooks = RenderHooks(
            render_calendar_info=lambda: "Pick a delivery day",
            nav_prev="prev",
            nav_next="next",
        )
        assert hooks.calendar_info() == "Pick a delivery day"
        assert hooks.nav_prev_contents() == "prev"
        assert hooks.nav_next_contents() == "next"
