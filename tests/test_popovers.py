"""
Unit tests for the outside-press popover coordinator.
"""

import pytest

from session_booking.popovers import (
    CALENDAR,
    END_TIME,
    START_TIME,
    STUDENT_SEARCH,
    KeyRegion,
    PopoverCoordinator,
)


class TestOutsidePress:
    """Test cases for pointer_press()."""

    def test_press_outside_closes(self, popovers):
        """Test a press outside the calendar region closes it."""
        popovers.open(CALENDAR)
        closed = popovers.pointer_press("form:subject")
        assert closed == [CALENDAR]
        assert not popovers.is_open(CALENDAR)

    def test_press_inside_keeps_open(self, popovers):
        """Test a press inside the calendar region leaves it open."""
        popovers.open(CALENDAR)
        assert popovers.pointer_press("calendar:day:2024-03-10") == []
        assert popovers.is_open(CALENDAR)

    def test_each_popover_closes_independently(self, popovers):
        """Test only popovers the press falls outside of are closed."""
        popovers.open(START_TIME)
        popovers.open(END_TIME)
        popovers.pointer_press("start_time:hour:09")
        assert popovers.is_open(START_TIME)
        assert not popovers.is_open(END_TIME)

    def test_unregistered_region_is_skipped(self):
        """Test a popover without a bound region is left alone."""
        popovers = PopoverCoordinator()
        popovers.open(STUDENT_SEARCH)
        assert popovers.pointer_press("anything") == []
        assert popovers.is_open(STUDENT_SEARCH)

    def test_unregister(self, popovers):
        popovers.unregister(CALENDAR)
        popovers.open(CALENDAR)
        popovers.pointer_press("elsewhere")
        assert popovers.is_open(CALENDAR)


class TestToggle:
    """Test cases for trigger handling."""

    def test_opening_one_does_not_close_another(self, popovers):
        popovers.toggle(CALENDAR)
        popovers.toggle(STUDENT_SEARCH)
        assert popovers.open_names() == [CALENDAR, STUDENT_SEARCH]

    def test_trigger_press_is_not_outside_for_own_popover(self, popovers):
        """Test the trigger's own press toggles instead of dismissing."""
        assert popovers.press_and_toggle(CALENDAR, "calendar:trigger") is True
        assert popovers.press_and_toggle(CALENDAR, "calendar:trigger") is False

    def test_trigger_press_dismisses_others(self, popovers):
        popovers.open(START_TIME)
        popovers.press_and_toggle(END_TIME, "end_time:trigger")
        assert popovers.open_names() == [END_TIME]

    def test_trigger_outside_own_region_rejected(self, popovers):
        with pytest.raises(ValueError):
            popovers.press_and_toggle(CALENDAR, "form:submit")

    def test_unknown_name(self, popovers):
        with pytest.raises(KeyError):
            popovers.toggle("tooltip")

    def test_close_all(self, popovers):
        popovers.open(CALENDAR)
        popovers.open(END_TIME)
        popovers.close_all()
        assert popovers.open_names() == []


class TestKeyRegion:
    """Test cases for KeyRegion."""

    def test_prefix_match(self):
        region = KeyRegion("calendar:", "date-trigger")
        assert region.contains("calendar:next")
        assert region.contains("date-trigger")
        assert not region.contains("start_time:hour:10")

    def test_non_string_target(self):
        assert not KeyRegion("calendar:").contains(None)

    def test_needs_prefix(self):
        with pytest.raises(ValueError):
            KeyRegion()
