"""
Unit tests for clock helpers.
"""

import pytest

from session_booking.timevalue import (
    HOURS,
    MINUTES,
    compose_clock,
    duration,
    format_duration,
    parse_clock,
    split_clock,
)


class TestDuration:
    """Test cases for duration()."""

    @pytest.mark.parametrize("start,end,expected", [
        ("09:00", "10:30", 90),
        ("00:00", "23:55", 1435),
        ("13:07", "13:08", 1),
    ])
    def test_exact_minute_difference(self, start, end, expected):
        """Test end after start gives the minute difference."""
        assert duration(start, end) == expected

    @pytest.mark.parametrize("start,end", [
        ("09:00", "09:00"),
        ("10:00", "09:55"),
        ("23:00", "01:00"),
    ])
    def test_not_after_start_is_zero(self, start, end):
        """Test equal, reversed and past-midnight ranges give 0."""
        assert duration(start, end) == 0

    def test_missing_values_are_zero(self):
        """Test unset clock values give 0."""
        assert duration("", "10:00") == 0
        assert duration("09:00", None) == 0

    def test_malformed_value_raises(self):
        """Test malformed clock text is rejected."""
        with pytest.raises(ValueError):
            parse_clock("9h30")


class TestFormatDuration:
    """Test cases for format_duration()."""

    def test_zero(self):
        assert format_duration(0) == "0 دقيقة"
        assert format_duration(None) == "0 دقيقة"

    def test_hours_and_minutes(self):
        assert format_duration(65) == "1 ساعة 5 دقيقة"

    def test_whole_hours_omit_minutes(self):
        assert format_duration(60) == "1 ساعة"
        assert format_duration(180) == "3 ساعة"

    def test_minutes_only(self):
        assert format_duration(45) == "45 دقيقة"


class TestQuantizedChoices:
    """Test cases for the picker choices."""

    def test_hours(self):
        assert len(HOURS) == 24
        assert HOURS[0] == "00" and HOURS[-1] == "23"

    def test_minutes_in_five_minute_steps(self):
        assert MINUTES == ("00", "05", "10", "15", "20", "25",
                           "30", "35", "40", "45", "50", "55")

    def test_split_and_compose(self):
        assert split_clock("") == ("12", "00")
        assert split_clock("09:35") == ("09", "35")
        assert compose_clock("9", "5") == "09:05"

    @pytest.mark.parametrize("value", ["9", "09:00:00", "ab:cd", "9:", ":30"])
    def test_split_malformed_uses_default(self, value):
        """Test externally edited clock text opens the picker at the default."""
        assert split_clock(value) == ("12", "00")
        assert split_clock(value, default="08:30") == ("08", "30")

    def test_split_pads_short_parts(self):
        assert split_clock("9:5") == ("09", "05")
