"""
Unit tests for month grid geometry.
"""

from datetime import date

from session_booking.calendar_engine import (
    CalendarView,
    days_in_month,
    first_weekday_of_month,
    grid_weeks,
    month_grid,
    navigate,
)


class TestDaysInMonth:
    """Test cases for days_in_month()."""

    def test_leap_february(self):
        assert days_in_month(2024, 1) == 29

    def test_common_february(self):
        assert days_in_month(2023, 1) == 28

    def test_january_and_april(self):
        assert days_in_month(2024, 0) == 31
        assert days_in_month(2024, 3) == 30

    def test_century_rule(self):
        assert days_in_month(1900, 1) == 28
        assert days_in_month(2000, 1) == 29


class TestFirstWeekday:
    """Test cases for first_weekday_of_month() (0 = Sunday)."""

    def test_known_months(self):
        # 2024-09-01 was a Sunday, 2024-03-01 a Friday
        assert first_weekday_of_month(2024, 8) == 0
        assert first_weekday_of_month(2024, 2) == 5

    def test_saturday(self):
        # 2025-11-01 is a Saturday
        assert first_weekday_of_month(2025, 10) == 6


class TestNavigate:
    """Test cases for navigate()."""

    def test_forward_over_year_end(self):
        assert navigate(CalendarView(2024, 11), 1) == CalendarView(2025, 0)

    def test_backward_over_year_start(self):
        assert navigate(CalendarView(2024, 0), -1) == CalendarView(2023, 11)

    def test_large_offsets(self):
        assert navigate(CalendarView(2024, 5), 25) == CalendarView(2026, 6)
        assert navigate(CalendarView(2024, 5), -18) == CalendarView(2022, 11)

    def test_zero_keeps_view(self):
        assert navigate(CalendarView(2024, 5), 0) == CalendarView(2024, 5)


class TestMonthGrid:
    """Test cases for grid construction."""

    def test_leading_blanks_then_days(self):
        cells = month_grid(CalendarView(2024, 2))
        assert cells[:5] == [None] * 5
        assert cells[5] == "2024-03-01"
        assert cells[-1] == "2024-03-31"
        assert len(cells) == 5 + 31

    def test_zero_padded_dates(self):
        cells = month_grid(CalendarView(2024, 8))
        assert cells[0] == "2024-09-01"
        assert "2024-09-09" in cells

    def test_weeks_are_rows_of_seven(self):
        weeks = grid_weeks(CalendarView(2024, 2))
        assert all(len(week) == 7 for week in weeks)
        assert weeks[-1][-1] is None


class TestCalendarView:
    """Test cases for CalendarView helpers."""

    def test_containing(self):
        assert CalendarView.containing(date(2024, 3, 10)) == CalendarView(2024, 2)

    def test_from_iso_falls_back(self):
        fallback = date(2025, 1, 15)
        assert CalendarView.from_iso("2024-12-31", fallback) == CalendarView(2024, 11)
        assert CalendarView.from_iso("", fallback) == CalendarView(2025, 0)
        assert CalendarView.from_iso("not-a-date", fallback) == CalendarView(2025, 0)

    def test_title(self):
        assert CalendarView(2024, 0).title == "يناير 2024"
