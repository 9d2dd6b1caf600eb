"""
Month grid geometry for the date popover.

Months are 0-based (0 = January) and weekdays start on Sunday (0 = Sunday),
the first day of the week in the console's locale.
"""

import calendar
from datetime import date
from typing import List, NamedTuple, Optional


MONTH_NAMES = (
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
)
WEEKDAY_NAMES = ("أحد", "اثنين", "ثلاثاء", "أربعاء", "خميس", "جمعة", "سبت")


class CalendarView(NamedTuple):
    """Month shown by the date popover, independent of the selected date."""

    year: int
    month: int

    @classmethod
    def containing(cls, day: date) -> "CalendarView":
        return cls(day.year, day.month - 1)

    @classmethod
    def from_iso(cls, value: Optional[str], fallback: date) -> "CalendarView":
        """View for a ``YYYY-MM-DD`` value, ``fallback``'s month if unset or bad."""
        if value:
            try:
                return cls.containing(date.fromisoformat(value))
            except ValueError:
                pass
        return cls.containing(fallback)

    @property
    def title(self) -> str:
        return f"{MONTH_NAMES[self.month]} {self.year}"


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month + 1)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    # calendar counts from Monday
    return (calendar.weekday(year, month + 1, 1) + 1) % 7


def navigate(view: CalendarView, delta: int) -> CalendarView:
    """Shift ``view`` by ``delta`` months, rolling over year boundaries."""
    year, month = divmod(view.year * 12 + view.month + delta, 12)
    return CalendarView(year, month)


def format_day(year: int, month: int, day: int) -> str:
    return f"{year}-{month + 1:02d}-{day:02d}"


def month_grid(view: CalendarView) -> List[Optional[str]]:
    """
    Cells of the month grid: one ``None`` per leading blank, then the
    selectable ``YYYY-MM-DD`` value of each day.
    """
    blanks: List[Optional[str]] = [None] * first_weekday_of_month(*view)
    days = [
        format_day(view.year, view.month, d)
        for d in range(1, days_in_month(*view) + 1)
    ]
    return blanks + days


def grid_weeks(view: CalendarView) -> List[List[Optional[str]]]:
    """``month_grid`` cut into rows of seven, last row padded with ``None``."""
    cells = month_grid(view)
    cells += [None] * (-len(cells) % 7)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
