"""
Clock-string helpers: ``HH:MM`` <-> minutes since midnight, booking
duration and its Arabic label.
"""

from typing import Optional, Tuple


HOURS = tuple(f"{h:02d}" for h in range(24))
MINUTES = tuple(f"{m:02d}" for m in range(0, 60, 5))

HOUR_UNIT = "ساعة"
MINUTE_UNIT = "دقيقة"
ZERO_DURATION_LABEL = f"0 {MINUTE_UNIT}"


def parse_clock(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string."""
    try:
        hours, minutes = value.split(":")
        return int(hours) * 60 + int(minutes)
    except (AttributeError, ValueError):
        raise ValueError(f"Invalid clock value: {value!r}") from None


def duration(start: Optional[str], end: Optional[str]) -> int:
    """
    Minutes between two ``HH:MM`` values.

    Returns 0 when either value is missing or when ``end`` is not after
    ``start``; callers treat 0 as "not a valid booking interval".  Ranges
    past midnight are not supported and also give 0.
    """
    if not start or not end:
        return 0
    total = parse_clock(end) - parse_clock(start)
    return total if total > 0 else 0


def format_duration(minutes: Optional[int]) -> str:
    """
    Human readable duration, zero components left out.

    Examples:
        >>> format_duration(65)
        '1 ساعة 5 دقيقة'
        >>> format_duration(0)
        '0 دقيقة'
    """
    if not minutes:
        return ZERO_DURATION_LABEL
    hours, rest = divmod(int(minutes), 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours} {HOUR_UNIT}")
    if rest > 0:
        parts.append(f"{rest} {MINUTE_UNIT}")
    return " ".join(parts) or ZERO_DURATION_LABEL


def split_clock(value: Optional[str], default: str = "12:00") -> Tuple[str, str]:
    """
    Zero-padded (hour, minute) strings of a clock value.

    ``default`` is used when the value is unset or is not two integer parts.
    """
    parts = str(value).split(":") if value else []
    if len(parts) != 2 or not all(part.strip().isdigit() for part in parts):
        parts = default.split(":")
    hour, minute = parts
    return f"{int(hour):02d}", f"{int(minute):02d}"


def compose_clock(hour: str, minute: str) -> str:
    return f"{int(hour):02d}:{int(minute):02d}"
