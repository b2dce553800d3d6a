"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

# "in N <unit>" offsets, used for goal deadlines
_OFFSET_UNITS: dict[str, Callable[[int], object]] = {
    "day": lambda n: timedelta(days=n),
    "week": lambda n: timedelta(weeks=n),
    "month": lambda n: relativedelta(months=n),
    "year": lambda n: relativedelta(years=n),
}


def _start_of(unit: str, day: date) -> Optional[date]:
    if unit == "week":
        return day - timedelta(days=day.weekday())
    if unit == "month":
        return day.replace(day=1)
    if unit == "year":
        return day.replace(month=1, day=1)
    return None


def _named_period(direction: str, unit: str, today: date) -> Optional[date]:
    """Resolve "last/this/next <unit>" to the first day of that unit."""
    shift = {"last": -1, "this": 0, "next": 1}[direction]
    if unit in _OFFSET_UNITS and unit != "day":
        return _start_of(unit, today + _OFFSET_UNITS[unit](shift))
    if direction == "last" and unit in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", "in 3 months", "last month",
    "this week", "next year", "last friday". Named periods resolve to their
    first day (weeks start on Monday).

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates, defaults to the current day

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    shortcuts = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in shortcuts:
        return shortcuts[text]

    words = text.split()
    if len(words) == 3 and words[0] == "in" and words[1].isdigit():
        unit = words[2].rstrip("s")
        if unit in _OFFSET_UNITS:
            return today + _OFFSET_UNITS[unit](int(words[1]))

    if len(words) == 2 and words[0] in ("last", "this", "next"):
        resolved = _named_period(words[0], words[1], today)
        if resolved is not None:
            return resolved

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")
