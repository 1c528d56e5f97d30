"""Date parsing and calendar arithmetic for task metadata."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

# Day-first slash dates (D/M/YYYY); never read month-first.
_SLASH_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")


def parse_date(value: object) -> datetime | None:
    """Parse a metadata date value.

    Accepts datetimes, dates, ``DD/MM/YYYY`` strings (1 or 2 digit day and
    month) and ISO 8601 strings, including a trailing ``Z``.

    Args:
        value: Raw metadata value

    Returns:
        Parsed datetime, or None if the value is empty or unparseable
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if not text:
        return None

    match = _SLASH_DATE.match(text)
    if match:
        day, month, year = (int(part) for part in match.groups())
        try:
            return datetime(year, month, day)
        except ValueError:
            return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def as_aware(value: datetime) -> datetime:
    """Return *value* as an aware datetime, reading naive values as local time."""
    if value.tzinfo is None:
        return value.astimezone()
    return value


def is_before(value: datetime, now: datetime) -> bool:
    """Compare two datetimes that may differ in awareness."""
    return as_aware(value) < as_aware(now)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def add_months(value: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, last_day_of_month(year, month))
    return value.replace(year=year, month=month, day=day)


def add_years(value: datetime, years: int) -> datetime:
    """Add calendar years; 29 February falls back to 28 February."""
    year = value.year + years
    day = min(value.day, last_day_of_month(year, value.month))
    return value.replace(year=year, day=day)


def format_date(value: datetime | None, date_format: str) -> str:
    """Render a date with the board's strftime format, or an empty string."""
    if value is None:
        return ""
    return value.strftime(date_format)
