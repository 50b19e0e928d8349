# habit_matrix/dates.py
"""Calendar-date helpers. Dates travel as zero-padded YYYY-MM-DD strings,
so plain string comparison orders them chronologically."""

import calendar
from datetime import date, datetime, timedelta
from typing import List, Optional

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> date:
    # strptime accepts "2026-1-5"; the length check keeps keys canonical
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    return datetime.strptime(value, DATE_FORMAT).date()


def format_date(value: date) -> str:
    return value.isoformat()


def is_valid_date_string(value: Optional[str]) -> bool:
    try:
        parse_date(value)
    except (TypeError, ValueError):
        return False
    return True


def today() -> str:
    return format_date(date.today())


def now_timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


def date_only(timestamp: str) -> str:
    """'2026-01-20T08:15:00' -> '2026-01-20'."""
    return timestamp.split("T", 1)[0][:10]


def is_past_date(value: str, today_str: str) -> bool:
    return value < today_str


def add_days(value: str, days: int) -> str:
    return format_date(parse_date(value) + timedelta(days=days))


def weekday_index(value: str) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (parse_date(value).weekday() + 1) % 7


def week_start(value: str) -> str:
    d = parse_date(value)
    return format_date(d - timedelta(days=d.weekday()))


def week_dates(value: str) -> List[str]:
    monday = parse_date(week_start(value))
    return [format_date(monday + timedelta(days=i)) for i in range(7)]


def month_dates(year: int, month_index: int) -> List[str]:
    """Every day of a month. month_index is 0-based (0 = January)."""
    month = month_index + 1
    _, days_in_month = calendar.monthrange(year, month)
    return [format_date(date(year, month, day)) for day in range(1, days_in_month + 1)]


def days_between(start: str, end: str) -> int:
    return (parse_date(end) - parse_date(start)).days
