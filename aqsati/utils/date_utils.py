"""Date manipulation utilities"""

from datetime import date, datetime, timedelta
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """
    Parse a calendar date from a date, datetime or ISO string.

    Any time-of-day component is dropped. Returns None for missing or
    unparseable input instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def start_of_day(value: Union[date, datetime]) -> date:
    """Strip the time-of-day so comparisons happen on whole calendar days"""
    if isinstance(value, datetime):
        return value.date()
    return value


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's last day"""
    return from_date + relativedelta(months=months)


def _rolled_date(year: int, month: int, day: int) -> date:
    """Build a date, carrying month and day overflow forward (Feb 30 → Mar 1 or 2)"""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return date(year, month, 1) + timedelta(days=day - 1)


def _is_last_day_of_month(value: date) -> bool:
    return (value + timedelta(days=1)).day == 1


def whole_months_between(start: date, end: date) -> int:
    """
    Count complete calendar months from start to end.

    The calendar-month difference, minus one when end is stepped back by
    that many months (day overflow rolls forward) and lands before start.
    An end in February past the 27th is first moved to the 30th. A single
    month that ends on the last day of a month counts as complete.

    The result is negative whenever end precedes start.

    Example:
        2024-01-31 → 2024-02-28 = 1
        2024-01-31 → 2024-04-30 = 2
        2024-02-01 → 2024-01-31 = -1
    """
    difference = (end.year - start.year) * 12 + (end.month - start.month)

    if end < start:
        if add_months(start, difference) > end:
            difference -= 1
        return difference

    if difference < 1:
        return 0

    shifted = end
    if end.month == 2 and end.day > 27:
        shifted = _rolled_date(end.year, 2, 30)
    shifted = _rolled_date(shifted.year, shifted.month - difference, shifted.day)

    last_month_not_full = shifted < start
    if _is_last_day_of_month(end) and difference == 1 and end > start:
        last_month_not_full = False

    return difference - int(last_month_not_full)
