"""
Calendar date helpers.

Everything in the maintenance domain is compared at calendar-day
granularity. These helpers turn whatever the caller holds (a date, a
datetime from the ORM, an ISO string from a JSON body) into a plain date so
that time of day never leaks into a comparison.
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Normalize a date-like value to a calendar date (midnight, no time zone).

    Args:
        value: date, datetime or ISO-8601 string ("2024-03-15",
            "2024-03-15T10:30:00Z", ...)

    Returns:
        date

    Raises:
        ValueError: value is empty, of an unsupported type, or not parseable
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        try:
            return dateutil_parser.isoparse(text).date()
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid date: {value!r}") from e
    raise ValueError(f"Unsupported date value: {value!r}")


def start_of_month(value: date) -> date:
    return value.replace(day=1)


def month_starts(end: date, months: int) -> list:
    """
    First day of each of the last `months` months, oldest first, ending with
    the month containing `end`.
    """
    last = start_of_month(end)
    return [last - relativedelta(months=offset) for offset in range(months - 1, -1, -1)]


def end_of_day(value: date) -> datetime:
    """Last representable instant of a calendar day, for inclusive datetime range filters."""
    return datetime.combine(value, datetime.min.time()) + timedelta(days=1) - timedelta(microseconds=1)
