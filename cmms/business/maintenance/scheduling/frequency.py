"""
Maintenance Frequency
Canonical recurrence periods for maintenance schedules, plus the spellings
older records were stored with.
"""

from datetime import date
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

class MaintenanceFrequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    SEMI_ANNUALLY = "SEMI_ANNUALLY"
    YEARLY = "YEARLY"
    TWO_YEAR = "TWO_YEAR"

    @property
    def period(self) -> relativedelta:
        return _PERIODS[self]

    @classmethod
    def parse(cls, value) -> Optional["MaintenanceFrequency"]:
        """
        Resolve a stored or submitted frequency string.

        Accepts canonical names and legacy aliases in any case. Returns None for
        anything else so callers decide whether that is an error or a warning.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().upper().replace("-", "_").replace(" ", "_")
        if key in cls.__members__:
            return cls[key]
        return _ALIASES.get(key)

    @classmethod
    def choices(cls):
        return [member.value for member in cls]


_PERIODS = {
    MaintenanceFrequency.DAILY: relativedelta(days=1),
    MaintenanceFrequency.WEEKLY: relativedelta(days=7),
    MaintenanceFrequency.BIWEEKLY: relativedelta(days=14),
    MaintenanceFrequency.MONTHLY: relativedelta(months=1),
    MaintenanceFrequency.QUARTERLY: relativedelta(months=3),
    MaintenanceFrequency.SEMI_ANNUALLY: relativedelta(months=6),
    MaintenanceFrequency.YEARLY: relativedelta(years=1),
    MaintenanceFrequency.TWO_YEAR: relativedelta(years=2),
}

_ALIASES = {
    "BI_WEEKLY": MaintenanceFrequency.BIWEEKLY,
    "FORTNIGHTLY": MaintenanceFrequency.BIWEEKLY,
    "SEMIANNUALLY": MaintenanceFrequency.SEMI_ANNUALLY,
    "SEMI_ANNUAL": MaintenanceFrequency.SEMI_ANNUALLY,
    "BI_ANNUAL": MaintenanceFrequency.SEMI_ANNUALLY,
    "BIANNUAL": MaintenanceFrequency.SEMI_ANNUALLY,
    "ANNUALLY": MaintenanceFrequency.YEARLY,
    "ANNUAL": MaintenanceFrequency.YEARLY,
    "TWO_YEARLY": MaintenanceFrequency.TWO_YEAR,
    "BIENNIAL": MaintenanceFrequency.TWO_YEAR,
}

def nth_occurrence(start: date, frequency: MaintenanceFrequency, n: int) -> date:
    """
    Date of the n-th occurrence (0-based) of a series starting on `start`.

    Always offsets from the series start, so month-end clamping does not
    accumulate: a monthly series from Jan 31 gives Feb 29, Mar 31, Apr 30.
    """
    if n < 0:
        raise ValueError("n must be non-negative")
    period = frequency.period
    return start + relativedelta(
        years=period.years * n,
        months=period.months * n,
        days=period.days * n,
    )

def next_after(value: date, frequency: MaintenanceFrequency) -> date:
    """One period after `value`."""
    return value + frequency.period
