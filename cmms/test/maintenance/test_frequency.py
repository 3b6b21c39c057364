"""
Tests for maintenance frequencies and occurrence date arithmetic
"""

from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from cmms.business.maintenance.scheduling import MaintenanceFrequency, nth_occurrence
from cmms.business.maintenance.scheduling.frequency import next_after


@pytest.mark.parametrize('raw, expected', [
    ('MONTHLY', MaintenanceFrequency.MONTHLY),
    ('monthly', MaintenanceFrequency.MONTHLY),
    ('  Weekly ', MaintenanceFrequency.WEEKLY),
    ('semi-annually', MaintenanceFrequency.SEMI_ANNUALLY),
    ('BI_ANNUAL', MaintenanceFrequency.SEMI_ANNUALLY),
    ('SEMIANNUALLY', MaintenanceFrequency.SEMI_ANNUALLY),
    ('ANNUALLY', MaintenanceFrequency.YEARLY),
    ('BI_WEEKLY', MaintenanceFrequency.BIWEEKLY),
    ('TWO_YEAR', MaintenanceFrequency.TWO_YEAR),
    (MaintenanceFrequency.DAILY, MaintenanceFrequency.DAILY),
])
def test_parse_accepts_canonical_names_and_aliases(raw, expected):
    assert MaintenanceFrequency.parse(raw) is expected


@pytest.mark.parametrize('raw', ['BOGUS', '', None, 12, 'MONTH'])
def test_parse_rejects_unknown_values(raw):
    assert MaintenanceFrequency.parse(raw) is None


def test_periods():
    assert MaintenanceFrequency.DAILY.period == relativedelta(days=1)
    assert MaintenanceFrequency.WEEKLY.period == relativedelta(days=7)
    assert MaintenanceFrequency.BIWEEKLY.period == relativedelta(days=14)
    assert MaintenanceFrequency.MONTHLY.period == relativedelta(months=1)
    assert MaintenanceFrequency.QUARTERLY.period == relativedelta(months=3)
    assert MaintenanceFrequency.SEMI_ANNUALLY.period == relativedelta(months=6)
    assert MaintenanceFrequency.YEARLY.period == relativedelta(years=1)
    assert MaintenanceFrequency.TWO_YEAR.period == relativedelta(years=2)


def test_choices_are_canonical_values():
    assert MaintenanceFrequency.choices() == [
        'DAILY', 'WEEKLY', 'BIWEEKLY', 'MONTHLY', 'QUARTERLY', 'SEMI_ANNUALLY', 'YEARLY', 'TWO_YEAR'
    ]


def test_nth_occurrence_zero_is_start():
    assert nth_occurrence(date(2024, 1, 1), MaintenanceFrequency.MONTHLY, 0) == date(2024, 1, 1)


def test_nth_occurrence_does_not_drift_at_month_end():
    """Jan 31 monthly: Feb 29, Mar 31, Apr 30 rather than sticking at the 29th"""
    start = date(2024, 1, 31)
    dates = [nth_occurrence(start, MaintenanceFrequency.MONTHLY, n) for n in range(4)]
    assert dates == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31), date(2024, 4, 30)]


def test_nth_occurrence_leap_day_yearly():
    start = date(2024, 2, 29)
    assert nth_occurrence(start, MaintenanceFrequency.YEARLY, 1) == date(2025, 2, 28)
    assert nth_occurrence(start, MaintenanceFrequency.YEARLY, 4) == date(2028, 2, 29)


def test_nth_occurrence_day_based():
    start = date(2024, 12, 25)
    assert nth_occurrence(start, MaintenanceFrequency.WEEKLY, 2) == date(2025, 1, 8)
    assert nth_occurrence(start, MaintenanceFrequency.BIWEEKLY, 1) == date(2025, 1, 8)


def test_nth_occurrence_rejects_negative_n():
    with pytest.raises(ValueError):
        nth_occurrence(date(2024, 1, 1), MaintenanceFrequency.DAILY, -1)


def test_next_after():
    assert next_after(date(2024, 3, 10), MaintenanceFrequency.QUARTERLY) == date(2024, 6, 10)
