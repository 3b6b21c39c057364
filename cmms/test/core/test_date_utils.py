from datetime import date, datetime, timezone

import pytest

from cmms.utils.date_utils import end_of_day, month_starts, start_of_month, to_date


def test_to_date_normalizes_inputs():
    assert to_date(date(2024, 3, 15)) == date(2024, 3, 15)
    assert to_date(datetime(2024, 3, 15, 23, 59)) == date(2024, 3, 15)
    assert to_date('2024-03-15') == date(2024, 3, 15)
    assert to_date('2024-03-15T10:30:00Z') == date(2024, 3, 15)
    assert to_date(datetime(2024, 3, 15, 8, tzinfo=timezone.utc)) == date(2024, 3, 15)


def test_to_date_keeps_the_local_calendar_day():
    assert to_date('2024-02-01T00:30:00+02:00') == date(2024, 2, 1)


@pytest.mark.parametrize('value', ['', '   ', 'not-a-date', '2024-13-45', 42, None])
def test_to_date_rejects_garbage(value):
    with pytest.raises(ValueError):
        to_date(value)


def test_month_helpers():
    assert start_of_month(date(2024, 3, 15)) == date(2024, 3, 1)
    assert month_starts(date(2024, 3, 15), 3) == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
    assert month_starts(date(2024, 2, 10), 3) == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]


def test_end_of_day():
    assert end_of_day(date(2024, 3, 15)) == datetime(2024, 3, 15, 23, 59, 59, 999999)
