"""
Tests for the occurrence strategies and their lookup by name
"""

from datetime import date

import pytest

from cmms.business.maintenance.scheduling import (
    FixedScheduleStrategy,
    OccurrenceGenerator,
    RollingFromCompletionStrategy,
    ScheduleStatus,
    get_strategy,
)

TODAY = date(2024, 3, 15)


def schedule(id=1, start='2024-01-01', frequency='MONTHLY', status=ScheduleStatus.ACTIVE, **fields):
    data = {'id': id, 'title': 'Check belts', 'asset_id': 3, 'start_date': start,
            'frequency': frequency, 'status': status}
    data.update(fields)
    return data


def rolling(**kwargs):
    return OccurrenceGenerator(strategy=RollingFromCompletionStrategy(**kwargs))


def test_get_strategy():
    assert isinstance(get_strategy('fixed'), FixedScheduleStrategy)
    assert isinstance(get_strategy(' Rolling '), RollingFromCompletionStrategy)
    with pytest.raises(ValueError):
        get_strategy('weekly-ish')
    with pytest.raises(ValueError):
        get_strategy(None)


class TestRollingFromCompletion:

    def test_never_completed_is_due_at_start(self):
        result = rolling().generate([schedule()], [], TODAY)

        assert len(result) == 1
        assert result[0].date == date(2024, 1, 1)
        assert result[0].days_overdue == 74

    def test_next_due_is_one_period_after_latest_completion(self):
        completions = [
            {'schedule_id': 1, 'completed_date': '2024-01-20'},
            {'schedule_id': 1, 'completed_date': '2024-02-10'},
        ]
        result = rolling().generate([schedule()], completions, TODAY)

        assert [o.date for o in result] == [date(2024, 3, 10)]
        assert result[0].days_overdue == 5

    def test_late_completion_shifts_due_date_unlike_fixed(self):
        """Completed two weeks late: fixed keeps the series, rolling moves it"""
        completions = [{'schedule_id': 1, 'completed_date': '2024-02-15'}]

        fixed = OccurrenceGenerator().generate([schedule()], completions, TODAY)
        rolled = rolling().generate([schedule()], completions, TODAY)

        assert [o.date for o in fixed] == [date(2024, 1, 1), date(2024, 2, 1), date(2024, 3, 1)]
        assert [o.date for o in rolled] == [date(2024, 3, 15)]
        assert rolled[0].is_overdue is False

    def test_not_yet_due_produces_nothing(self):
        completions = [{'schedule_id': 1, 'completed_date': '2024-03-01'}]
        assert rolling().generate([schedule()], completions, TODAY) == []

    def test_calendar_mode_shows_next_due(self):
        completions = [{'schedule_id': 1, 'completed_date': '2024-03-01'}]
        result = rolling().generate([schedule()], completions, TODAY, until=date(2024, 4, 30))
        assert [o.date for o in result] == [date(2024, 4, 1)]

    def test_due_date_after_end_date_is_dropped(self):
        completions = [{'schedule_id': 1, 'completed_date': '2024-03-01'}]
        result = rolling().generate([schedule(end_date='2024-03-20')], completions, TODAY, until=date(2024, 4, 30))
        assert result == []

    def test_only_active_schedules_by_default(self):
        schedules = [schedule(1), schedule(2, status=ScheduleStatus.INACTIVE), schedule(3, status='active')]
        result = rolling().generate(schedules, [], TODAY)
        assert sorted(o.schedule_id for o in result) == [1, 3]

    def test_status_filter_can_be_disabled(self):
        schedules = [schedule(1), schedule(2, status=ScheduleStatus.INACTIVE)]
        result = rolling(statuses=None).generate(schedules, [], TODAY)
        assert sorted(o.schedule_id for o in result) == [1, 2]

    def test_fixed_ignores_status(self):
        schedules = [schedule(1, start=TODAY, status=ScheduleStatus.INACTIVE)]
        assert len(OccurrenceGenerator().generate(schedules, [], TODAY)) == 1

    def test_unknown_frequency(self):
        warnings = []
        generator = OccurrenceGenerator(
            strategy=RollingFromCompletionStrategy(),
            on_warning=warnings.append
        )

        never_done = generator.generate([schedule(frequency='SOMETIMES')], [], TODAY)
        done = generator.generate(
            [schedule(frequency='SOMETIMES')],
            [{'schedule_id': 1, 'completed_date': '2024-01-01'}],
            TODAY
        )

        assert [o.date for o in never_done] == [date(2024, 1, 1)]
        assert done == []
        assert len(warnings) == 2
