"""
Rolling From Completion Strategy
The next due date is one period after the most recent completion, so a late
completion pushes every later occurrence back. Only the next due occurrence
is ever produced.
"""

from datetime import date
from typing import Callable, FrozenSet, Iterable, List, Optional

from cmms.business.maintenance.scheduling.base_occurrence_strategy import BaseOccurrenceStrategy
from cmms.business.maintenance.scheduling.frequency import next_after
from cmms.business.maintenance.scheduling.schedule_status import ScheduleStatus
from cmms.business.maintenance.scheduling.occurrence import Occurrence
from cmms.business.maintenance.scheduling.schedule_records import ScheduleRecord


class RollingFromCompletionStrategy(BaseOccurrenceStrategy):
    """Next due = last completion + period, or the start date if never completed"""

    name = "rolling"

    def __init__(self, statuses: Optional[Iterable[str]] = (ScheduleStatus.ACTIVE,)):
        """
        Args:
            statuses: Schedule statuses to expand. None expands every schedule.
        """
        self.statuses = None if statuses is None else frozenset(s.upper() for s in statuses)

    def accepts(self, schedule: ScheduleRecord) -> bool:
        if self.statuses is None:
            return True
        return (schedule.status or "").upper() in self.statuses

    def occurrences_for(
        self,
        schedule: ScheduleRecord,
        completed_dates: FrozenSet[date],
        today: date,
        last_date: date,
        asset_name: str,
        warn: Callable[[str], None],
    ) -> List[Occurrence]:
        frequency = schedule.parsed_frequency
        last_completion = max(completed_dates) if completed_dates else None

        if frequency is None:
            warn(
                f"Schedule {schedule.id} has unknown frequency {schedule.frequency!r}; "
                f"it cannot roll forward past its first occurrence"
            )
            if last_completion is not None:
                return []
            due = schedule.start_date
        elif last_completion is None:
            due = schedule.start_date
        else:
            due = max(next_after(last_completion, frequency), schedule.start_date)

        if due > last_date:
            return []

        return [Occurrence.for_date(schedule, due, today, asset_name)]
