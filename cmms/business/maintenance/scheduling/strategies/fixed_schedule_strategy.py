"""
Fixed Schedule Strategy
Occurrences fall on start_date + n periods, whatever happened before.
A late completion does not move the next due date.
"""

from datetime import date
from typing import Callable, FrozenSet, List

from cmms.business.maintenance.scheduling.base_occurrence_strategy import BaseOccurrenceStrategy
from cmms.business.maintenance.scheduling.frequency import nth_occurrence
from cmms.business.maintenance.scheduling.occurrence import Occurrence
from cmms.business.maintenance.scheduling.schedule_records import ScheduleRecord


class FixedScheduleStrategy(BaseOccurrenceStrategy):
    """Walks a schedule forward from its start date, one period at a time"""

    name = "fixed"

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
        if frequency is None:
            warn(
                f"Schedule {schedule.id} has unknown frequency {schedule.frequency!r}; "
                f"only its first occurrence is generated"
            )

        occurrences = []
        n = 0
        current = schedule.start_date

        while current <= last_date:
            if current not in completed_dates:
                occurrences.append(Occurrence.for_date(schedule, current, today, asset_name))

            if frequency is None:
                break

            n += 1
            current = nth_occurrence(schedule.start_date, frequency, n)

        return occurrences
