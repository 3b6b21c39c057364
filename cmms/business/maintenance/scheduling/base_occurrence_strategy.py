"""
Base Occurrence Strategy
Abstract base class defining how a schedule is expanded into occurrences.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, FrozenSet, List

from cmms.business.maintenance.scheduling.occurrence import Occurrence
from cmms.business.maintenance.scheduling.schedule_records import ScheduleRecord


class BaseOccurrenceStrategy(ABC):
    """Abstract base class for occurrence strategies"""

    name = "base"

    def accepts(self, schedule: ScheduleRecord) -> bool:
        """Whether this strategy generates anything for the schedule at all."""
        return True

    @abstractmethod
    def occurrences_for(
        self,
        schedule: ScheduleRecord,
        completed_dates: FrozenSet[date],
        today: date,
        last_date: date,
        asset_name: str,
        warn: Callable[[str], None],
    ) -> List[Occurrence]:
        """
        Expand one schedule.

        Args:
            schedule: Validated schedule record
            completed_dates: Calendar dates on which this schedule was completed
            today: Reference date, overdue means strictly before it
            last_date: Latest date an occurrence may fall on. Already capped by
                the schedule's end date or the look-ahead horizon.
            asset_name: Display name of the schedule's asset
            warn: Callback for operator-facing warnings (unknown frequency)

        Returns:
            Occurrences for this schedule, in date order
        """
        pass

    def __repr__(self):
        return f"<{type(self).__name__}>"
