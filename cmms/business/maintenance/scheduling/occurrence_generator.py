"""
Occurrence Generator
Expands maintenance schedules into concrete occurrences.

Pure and synchronous: reads its arguments, returns a new list, touches no
database and no shared state. Safe to call from any request thread.
"""

from collections import defaultdict
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from dateutil.relativedelta import relativedelta

from cmms.business.maintenance.scheduling.base_occurrence_strategy import BaseOccurrenceStrategy
from cmms.business.maintenance.scheduling.exceptions import InvalidScheduleError
from cmms.business.maintenance.scheduling.occurrence import UNKNOWN_ASSET, Occurrence
from cmms.business.maintenance.scheduling.schedule_records import CompletionRecord, ScheduleRecord, normalize_id
from cmms.business.maintenance.scheduling.strategies import FixedScheduleStrategy
from cmms.logger import get_logger
from cmms.utils.date_utils import DateLike, to_date

logger = get_logger("cmms.business.maintenance.scheduling")

DEFAULT_HORIZON = relativedelta(years=1)


class OccurrenceGenerator:
    """
    Turns schedules + completions + "today" into occurrences.

    Two call modes:
    - due mode (until=None): every uncompleted occurrence on or before today
    - calendar mode (until=<date>): additionally the future occurrences up to
      `until`, never past the schedule's end date or today + horizon
    """

    def __init__(
        self,
        strategy: Optional[BaseOccurrenceStrategy] = None,
        horizon: relativedelta = DEFAULT_HORIZON,
        strict: bool = False,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            strategy: How a schedule is expanded, FixedScheduleStrategy by default
            horizon: Look-ahead cap for schedules without an end date
            strict: Raise InvalidScheduleError on malformed input instead of
                skipping the offending schedule or completion
            on_warning: Receives operator-facing warnings, e.g. unknown
                frequencies. Defaults to the module logger at WARNING.
        """
        self.strategy = strategy or FixedScheduleStrategy()
        self.horizon = horizon
        self.strict = strict
        self.on_warning = on_warning or logger.warning

    def generate(
        self,
        schedules: Iterable,
        completions: Iterable,
        today: DateLike,
        asset_names: Optional[Mapping] = None,
        until: Optional[DateLike] = None,
    ) -> List[Occurrence]:
        """
        Generate occurrences for every schedule.

        Args:
            schedules: ScheduleRecords, MaintenanceSchedule rows or mappings
            completions: CompletionRecords, MaintenanceCompletion rows or mappings
            today: Reference date; time of day is discarded
            asset_names: asset_id -> display name
            until: Calendar mode end date (inclusive)

        Returns:
            Occurrences in schedule order, each schedule's in date order.
            Callers wanting the agenda order use sort_occurrences().

        Raises:
            InvalidScheduleError: malformed input while strict=True
            ValueError: today or until is not a date
        """
        today = to_date(today)
        window_end = today
        if until is not None:
            window_end = max(today, to_date(until))
        asset_names = {normalize_id(key): name for key, name in (asset_names or {}).items()}

        completed_by_schedule = self._index_completions(completions)

        occurrences = []
        for raw_schedule in schedules:
            schedule = self._coerce_schedule(raw_schedule)
            if schedule is None or not self.strategy.accepts(schedule):
                continue

            last_date = self._last_date(schedule, today, window_end)
            occurrences.extend(
                self.strategy.occurrences_for(
                    schedule,
                    completed_by_schedule.get(normalize_id(schedule.id), frozenset()),
                    today,
                    last_date,
                    asset_names.get(normalize_id(schedule.asset_id), UNKNOWN_ASSET),
                    self.on_warning,
                )
            )

        return occurrences

    def _last_date(self, schedule: ScheduleRecord, today: date, window_end: date) -> date:
        cap = schedule.end_date if schedule.end_date is not None else today + self.horizon
        return min(window_end, cap)

    def _coerce_schedule(self, raw) -> Optional[ScheduleRecord]:
        try:
            return ScheduleRecord.coerce(raw)
        except InvalidScheduleError as e:
            if self.strict:
                raise
            logger.error(f"Skipping schedule: {e}")
            return None

    def _index_completions(self, completions: Iterable) -> Dict[object, frozenset]:
        """normalized schedule_id -> frozenset of completed calendar dates"""
        index = defaultdict(set)
        for raw in completions:
            try:
                completion = CompletionRecord.coerce(raw)
            except InvalidScheduleError as e:
                if self.strict:
                    raise
                logger.error(f"Ignoring completion: {e}")
                continue
            index[normalize_id(completion.schedule_id)].add(completion.completed_date)
        return {schedule_id: frozenset(dates) for schedule_id, dates in index.items()}


def generate_occurrences(schedules, completions, today, asset_names=None, until=None, strategy=None):
    """Convenience wrapper around OccurrenceGenerator with default settings."""
    return OccurrenceGenerator(strategy=strategy).generate(
        schedules, completions, today, asset_names=asset_names, until=until
    )
