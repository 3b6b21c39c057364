"""
Maintenance scheduling: recurring schedules expanded into due, overdue and
upcoming occurrences.
"""

from cmms.business.maintenance.scheduling.exceptions import InvalidScheduleError
from cmms.business.maintenance.scheduling.frequency import MaintenanceFrequency, nth_occurrence
from cmms.business.maintenance.scheduling.schedule_status import ScheduleStatus
from cmms.business.maintenance.scheduling.occurrence import Occurrence, sort_occurrences
from cmms.business.maintenance.scheduling.schedule_records import CompletionRecord, ScheduleRecord
from cmms.business.maintenance.scheduling.strategies import (
    FixedScheduleStrategy,
    RollingFromCompletionStrategy,
    get_strategy,
)
from cmms.business.maintenance.scheduling.occurrence_generator import OccurrenceGenerator, generate_occurrences

__all__ = [
    'InvalidScheduleError',
    'MaintenanceFrequency',
    'ScheduleStatus',
    'nth_occurrence',
    'Occurrence',
    'sort_occurrences',
    'CompletionRecord',
    'ScheduleRecord',
    'FixedScheduleStrategy',
    'RollingFromCompletionStrategy',
    'get_strategy',
    'OccurrenceGenerator',
    'generate_occurrences',
]
