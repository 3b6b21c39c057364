"""
Schedule Records
Immutable inputs for the occurrence generator.

The generator accepts ORM rows, plain mappings from JSON (camelCase or
snake_case keys) or records that were already built. Everything is
validated here, at the boundary, so the date walk only ever sees real dates.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from cmms.business.maintenance.scheduling.exceptions import InvalidScheduleError
from cmms.business.maintenance.scheduling.frequency import MaintenanceFrequency
from cmms.business.maintenance.scheduling.schedule_status import ScheduleStatus
from cmms.utils.date_utils import to_date


def _field(obj: Any, *names: str, default=None):
    """Read the first present attribute/key among names."""
    for name in names:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    return default


def normalize_id(value):
    """
    Integer form of an id sent as a numeric string ("12" -> 12), so ORM rows
    and JSON bodies key the same schedule alike. Other ids pass through.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        return text
    return value


def _parse_date(schedule_id, field: str, value) -> date:
    if value is None:
        raise InvalidScheduleError(schedule_id, field, value, "missing")
    try:
        return to_date(value)
    except ValueError as e:
        raise InvalidScheduleError(schedule_id, field, value, str(e)) from e


@dataclass(frozen=True)
class ScheduleRecord:
    id: Any
    title: str
    asset_id: Any
    start_date: date
    frequency: str
    end_date: Optional[date] = None
    status: str = ScheduleStatus.ACTIVE
    description: str = ""

    @property
    def parsed_frequency(self) -> Optional[MaintenanceFrequency]:
        return MaintenanceFrequency.parse(self.frequency)

    @classmethod
    def coerce(cls, obj) -> "ScheduleRecord":
        """
        Build a validated record from a model, a mapping or a record.

        Raises:
            InvalidScheduleError: missing id, or start/end date missing or not parseable,
                or end date before start date
        """
        if isinstance(obj, cls):
            return obj

        schedule_id = normalize_id(_field(obj, "id"))
        if schedule_id is None:
            raise InvalidScheduleError(None, "id", None, "missing")

        start_date = _parse_date(schedule_id, "start_date", _field(obj, "start_date", "startDate"))

        raw_end = _field(obj, "end_date", "endDate")
        end_date = None
        if raw_end not in (None, ""):
            end_date = _parse_date(schedule_id, "end_date", raw_end)
            if end_date < start_date:
                raise InvalidScheduleError(schedule_id, "end_date", raw_end, "before start_date")

        frequency = _field(obj, "frequency", default="")
        if isinstance(frequency, MaintenanceFrequency):
            frequency = frequency.value

        return cls(
            id=schedule_id,
            title=_field(obj, "title", default="") or "",
            asset_id=normalize_id(_field(obj, "asset_id", "assetId")),
            start_date=start_date,
            end_date=end_date,
            frequency=str(frequency),
            status=_field(obj, "status", default=ScheduleStatus.ACTIVE) or ScheduleStatus.ACTIVE,
            description=_field(obj, "description", default="") or "",
        )


@dataclass(frozen=True)
class CompletionRecord:
    schedule_id: Any
    completed_date: date
    notes: Optional[str] = None
    id: Any = None

    @classmethod
    def coerce(cls, obj) -> "CompletionRecord":
        """
        Raises:
            InvalidScheduleError: completed date missing or not parseable; the
                error names the schedule the completion belongs to
        """
        if isinstance(obj, cls):
            return obj

        schedule_id = normalize_id(_field(obj, "schedule_id", "scheduleId"))
        completed = _parse_date(schedule_id, "completed_date", _field(obj, "completed_date", "completedDate"))

        return cls(
            schedule_id=schedule_id,
            completed_date=completed,
            notes=_field(obj, "notes"),
            id=_field(obj, "id"),
        )
