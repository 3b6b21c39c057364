"""
Occurrence Data Structure
A single due, overdue or upcoming instance of a maintenance schedule.
Derived on every read, never persisted.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

UNKNOWN_ASSET = "Unknown Asset"


@dataclass(frozen=True)
class Occurrence:
    schedule_id: Any
    title: str
    asset_id: Any
    asset_name: str
    date: date
    is_overdue: bool
    days_overdue: Optional[int] = None

    @property
    def id(self) -> str:
        return f"{self.schedule_id}-{self.date.isoformat()}"

    def is_due_on(self, day: date) -> bool:
        return self.date == day

    @classmethod
    def for_date(cls, schedule, on: date, today: date, asset_name: str) -> "Occurrence":
        """Build the occurrence of `schedule` falling on `on`, judged against `today`."""
        days_overdue = (today - on).days
        is_overdue = days_overdue > 0
        return cls(
            schedule_id=schedule.id,
            title=schedule.title,
            asset_id=schedule.asset_id,
            asset_name=asset_name,
            date=on,
            is_overdue=is_overdue,
            days_overdue=days_overdue if is_overdue else None,
        )

    def to_dict(self) -> Dict:
        """Convert Occurrence to dictionary for serialization"""
        data = {
            'id': self.id,
            'schedule_id': self.schedule_id,
            'title': self.title,
            'asset_id': self.asset_id,
            'asset_name': self.asset_name,
            'date': self.date.isoformat(),
            'is_overdue': self.is_overdue,
        }
        if self.is_overdue:
            data['days_overdue'] = self.days_overdue
        return data


def sort_occurrences(occurrences: Iterable[Occurrence]) -> List[Occurrence]:
    """Overdue first, then earliest date first; schedule id breaks remaining ties."""
    return sorted(
        occurrences,
        key=lambda o: (not o.is_overdue, o.date, str(o.schedule_id)),
    )
