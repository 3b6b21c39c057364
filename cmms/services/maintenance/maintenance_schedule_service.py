"""
Maintenance Schedule Service
Reads and writes maintenance schedules for the API.
"""

from datetime import date
from typing import Dict, List, Optional

from cmms import db
from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
from cmms.logger import get_logger

logger = get_logger("cmms.services.maintenance.schedules")


class MaintenanceScheduleService:
    """Schedule queries and mutations"""

    @staticmethod
    def get_schedules(
        start: Optional[date] = None,
        end: Optional[date] = None,
        asset_id: Optional[int] = None
    ) -> List[MaintenanceSchedule]:
        """
        List schedules, optionally only those whose series overlaps [start, end].

        A series overlaps the window when it starts on or before `end` and is
        open-ended or ends on or after `start`.
        """
        query = MaintenanceSchedule.query

        if asset_id:
            query = query.filter(MaintenanceSchedule.asset_id == asset_id)

        if end is not None:
            query = query.filter(MaintenanceSchedule.start_date <= end)

        if start is not None:
            query = query.filter(db.or_(
                MaintenanceSchedule.end_date.is_(None),
                MaintenanceSchedule.end_date >= start
            ))

        return query.order_by(MaintenanceSchedule.start_date, MaintenanceSchedule.id).all()

    @staticmethod
    def create_schedule(data: Dict, user_id: Optional[int] = None) -> MaintenanceSchedule:
        schedule = MaintenanceSchedule.create_from_dict(data, user_id=user_id)
        logger.info(f"Created maintenance schedule {schedule.id} ({schedule.title}, {schedule.frequency})")
        return schedule

    @staticmethod
    def update_schedule(schedule: MaintenanceSchedule, data: Dict, user_id: Optional[int] = None) -> List[str]:
        """
        Apply a partial update and commit.

        Returns:
            Names of the changed columns
        """
        changed = schedule.update_from_dict(data, user_id=user_id)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        if changed:
            logger.info(f"Updated maintenance schedule {schedule.id}: {', '.join(changed)}")
        return changed

    @staticmethod
    def delete_schedule(schedule: MaintenanceSchedule) -> None:
        schedule_id = schedule.id
        try:
            db.session.delete(schedule)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        logger.info(f"Deleted maintenance schedule {schedule_id} and its completions")
