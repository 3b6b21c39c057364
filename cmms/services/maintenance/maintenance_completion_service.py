"""
Maintenance Completion Service
Records that a schedule's occurrence was carried out.
"""

from datetime import datetime
from typing import List, Optional

from cmms import db
from cmms.data.maintenance.maintenance_completions import MaintenanceCompletion
from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
from cmms.logger import get_logger

logger = get_logger("cmms.services.maintenance.completions")


class MaintenanceCompletionService:

    @staticmethod
    def get_completions(schedule_id: Optional[int] = None) -> List[MaintenanceCompletion]:
        query = MaintenanceCompletion.query
        if schedule_id:
            query = query.filter(MaintenanceCompletion.schedule_id == schedule_id)
        return query.order_by(MaintenanceCompletion.completed_date.desc(), MaintenanceCompletion.id.desc()).all()

    @staticmethod
    def record_completion(
        schedule: MaintenanceSchedule,
        completed_date: datetime,
        notes: Optional[str] = None,
        user_id: Optional[int] = None
    ) -> MaintenanceCompletion:
        """
        Store a completion and roll the schedule's and asset's
        last-maintenance dates forward.

        Args:
            schedule: Schedule the completion belongs to
            completed_date: When the work was done
            notes: Optional technician notes
            user_id: Recording user, for the audit columns

        Returns:
            The committed MaintenanceCompletion
        """
        completion = MaintenanceCompletion(
            schedule_id=schedule.id,
            completed_date=completed_date,
            notes=notes,
            created_by_id=user_id,
            updated_by_id=user_id
        )

        completed_on = completed_date.date()
        schedule.record_completion(completed_on)
        if schedule.asset is not None:
            schedule.asset.record_maintenance(completed_on)

        try:
            db.session.add(completion)
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error recording completion for schedule {schedule.id}: {e}")
            raise

        logger.info(f"Recorded completion {completion.id} for schedule {schedule.id} on {completed_on.isoformat()}")
        return completion
