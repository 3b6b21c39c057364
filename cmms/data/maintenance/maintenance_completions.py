from cmms.data.core.user_created_base import UserCreatedBase
from cmms import db
from sqlalchemy.orm import relationship


class MaintenanceCompletion(UserCreatedBase):
    """One fulfilled occurrence of a schedule. Rows are never edited once written."""
    __tablename__ = 'maintenance_completions'

    schedule_id = db.Column(db.Integer, db.ForeignKey('maintenance_schedules.id'), nullable=False, index=True)
    completed_date = db.Column(db.DateTime, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    schedule = relationship('MaintenanceSchedule', back_populates='completions')

    def __repr__(self):
        return f'<MaintenanceCompletion schedule={self.schedule_id} on {self.completed_date:%Y-%m-%d}>'
