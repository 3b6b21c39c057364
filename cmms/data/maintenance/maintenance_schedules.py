from cmms.data.core.user_created_base import UserCreatedBase
from cmms import db
from sqlalchemy.orm import relationship
from cmms.business.maintenance.scheduling.schedule_status import ScheduleStatus


class MaintenanceSchedule(UserCreatedBase):
    __tablename__ = 'maintenance_schedules'

    # header fields
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id'), nullable=False)
    status = db.Column(db.String(20), nullable=False, default=ScheduleStatus.ACTIVE)

    # recurrence fields
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=True)
    frequency = db.Column(db.String(20), nullable=False)
    last_completed = db.Column(db.Date, nullable=True)

    asset = relationship('Asset', back_populates='maintenance_schedules')
    completions = relationship(
        'MaintenanceCompletion',
        back_populates='schedule',
        cascade='all, delete-orphan',
        order_by='MaintenanceCompletion.completed_date.desc()'
    )

    def record_completion(self, completed_on):
        if self.last_completed is None or completed_on > self.last_completed:
            self.last_completed = completed_on

    def to_dict(self, include_audit_fields=True, exclude=None):
        data = super().to_dict(include_audit_fields=include_audit_fields, exclude=exclude)
        data['asset_name'] = self.asset.name if self.asset else None
        return data

    def __repr__(self):
        return f'<MaintenanceSchedule {self.title} ({self.frequency})>'
