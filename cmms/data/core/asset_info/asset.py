from cmms.data.core.user_created_base import UserCreatedBase
from cmms import db


class AssetStatus:
    OPERATIONAL = "OPERATIONAL"
    MAINTENANCE = "MAINTENANCE"
    OFFLINE = "OFFLINE"
    DECOMMISSIONED = "DECOMMISSIONED"

    ALL = (OPERATIONAL, MAINTENANCE, OFFLINE, DECOMMISSIONED)


class Asset(UserCreatedBase):
    __tablename__ = 'assets'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    location = db.Column(db.String(200), nullable=False, default='')
    status = db.Column(db.String(20), nullable=False, default=AssetStatus.OPERATIONAL)
    last_maintenance = db.Column(db.Date, nullable=True)

    maintenance_schedules = db.relationship(
        'MaintenanceSchedule',
        back_populates='asset',
        cascade='all, delete-orphan'
    )
    work_orders = db.relationship('WorkOrder', back_populates='asset')

    def record_maintenance(self, completed_on):
        """Move last_maintenance forward; an older completion never rewinds it."""
        if self.last_maintenance is None or completed_on > self.last_maintenance:
            self.last_maintenance = completed_on

    def __repr__(self):
        return f'<Asset {self.name}>'
