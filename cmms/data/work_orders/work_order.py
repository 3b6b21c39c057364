from cmms.data.core.user_created_base import UserCreatedBase
from cmms import db
from datetime import datetime


class WorkOrderStatus:
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"

    ALL = (OPEN, IN_PROGRESS, COMPLETED, ARCHIVED)


class WorkOrderPriority:
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    ALL = (LOW, MEDIUM, HIGH)


class WorkOrder(UserCreatedBase):
    __tablename__ = 'work_orders'

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False, default='')
    status = db.Column(db.String(20), nullable=False, default=WorkOrderStatus.OPEN)
    priority = db.Column(db.String(20), nullable=False, default=WorkOrderPriority.MEDIUM)
    assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id', ondelete='SET NULL'), nullable=True)
    due_date = db.Column(db.DateTime, nullable=False)
    reported_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    completed_date = db.Column(db.DateTime, nullable=True)

    asset = db.relationship('Asset', back_populates='work_orders')
    assigned_to = db.relationship('User', foreign_keys=[assigned_to_id])

    def set_status(self, status, now=None):
        """
        Change status, stamping or clearing completed_date to match.

        Args:
            status (str): One of WorkOrderStatus.ALL
            now (datetime, optional): Completion timestamp, defaults to utcnow
        """
        if status == WorkOrderStatus.COMPLETED and self.status != WorkOrderStatus.COMPLETED:
            self.completed_date = now or datetime.utcnow()
        elif status in (WorkOrderStatus.OPEN, WorkOrderStatus.IN_PROGRESS):
            self.completed_date = None
        self.status = status

    def __repr__(self):
        return f'<WorkOrder {self.title} ({self.status})>'
