from cmms.data.core.user_created_base import UserCreatedBase
from cmms.data.work_orders.work_order import WorkOrderPriority
from cmms import db


class ProblemButton(UserCreatedBase):
    """
    A one-tap problem report option, e.g. "Leak" or "Power loss".

    The work order fields are a template: reporting against a button with
    create_work_order set opens a work order from them.
    """
    __tablename__ = 'problem_buttons'

    label = db.Column(db.String(50), nullable=False)
    color = db.Column(db.String(7), nullable=False, default='#dc2626')
    icon = db.Column(db.String(50), nullable=True)
    active = db.Column(db.Boolean, nullable=False, default=True)

    # work order template
    create_work_order = db.Column(db.Boolean, nullable=False, default=False)
    work_order_title = db.Column(db.String(200), nullable=True)
    work_order_description = db.Column(db.Text, nullable=True)
    work_order_priority = db.Column(db.String(20), nullable=False, default=WorkOrderPriority.HIGH)
    default_asset_id = db.Column(db.Integer, db.ForeignKey('assets.id', ondelete='SET NULL'), nullable=True)
    default_assigned_to_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    notify_maintenance = db.Column(db.Boolean, nullable=False, default=False)

    events = db.relationship('ProblemEvent', back_populates='button')

    def __repr__(self):
        return f'<ProblemButton {self.label}>'
