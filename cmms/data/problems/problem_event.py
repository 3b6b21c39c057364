from cmms.data.core.user_created_base import UserCreatedBase
from cmms import db
from datetime import datetime


class ProblemEvent(UserCreatedBase):
    """An ad-hoc problem report. created_by_id is the reporting user."""
    __tablename__ = 'problem_events'

    button_id = db.Column(db.Integer, db.ForeignKey('problem_buttons.id'), nullable=False)
    asset_id = db.Column(db.Integer, db.ForeignKey('assets.id', ondelete='SET NULL'), nullable=True)
    work_order_id = db.Column(db.Integer, db.ForeignKey('work_orders.id', ondelete='SET NULL'), nullable=True)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    location_name = db.Column(db.String(200), nullable=True)
    notes = db.Column(db.Text, nullable=True)
    problem_details = db.Column(db.Text, nullable=True)

    # resolution
    resolved = db.Column(db.Boolean, nullable=False, default=False)
    resolved_at = db.Column(db.DateTime, nullable=True)
    resolved_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)
    solution_notes = db.Column(db.Text, nullable=True)

    button = db.relationship('ProblemButton', back_populates='events')
    asset = db.relationship('Asset')
    work_order = db.relationship('WorkOrder')
    resolved_by = db.relationship('User', foreign_keys=[resolved_by_id])

    def resolve(self, user_id, solution_notes=None, now=None):
        self.resolved = True
        self.resolved_at = now or datetime.utcnow()
        self.resolved_by_id = user_id
        if solution_notes is not None:
            self.solution_notes = solution_notes

    def to_dict(self, include_audit_fields=True, exclude=None):
        data = super().to_dict(include_audit_fields=include_audit_fields, exclude=exclude)
        data['button_label'] = self.button.label if self.button else None
        data['asset_name'] = self.asset.name if self.asset else None
        return data

    def __repr__(self):
        return f'<ProblemEvent {self.id} button={self.button_id} resolved={self.resolved}>'
