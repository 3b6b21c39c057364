from cmms import db
from cmms.business.core.data_insertion_mixin import DataInsertionMixin
from datetime import datetime


class AppPage:
    DASHBOARD = "dashboard"
    ASSETS = "assets"
    WORK_ORDERS = "work-orders"
    MAINTENANCE_SCHEDULES = "maintenance-schedules"
    MAINTENANCE_CALENDAR = "maintenance-calendar"
    MAINTENANCE_ANALYTICS = "maintenance-analytics"
    PROBLEM_TRACKING = "problem-tracking"
    SETTINGS = "settings"
    ADMIN = "admin"

    ALL = (
        DASHBOARD, ASSETS, WORK_ORDERS, MAINTENANCE_SCHEDULES, MAINTENANCE_CALENDAR,
        MAINTENANCE_ANALYTICS, PROBLEM_TRACKING, SETTINGS, ADMIN,
    )


class AppSettings(DataInsertionMixin, db.Model):
    """Site-wide settings. A single row, created with defaults on first read."""
    __tablename__ = 'settings'

    id = db.Column(db.Integer, primary_key=True)

    # work schedule, weekday numbers with 0 = Sunday
    work_week_start = db.Column(db.Integer, nullable=False, default=1)
    work_week_end = db.Column(db.Integer, nullable=False, default=5)
    work_day_start = db.Column(db.String(5), nullable=False, default='09:00')
    work_day_end = db.Column(db.String(5), nullable=False, default='17:00')

    # display
    time_zone = db.Column(db.String(64), nullable=False, default='UTC')
    date_format = db.Column(db.String(20), nullable=False, default='MM/DD/YYYY')
    time_format = db.Column(db.String(20), nullable=False, default='HH:mm')

    # role -> page a user of that role lands on after login
    role_default_pages = db.Column(db.JSON, nullable=False, default=dict)

    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    updated_by_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=True)

    def default_page_for(self, role):
        return (self.role_default_pages or {}).get(role, AppPage.DASHBOARD)

    def __repr__(self):
        return '<AppSettings>'
