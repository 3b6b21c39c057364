"""
Maintenance schedule routes
Recurring schedules; the occurrences they produce are served by the
dashboard and calendar routes.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from cmms import db
from cmms.auth import role_required
from cmms.business.maintenance.scheduling import MaintenanceFrequency, ScheduleStatus
from cmms.data.core.asset_info.asset import Asset
from cmms.data.core.user_info.user import UserRole
from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError, query_date
from cmms.services.maintenance.maintenance_schedule_service import MaintenanceScheduleService

bp = Blueprint('maintenance_schedules', __name__)
logger = get_logger("cmms.routes.maintenance_schedules")


def _canonical_frequency(value):
    frequency = MaintenanceFrequency.parse(value)
    return frequency.value if frequency else None


def _read_schedule(existing=None):
    """
    Validate a create (existing=None) or partial update body.

    The end date is checked against the start date the row will have after
    the update, not only against what was sent.
    """
    payload = Payload.from_request(partial=existing is not None)
    payload.string('title', required=True, max_length=200)
    payload.string('description', default='')
    payload.integer('asset_id', required=True)
    payload.choice('status', ScheduleStatus.ALL, default=ScheduleStatus.ACTIVE)
    payload.date_field('start_date', required=True)
    payload.date_field('end_date', nullable=True)
    payload.choice('frequency', MaintenanceFrequency.choices(), required=True, normalize=_canonical_frequency)
    data = payload.result()

    errors = {}
    if 'asset_id' in data and db.session.get(Asset, data['asset_id']) is None:
        errors['asset_id'] = ['Asset not found']

    start = data.get('start_date', existing.start_date if existing else None)
    end = data.get('end_date', existing.end_date if existing else None)
    if start is not None and end is not None and end < start:
        errors['end_date'] = ['End date must not be before start date']

    if errors:
        raise ValidationError(errors)
    return data


@bp.route('/maintenance-schedules', methods=['GET'])
@login_required
def list_schedules():
    schedules = MaintenanceScheduleService.get_schedules(
        start=query_date('start'),
        end=query_date('end'),
        asset_id=request.args.get('asset_id', type=int)
    )
    return jsonify([s.to_dict() for s in schedules])


@bp.route('/maintenance-schedules/<int:schedule_id>', methods=['GET'])
@login_required
def get_schedule(schedule_id):
    schedule = db.get_or_404(MaintenanceSchedule, schedule_id)
    return jsonify(schedule.to_dict())


@bp.route('/maintenance-schedules', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN, UserRole.MANAGER)
def create_schedule():
    schedule = MaintenanceScheduleService.create_schedule(_read_schedule(), user_id=current_user.id)
    return jsonify(schedule.to_dict()), 201


@bp.route('/maintenance-schedules/<int:schedule_id>', methods=['PATCH'])
@login_required
@role_required(UserRole.ADMIN, UserRole.MANAGER)
def update_schedule(schedule_id):
    schedule = db.get_or_404(MaintenanceSchedule, schedule_id)
    MaintenanceScheduleService.update_schedule(schedule, _read_schedule(existing=schedule), user_id=current_user.id)
    return jsonify(schedule.to_dict())


@bp.route('/maintenance-schedules/<int:schedule_id>', methods=['DELETE'])
@login_required
@role_required(UserRole.ADMIN, UserRole.MANAGER)
def delete_schedule(schedule_id):
    schedule = db.get_or_404(MaintenanceSchedule, schedule_id)
    MaintenanceScheduleService.delete_schedule(schedule)
    return jsonify({'message': 'Maintenance schedule deleted'})
