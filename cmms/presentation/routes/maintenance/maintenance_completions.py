"""
Maintenance completion routes
"""

from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from cmms import db
from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError
from cmms.services.maintenance.maintenance_completion_service import MaintenanceCompletionService

bp = Blueprint('maintenance_completions', __name__)
logger = get_logger("cmms.routes.maintenance_completions")


@bp.route('/maintenance-completions', methods=['GET'])
@login_required
def list_completions():
    completions = MaintenanceCompletionService.get_completions(
        schedule_id=request.args.get('schedule_id', type=int)
    )
    return jsonify([c.to_dict() for c in completions])


@bp.route('/maintenance-completions', methods=['POST'])
@login_required
def create_completion():
    """
    Mark an occurrence as done. completed_date is the occurrence's date (or
    the moment the work finished); it defaults to now.
    """
    payload = Payload.from_request()
    payload.integer('schedule_id', required=True)
    payload.datetime_field('completed_date')
    payload.string('notes', nullable=True)
    data = payload.result()

    schedule = db.session.get(MaintenanceSchedule, data['schedule_id'])
    if schedule is None:
        raise ValidationError.single('schedule_id', 'Maintenance schedule not found')

    completed_date = data.get('completed_date') or datetime.utcnow()
    if completed_date.date() < schedule.start_date:
        raise ValidationError.single('completed_date', 'Completion date is before the schedule starts')

    completion = MaintenanceCompletionService.record_completion(
        schedule,
        completed_date,
        notes=data.get('notes'),
        user_id=current_user.id
    )
    return jsonify(completion.to_dict()), 201
