"""
Problem event routes
Report, review and resolve ad-hoc problems. Any signed-in user may report.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from cmms import db
from cmms.data.core.asset_info.asset import Asset
from cmms.data.problems.problem_button import ProblemButton
from cmms.data.problems.problem_event import ProblemEvent
from cmms.data.work_orders.work_order import WorkOrderPriority
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError, query_bool, query_date
from cmms.services.problems.problem_service import ProblemService

bp = Blueprint('problem_events', __name__)
logger = get_logger("cmms.routes.problem_events")

# request field -> ProblemService.report_problem work order option
WORK_ORDER_OPTIONS = {
    'create_work_order': 'create',
    'work_order_title': 'title',
    'work_order_description': 'description',
    'work_order_priority': 'priority',
    'default_asset_id': 'default_asset_id',
    'notify_maintenance': 'notify_maintenance',
}


def _check_asset(errors, data, field):
    if data.get(field) is not None and db.session.get(Asset, data[field]) is None:
        errors[field] = ['Asset not found']


@bp.route('/problem-events', methods=['GET'])
@login_required
def list_events():
    start = query_date('start')
    end = query_date('end')
    if start is not None and end is not None and end < start:
        raise ValidationError.single('end', 'End date must not be before start date')

    events = ProblemService.get_events(
        start=start,
        end=end,
        resolved=query_bool('resolved'),
        button_id=request.args.get('button_id', type=int)
    )
    return jsonify([e.to_dict() for e in events])


@bp.route('/problem-events/<int:event_id>', methods=['GET'])
@login_required
def get_event(event_id):
    event = db.get_or_404(ProblemEvent, event_id)
    return jsonify(event.to_dict())


@bp.route('/problem-events', methods=['POST'])
@login_required
def report_problem():
    payload = Payload.from_request()
    payload.integer('button_id', required=True)
    payload.integer('asset_id', nullable=True)
    payload.string('location_name', nullable=True, max_length=200)
    payload.string('notes', nullable=True)
    payload.string('problem_details', nullable=True)
    payload.datetime_field('timestamp')
    payload.boolean('create_work_order')
    payload.string('work_order_title', nullable=True, max_length=200)
    payload.string('work_order_description', nullable=True)
    payload.choice('work_order_priority', WorkOrderPriority.ALL)
    payload.integer('default_asset_id', nullable=True)
    payload.boolean('notify_maintenance')
    data = payload.result()

    errors = {}
    button = db.session.get(ProblemButton, data['button_id'])
    if button is None:
        errors['button_id'] = ['Problem button not found']
    elif not button.active:
        errors['button_id'] = ['Problem button is inactive']
    _check_asset(errors, data, 'asset_id')
    _check_asset(errors, data, 'default_asset_id')
    if errors:
        raise ValidationError(errors)

    options = {option: data.pop(field) for field, option in WORK_ORDER_OPTIONS.items() if field in data}
    event = ProblemService.report_problem(button, data, user_id=current_user.id, work_order=options)
    return jsonify(event.to_dict()), 201


@bp.route('/problem-events/<int:event_id>', methods=['PATCH'])
@login_required
def update_event(event_id):
    event = db.get_or_404(ProblemEvent, event_id)

    payload = Payload.from_request(partial=True)
    payload.integer('asset_id', nullable=True)
    payload.string('location_name', nullable=True, max_length=200)
    payload.string('notes', nullable=True)
    payload.string('problem_details', nullable=True)
    payload.string('solution_notes', nullable=True)
    data = payload.result()

    errors = {}
    _check_asset(errors, data, 'asset_id')
    if errors:
        raise ValidationError(errors)

    changed = event.update_from_dict(data, user_id=current_user.id)
    db.session.commit()
    logger.info(f"User {current_user.username} updated problem {event.id}: {', '.join(changed) or 'no changes'}")
    return jsonify(event.to_dict())


@bp.route('/problem-events/<int:event_id>/resolve', methods=['POST'])
@login_required
def resolve_event(event_id):
    event = db.get_or_404(ProblemEvent, event_id)
    if event.resolved:
        raise ValidationError.single('resolved', 'Problem is already resolved')

    payload = Payload.from_request()
    payload.string('solution_notes', nullable=True)
    data = payload.result()

    event = ProblemService.resolve_event(event, current_user.id, solution_notes=data.get('solution_notes'))
    return jsonify(event.to_dict())
