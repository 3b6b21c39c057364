"""
Problem button routes
Everyone reads the buttons; administrators configure them.
"""

import re

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from cmms import db
from cmms.auth import role_required
from cmms.data.core.asset_info.asset import Asset
from cmms.data.core.user_info.user import User, UserRole
from cmms.data.problems.problem_button import ProblemButton
from cmms.data.work_orders.work_order import WorkOrderPriority
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError, query_bool
from cmms.services.problems.problem_service import ProblemService

bp = Blueprint('problem_buttons', __name__)
logger = get_logger("cmms.routes.problem_buttons")

HEX_COLOR = re.compile(r'^#([0-9a-f]{3}){1,2}$', re.IGNORECASE)


def _read_button(partial=False):
    payload = Payload.from_request(partial=partial)
    payload.string('label', required=True, max_length=50)
    payload.string('color', default='#dc2626', max_length=7)
    payload.string('icon', nullable=True, max_length=50)
    payload.boolean('active', default=True)
    payload.boolean('create_work_order', default=False)
    payload.string('work_order_title', nullable=True, max_length=200)
    payload.string('work_order_description', nullable=True)
    payload.choice('work_order_priority', WorkOrderPriority.ALL, default=WorkOrderPriority.HIGH)
    payload.integer('default_asset_id', nullable=True)
    payload.integer('default_assigned_to_id', nullable=True)
    payload.boolean('notify_maintenance', default=False)

    label = payload.values.get('label')
    if label is not None and len(label) < 2:
        payload.error('label', 'Must be at least 2 characters')
    color = payload.values.get('color')
    if color is not None and not HEX_COLOR.match(color):
        payload.error('color', 'Must be a hex color such as #dc2626')
    data = payload.result()

    errors = {}
    if data.get('default_asset_id') is not None and db.session.get(Asset, data['default_asset_id']) is None:
        errors['default_asset_id'] = ['Asset not found']
    if data.get('default_assigned_to_id') is not None and db.session.get(User, data['default_assigned_to_id']) is None:
        errors['default_assigned_to_id'] = ['User not found']
    if errors:
        raise ValidationError(errors)
    return data


@bp.route('/problem-buttons', methods=['GET'])
@login_required
def list_buttons():
    buttons = ProblemService.get_buttons(active=query_bool('active'))
    return jsonify([b.to_dict() for b in buttons])


@bp.route('/problem-buttons/<int:button_id>', methods=['GET'])
@login_required
def get_button(button_id):
    button = db.get_or_404(ProblemButton, button_id)
    return jsonify(button.to_dict())


@bp.route('/problem-buttons', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def create_button():
    button = ProblemButton.create_from_dict(_read_button(), user_id=current_user.id)
    logger.info(f"User {current_user.username} created problem button {button.id} ({button.label})")
    return jsonify(button.to_dict()), 201


@bp.route('/problem-buttons/<int:button_id>', methods=['PATCH'])
@login_required
@role_required(UserRole.ADMIN)
def update_button(button_id):
    button = db.get_or_404(ProblemButton, button_id)
    changed = button.update_from_dict(_read_button(partial=True), user_id=current_user.id)
    db.session.commit()
    logger.info(f"User {current_user.username} updated problem button {button.id}: {', '.join(changed) or 'no changes'}")
    return jsonify(button.to_dict())


@bp.route('/problem-buttons/<int:button_id>', methods=['DELETE'])
@login_required
@role_required(UserRole.ADMIN)
def delete_button(button_id):
    """A button that problems were reported with is kept for their history; deactivate it instead."""
    button = db.get_or_404(ProblemButton, button_id)
    if button.events:
        raise ValidationError.single('id', 'Problems were reported with this button; deactivate it instead')
    db.session.delete(button)
    db.session.commit()
    logger.info(f"User {current_user.username} deleted problem button {button_id}")
    return jsonify({'message': 'Problem button deleted'})
