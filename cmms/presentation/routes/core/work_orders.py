"""
Work order routes
CRUD operations for WorkOrder model
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from cmms import db
from cmms.auth import role_required
from cmms.data.core.asset_info.asset import Asset
from cmms.data.core.user_info.user import User, UserRole
from cmms.data.work_orders.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError, query_bool
from cmms.services.work_orders.work_order_service import WorkOrderService

bp = Blueprint('work_orders', __name__)
logger = get_logger("cmms.routes.work_orders")


def _read_work_order(partial=False):
    payload = Payload.from_request(partial=partial)
    payload.string('title', required=True, max_length=200)
    payload.string('description', default='')
    payload.choice('status', WorkOrderStatus.ALL, default=WorkOrderStatus.OPEN)
    payload.choice('priority', WorkOrderPriority.ALL, default=WorkOrderPriority.MEDIUM)
    payload.integer('assigned_to_id', nullable=True)
    payload.integer('asset_id', nullable=True)
    payload.datetime_field('due_date', required=True)
    payload.datetime_field('reported_date')
    data = payload.result()

    errors = {}
    if data.get('asset_id') is not None and db.session.get(Asset, data['asset_id']) is None:
        errors['asset_id'] = ['Asset not found']
    if data.get('assigned_to_id') is not None and db.session.get(User, data['assigned_to_id']) is None:
        errors['assigned_to_id'] = ['User not found']
    if errors:
        raise ValidationError(errors)
    return data


@bp.route('/work-orders', methods=['GET'])
@login_required
def list_work_orders():
    query = WorkOrderService.build_filtered_query(
        status=request.args.get('status'),
        priority=request.args.get('priority'),
        asset_id=request.args.get('asset_id', type=int),
        assigned_to_id=request.args.get('assigned_to_id', type=int),
        include_archived=query_bool('include_archived', default=False)
    )
    return jsonify([wo.to_dict() for wo in query.all()])


@bp.route('/work-orders/<int:work_order_id>', methods=['GET'])
@login_required
def get_work_order(work_order_id):
    work_order = db.get_or_404(WorkOrder, work_order_id)
    return jsonify(work_order.to_dict())


@bp.route('/work-orders', methods=['POST'])
@login_required
def create_work_order():
    data = _read_work_order()
    status = data.pop('status')

    work_order = WorkOrder.from_dict(data, user_id=current_user.id)
    work_order.set_status(status)
    db.session.add(work_order)
    db.session.commit()

    logger.info(f"User {current_user.username} created work order {work_order.id} ({work_order.title})")
    return jsonify(work_order.to_dict()), 201


@bp.route('/work-orders/<int:work_order_id>', methods=['PATCH'])
@login_required
def update_work_order(work_order_id):
    work_order = db.get_or_404(WorkOrder, work_order_id)
    data = _read_work_order(partial=True)

    status = data.pop('status', None)
    changed = work_order.update_from_dict(data, user_id=current_user.id)
    if status is not None and status != work_order.status:
        work_order.set_status(status)
        changed.append('status')
    db.session.commit()

    logger.info(f"User {current_user.username} updated work order {work_order.id}: {', '.join(changed) or 'no changes'}")
    return jsonify(work_order.to_dict())


@bp.route('/work-orders/<int:work_order_id>', methods=['DELETE'])
@login_required
@role_required(UserRole.ADMIN)
def delete_work_order(work_order_id):
    work_order = db.get_or_404(WorkOrder, work_order_id)
    db.session.delete(work_order)
    db.session.commit()
    logger.info(f"User {current_user.username} deleted work order {work_order_id}")
    return jsonify({'message': 'Work order deleted'})
