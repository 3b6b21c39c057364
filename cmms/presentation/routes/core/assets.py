"""
Asset routes
CRUD operations for Asset model
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required, current_user

from cmms import db
from cmms.auth import role_required
from cmms.data.core.asset_info.asset import Asset, AssetStatus
from cmms.data.core.user_info.user import UserRole
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload
from cmms.services.core.asset_service import AssetService

bp = Blueprint('assets', __name__)
logger = get_logger("cmms.routes.assets")


def _read_asset(partial=False):
    payload = Payload.from_request(partial=partial)
    payload.string('name', required=True, max_length=100)
    payload.string('description', default='')
    payload.string('location', default='', max_length=200)
    payload.choice('status', AssetStatus.ALL, default=AssetStatus.OPERATIONAL)
    payload.date_field('last_maintenance', nullable=True)
    return payload.result()


@bp.route('/assets', methods=['GET'])
@login_required
def list_assets():
    query = AssetService.build_filtered_query(
        status=request.args.get('status'),
        location=request.args.get('location'),
        name=request.args.get('name')
    )
    return jsonify([a.to_dict() for a in query.all()])


@bp.route('/assets/<int:asset_id>', methods=['GET'])
@login_required
def get_asset(asset_id):
    asset = db.get_or_404(Asset, asset_id)
    return jsonify(asset.to_dict())


@bp.route('/assets', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN, UserRole.MANAGER)
def create_asset():
    asset = Asset.create_from_dict(_read_asset(), user_id=current_user.id)
    logger.info(f"User {current_user.username} created asset {asset.id} ({asset.name})")
    return jsonify(asset.to_dict()), 201


@bp.route('/assets/<int:asset_id>', methods=['PATCH'])
@login_required
@role_required(UserRole.ADMIN, UserRole.MANAGER)
def update_asset(asset_id):
    asset = db.get_or_404(Asset, asset_id)
    changed = asset.update_from_dict(_read_asset(partial=True), user_id=current_user.id)
    db.session.commit()
    logger.info(f"User {current_user.username} updated asset {asset.id}: {', '.join(changed) or 'no changes'}")
    return jsonify(asset.to_dict())


@bp.route('/assets/<int:asset_id>/status', methods=['PATCH'])
@login_required
def update_asset_status(asset_id):
    """Technicians may move an asset in and out of maintenance"""
    asset = db.get_or_404(Asset, asset_id)

    payload = Payload.from_request()
    payload.choice('status', AssetStatus.ALL, required=True)
    data = payload.result()

    previous = asset.status
    asset.update_from_dict(data, user_id=current_user.id)
    db.session.commit()
    logger.info(f"User {current_user.username} changed asset {asset.id} status {previous} -> {asset.status}")
    return jsonify(asset.to_dict())


@bp.route('/assets/<int:asset_id>', methods=['DELETE'])
@login_required
@role_required(UserRole.ADMIN)
def delete_asset(asset_id):
    asset = db.get_or_404(Asset, asset_id)
    name = asset.name
    db.session.delete(asset)
    db.session.commit()
    logger.info(f"User {current_user.username} deleted asset {asset_id} ({name})")
    return jsonify({'message': 'Asset deleted'})
