"""
User management routes
Administrators list and create accounts
"""

from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from cmms.auth import role_required
from cmms.data.core.user_info.password_validator import PasswordValidator
from cmms.data.core.user_info.user import User, UserRole
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload, ValidationError

bp = Blueprint('users', __name__)
logger = get_logger("cmms.routes.users")


@bp.route('/users', methods=['GET'])
@login_required
@role_required(UserRole.ADMIN)
def list_users():
    users = User.query.order_by(User.username).all()
    return jsonify([u.to_dict(include_audit_fields=False) for u in users])


@bp.route('/users', methods=['POST'])
@login_required
@role_required(UserRole.ADMIN)
def create_user():
    payload = Payload.from_request()
    payload.string('username', required=True, max_length=80)
    payload.string('password', required=True)
    payload.choice('role', UserRole.ALL, default=UserRole.TECHNICIAN)
    payload.boolean('is_active', default=True)
    data = payload.result()

    is_valid, message = PasswordValidator.validate(data['password'])
    if not is_valid:
        raise ValidationError({'password': [message] + PasswordValidator.get_requirements()})

    if User.query.filter_by(username=data['username']).first():
        raise ValidationError.single('username', 'Username already exists')

    user = User.create_from_dict(data)
    logger.info(f"User {current_user.username} created user {user.username} ({user.role})")
    return jsonify(user.to_dict(include_audit_fields=False)), 201
