from functools import wraps
from datetime import datetime

from flask import Blueprint, jsonify, abort, request
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from cmms import db, limiter
from cmms.data.core.user_info.user import User
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import Payload
from cmms.services.core.settings_service import SettingsService
from cmms.utils.logging_sanitizer import sanitize_request_payload

logger = get_logger("cmms.auth")
auth = Blueprint('auth', __name__)


def role_required(*roles):
    """Decorator to restrict a view to users holding one of roles. Use below @login_required."""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated or not current_user.has_role(*roles):
                username = current_user.username if current_user.is_authenticated else 'anonymous'
                logger.warning(f"User {username} without role {'/'.join(roles)} attempted {request.method} {request.path}")
                abort(403, description='You do not have permission to perform this action')
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def user_details(user):
    """Account fields plus the page the user's role lands on."""
    data = user.to_dict(include_audit_fields=False)
    data['default_page'] = SettingsService.get_settings().default_page_for(user.role)
    return data


@auth.route('/csrf-token', methods=['GET'])
def csrf_token():
    return jsonify({'csrf_token': generate_csrf()})


@auth.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    if current_user.is_authenticated:
        logger.debug(f"User {current_user.username} already authenticated")
        return jsonify(user_details(current_user))

    logger.debug(f"Login payload: {sanitize_request_payload(request)}")

    payload = Payload.from_request()
    payload.string('username', required=True)
    payload.string('password', required=True)
    credentials = payload.result()

    username = credentials['username']
    user = User.query.filter_by(username=username).first()

    if user is None or not user.check_password(credentials['password']):
        logger.warning(f"Failed login attempt for username: {username}")
        return jsonify({'message': 'Invalid username or password'}), 401

    if not user.is_active:
        logger.warning(f"Login attempt for disabled account: {username}")
        return jsonify({'message': 'Account is disabled'}), 403

    login_user(user)
    user.last_login_at = datetime.utcnow()
    db.session.commit()
    logger.info(f"Successful login for user: {username}")

    return jsonify(user_details(user))


@auth.route('/logout', methods=['POST'])
@login_required
def logout():
    username = current_user.username
    logout_user()
    logger.info(f"User logged out: {username}")
    return jsonify({'message': 'Logged out'})


@auth.route('/user', methods=['GET'])
@login_required
def user():
    return jsonify(user_details(current_user))
