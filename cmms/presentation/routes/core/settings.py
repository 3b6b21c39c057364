"""
Settings routes
Site-wide work schedule, display formats and the page each role lands on.
"""

import re

from dateutil import tz
from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from cmms.auth import role_required
from cmms.data.core.settings import AppPage
from cmms.data.core.user_info.user import UserRole
from cmms.presentation.routes.payloads import Payload
from cmms.services.core.settings_service import SettingsService

bp = Blueprint('settings', __name__)

CLOCK_TIME = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def _read_settings():
    payload = Payload.from_request(partial=True)
    payload.integer('work_week_start')
    payload.integer('work_week_end')
    payload.string('work_day_start')
    payload.string('work_day_end')
    payload.string('time_zone', max_length=64)
    payload.string('date_format', max_length=20)
    payload.string('time_format', max_length=20)

    values = payload.values
    for field in ('work_week_start', 'work_week_end'):
        if field in values and not 0 <= values[field] <= 6:
            payload.error(field, 'Must be a weekday number from 0 (Sunday) to 6')
    for field in ('work_day_start', 'work_day_end'):
        if field in values and not CLOCK_TIME.match(values[field]):
            payload.error(field, 'Must be a time as HH:MM')
    if 'time_zone' in values and (not values['time_zone'] or tz.gettz(values['time_zone']) is None):
        payload.error('time_zone', 'Unknown time zone')

    if 'role_default_pages' in payload.data:
        pages = payload.data['role_default_pages']
        if not isinstance(pages, dict):
            payload.error('role_default_pages', 'Must be an object of role to page')
        else:
            for role, page in pages.items():
                if role not in UserRole.ALL:
                    payload.error('role_default_pages', f"Unknown role: {role}")
                elif page not in AppPage.ALL:
                    payload.error('role_default_pages', f"Unknown page for {role}: {page}")
            values['role_default_pages'] = dict(pages)

    return payload.result()


@bp.route('/settings', methods=['GET'])
@login_required
def get_settings():
    return jsonify(SettingsService.get_settings().to_dict())


@bp.route('/settings', methods=['PATCH'])
@login_required
@role_required(UserRole.ADMIN)
def update_settings():
    SettingsService.update_settings(_read_settings(), user_id=current_user.id)
    return jsonify(SettingsService.get_settings().to_dict())
