"""
Maintenance analytics routes
"""

from flask import Blueprint, jsonify
from flask_login import login_required

from cmms.presentation.routes.payloads import query_int, today_or
from cmms.services.maintenance.maintenance_analytics_service import MaintenanceAnalyticsService

bp = Blueprint('maintenance_analytics', __name__)


@bp.route('/maintenance-analytics', methods=['GET'])
@login_required
def maintenance_analytics():
    months = query_int('months', default=6, minimum=1)
    return jsonify(MaintenanceAnalyticsService.get_report(today_or(), months=months))
