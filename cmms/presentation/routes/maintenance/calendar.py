"""
Maintenance calendar routes
"""

from dateutil.relativedelta import relativedelta
from flask import Blueprint, jsonify
from flask_login import login_required

from cmms.presentation.routes.maintenance.dashboard import requested_strategy
from cmms.presentation.routes.payloads import ValidationError, query_date, today_or
from cmms.services.maintenance.maintenance_task_service import MaintenanceTaskService
from cmms.utils.date_utils import start_of_month

bp = Blueprint('maintenance_calendar', __name__)


@bp.route('/maintenance-calendar', methods=['GET'])
@login_required
def maintenance_calendar():
    """Occurrences between start and end (inclusive); defaults to the current month."""
    today = today_or()
    start = query_date('start', default=start_of_month(today))
    end = query_date('end', default=start + relativedelta(months=1, days=-1))
    if end < start:
        raise ValidationError.single('end', 'End date must not be before start date')

    occurrences = MaintenanceTaskService.get_calendar(start, end, today, strategy=requested_strategy())
    return jsonify({
        'start': start.isoformat(),
        'end': end.isoformat(),
        'occurrences': [o.to_dict() for o in occurrences],
    })
