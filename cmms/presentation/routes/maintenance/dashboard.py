"""
Dashboard routes
The maintenance agenda ("today", "overdue", "all") and the summary counters.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required

from cmms.business.maintenance.scheduling.strategies import STRATEGIES
from cmms.logger import get_logger
from cmms.presentation.routes.payloads import ValidationError, today_or
from cmms.services.maintenance.maintenance_task_service import AgendaTab, MaintenanceTaskService

bp = Blueprint('dashboard', __name__)
logger = get_logger("cmms.routes.dashboard")


def requested_strategy():
    """The strategy query argument, validated; None means the configured default."""
    name = request.args.get('strategy')
    if name in (None, ''):
        return None
    if name.lower() not in STRATEGIES:
        raise ValidationError.single('strategy', f"Must be one of: {', '.join(sorted(STRATEGIES))}")
    return name.lower()


@bp.route('/dashboard/maintenance-tasks', methods=['GET'])
@login_required
def maintenance_tasks():
    tab = request.args.get('tab', AgendaTab.ALL).lower()
    if tab not in AgendaTab.CHOICES:
        raise ValidationError.single('tab', f"Must be one of: {', '.join(AgendaTab.CHOICES)}")

    today = today_or()
    occurrences = MaintenanceTaskService.get_agenda(today, tab=tab, strategy=requested_strategy())
    return jsonify([o.to_dict() for o in occurrences])


@bp.route('/dashboard/summary', methods=['GET'])
@login_required
def summary():
    today = today_or()
    return jsonify(MaintenanceTaskService.get_summary(today, strategy=requested_strategy()))
