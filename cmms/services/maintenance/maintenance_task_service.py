"""
Maintenance Task Service
Feeds persisted schedules and completions through the occurrence generator
for the dashboard agenda, the summary counts and the calendar.
"""

from datetime import date
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta
from flask import current_app

from cmms.business.maintenance.scheduling import (
    Occurrence,
    OccurrenceGenerator,
    get_strategy,
    sort_occurrences,
)
from cmms.data.core.asset_info.asset import Asset, AssetStatus
from cmms.data.maintenance.maintenance_completions import MaintenanceCompletion
from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule
from cmms.data.work_orders.work_order import WorkOrderStatus
from cmms.logger import get_logger
from cmms.services.core.asset_service import AssetService
from cmms.services.problems.problem_service import ProblemService
from cmms.services.work_orders.work_order_service import WorkOrderService

logger = get_logger("cmms.services.maintenance.tasks")


class AgendaTab:
    TODAY = "today"
    OVERDUE = "overdue"
    ALL = "all"

    CHOICES = (TODAY, OVERDUE, ALL)


class MaintenanceTaskService:
    """
    Service for the maintenance agenda.

    Provides methods for:
    - Building a generator from application config
    - Expanding every stored schedule into occurrences
    - Agenda tabs, summary counts and the calendar window
    """

    @staticmethod
    def build_generator(strategy: Optional[str] = None) -> OccurrenceGenerator:
        """
        Args:
            strategy: "fixed" or "rolling"; MAINTENANCE_STRATEGY when omitted

        Raises:
            ValueError: unknown strategy name
        """
        name = strategy or current_app.config.get('MAINTENANCE_STRATEGY', 'fixed')
        months = current_app.config.get('MAINTENANCE_HORIZON_MONTHS', 12)
        return OccurrenceGenerator(strategy=get_strategy(name), horizon=relativedelta(months=months))

    @staticmethod
    def build_occurrences(today: date, strategy: Optional[str] = None, until: Optional[date] = None) -> List[Occurrence]:
        """
        Load schedules, completions and asset names and expand them.

        Args:
            today: Reference date
            strategy: Strategy name, see build_generator()
            until: Calendar mode end date

        Returns:
            Occurrences sorted overdue first, then by date
        """
        generator = MaintenanceTaskService.build_generator(strategy)

        schedules = MaintenanceSchedule.query.order_by(MaintenanceSchedule.id).all()
        completions = MaintenanceCompletion.query.all()
        asset_names = AssetService.get_asset_names()

        occurrences = generator.generate(schedules, completions, today, asset_names=asset_names, until=until)
        logger.debug(
            f"Expanded {len(schedules)} schedules into {len(occurrences)} occurrences "
            f"({generator.strategy.name}, today={today.isoformat()})"
        )
        return sort_occurrences(occurrences)

    @staticmethod
    def filter_by_tab(occurrences: List[Occurrence], tab: str, today: date) -> List[Occurrence]:
        """
        Raises:
            ValueError: tab is not one of AgendaTab.CHOICES
        """
        if tab == AgendaTab.ALL:
            return list(occurrences)
        if tab == AgendaTab.OVERDUE:
            return [o for o in occurrences if o.is_overdue]
        if tab == AgendaTab.TODAY:
            return [o for o in occurrences if o.is_overdue or o.is_due_on(today)]
        raise ValueError(f"Unknown tab {tab!r}; expected one of {', '.join(AgendaTab.CHOICES)}")

    @staticmethod
    def get_agenda(today: date, tab: str = AgendaTab.ALL, strategy: Optional[str] = None) -> List[Occurrence]:
        occurrences = MaintenanceTaskService.build_occurrences(today, strategy)
        return MaintenanceTaskService.filter_by_tab(occurrences, tab, today)

    @staticmethod
    def get_summary(today: date, strategy: Optional[str] = None) -> Dict[str, int]:
        """
        Dashboard counters.

        Returns:
            Dictionary with overdue/due-today occurrence counts, open,
            in-progress and completed work orders, assets under maintenance
            and unresolved problem reports
        """
        occurrences = MaintenanceTaskService.build_occurrences(today, strategy)
        work_orders = WorkOrderService.count_by_status()
        assets_in_maintenance = Asset.query.filter(Asset.status == AssetStatus.MAINTENANCE).count()

        return {
            'overdue': sum(1 for o in occurrences if o.is_overdue),
            'due_today': sum(1 for o in occurrences if o.is_due_on(today)),
            'open_work_orders': work_orders[WorkOrderStatus.OPEN],
            'in_progress_work_orders': work_orders[WorkOrderStatus.IN_PROGRESS],
            'completed_work_orders': work_orders[WorkOrderStatus.COMPLETED],
            'assets_in_maintenance': assets_in_maintenance,
            'open_problems': ProblemService.count_open(),
        }

    @staticmethod
    def get_calendar(start: date, end: date, today: date, strategy: Optional[str] = None) -> List[Occurrence]:
        """
        Occurrences with start <= date <= end, in date order.

        Past dates only show what is still outstanding; completed ones are
        suppressed like everywhere else.

        Raises:
            ValueError: end before start
        """
        if end < start:
            raise ValueError("end must not be before start")

        occurrences = MaintenanceTaskService.build_occurrences(today, strategy, until=end)
        in_window = [o for o in occurrences if start <= o.date <= end]
        return sorted(in_window, key=lambda o: (o.date, str(o.schedule_id)))
