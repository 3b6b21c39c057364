"""
Maintenance Analytics Service
Aggregates for the analytics page.
"""

from collections import Counter
from datetime import date, datetime
from typing import Dict, List, Optional

from dateutil.relativedelta import relativedelta

from cmms.data.core.asset_info.asset import AssetStatus
from cmms.data.maintenance.maintenance_completions import MaintenanceCompletion
from cmms.services.core.asset_service import AssetService
from cmms.services.work_orders.work_order_service import WorkOrderService
from cmms.utils.date_utils import month_starts


class MaintenanceAnalyticsService:

    @staticmethod
    def get_monthly_completions(today: date, months: int = 6) -> List[Dict]:
        """
        Completions per calendar month, oldest first, ending with the current month.

        Returns:
            [{'month': 'YYYY-MM', 'completions': n}, ...]
        """
        starts = month_starts(today, months)
        window_start = datetime.combine(starts[0], datetime.min.time())
        window_end = datetime.combine(starts[-1] + relativedelta(months=1), datetime.min.time())

        rows = MaintenanceCompletion.query.filter(
            MaintenanceCompletion.completed_date >= window_start,
            MaintenanceCompletion.completed_date < window_end
        ).all()

        per_month = Counter(row.completed_date.strftime('%Y-%m') for row in rows)
        return [
            {'month': start.strftime('%Y-%m'), 'completions': per_month.get(start.strftime('%Y-%m'), 0)}
            for start in starts
        ]

    @staticmethod
    def get_average_completion_days() -> Optional[float]:
        """Mean days from reported to completed over completed work orders, None when there are none."""
        work_orders = WorkOrderService.get_completed_with_dates()
        if not work_orders:
            return None
        total = sum((wo.completed_date - wo.reported_date).total_seconds() for wo in work_orders)
        return round(total / len(work_orders) / 86400, 1)

    @staticmethod
    def get_report(today: date, months: int = 6) -> Dict:
        """
        Full analytics payload.

        Args:
            today: Reference date for the monthly window
            months: Number of months in the completion trend

        Raises:
            ValueError: months < 1
        """
        if months < 1:
            raise ValueError("months must be at least 1")

        asset_counts = {status: 0 for status in AssetStatus.ALL}
        asset_counts.update(AssetService.count_by_status())

        return {
            'as_of': today.isoformat(),
            'monthly_completions': MaintenanceAnalyticsService.get_monthly_completions(today, months),
            'work_order_status': WorkOrderService.count_by_status(),
            'asset_status': asset_counts,
            'average_completion_days': MaintenanceAnalyticsService.get_average_completion_days(),
        }
