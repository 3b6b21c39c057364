"""
Work Order Service
Presentation service for work order lists and counts.
"""

from typing import Dict, List, Optional

from cmms import db
from cmms.data.work_orders.work_order import WorkOrder, WorkOrderStatus


class WorkOrderService:
    """Query helpers for work orders"""

    @staticmethod
    def build_filtered_query(
        status: Optional[str] = None,
        priority: Optional[str] = None,
        asset_id: Optional[int] = None,
        assigned_to_id: Optional[int] = None,
        include_archived: bool = False
    ):
        """
        Build a filtered work order query, soonest due first.

        Archived work orders are hidden unless include_archived is set or they
        are asked for explicitly by status.
        """
        query = WorkOrder.query

        if status:
            query = query.filter(WorkOrder.status == status.upper())
        elif not include_archived:
            query = query.filter(WorkOrder.status != WorkOrderStatus.ARCHIVED)

        if priority:
            query = query.filter(WorkOrder.priority == priority.upper())

        if asset_id:
            query = query.filter(WorkOrder.asset_id == asset_id)

        if assigned_to_id:
            query = query.filter(WorkOrder.assigned_to_id == assigned_to_id)

        return query.order_by(WorkOrder.due_date, WorkOrder.id)

    @staticmethod
    def count_by_status() -> Dict[str, int]:
        """Count per status for every WorkOrderStatus, zero-filled."""
        rows = db.session.query(WorkOrder.status, db.func.count(WorkOrder.id)).group_by(WorkOrder.status).all()
        counts = {status: 0 for status in WorkOrderStatus.ALL}
        counts.update({status: count for status, count in rows})
        return counts

    @staticmethod
    def get_completed_with_dates() -> List[WorkOrder]:
        return WorkOrder.query.filter(
            WorkOrder.status == WorkOrderStatus.COMPLETED,
            WorkOrder.completed_date.isnot(None),
            WorkOrder.reported_date.isnot(None)
        ).all()
