"""
Problem Service
Problem report queries, reporting with optional work order creation, and
resolution.
"""

from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from cmms import db
from cmms.data.core.asset_info.asset import Asset
from cmms.data.problems.problem_button import ProblemButton
from cmms.data.problems.problem_event import ProblemEvent
from cmms.data.work_orders.work_order import WorkOrder, WorkOrderPriority, WorkOrderStatus
from cmms.logger import get_logger
from cmms.utils.date_utils import end_of_day

logger = get_logger("cmms.services.problems")

WORK_ORDER_DUE_AFTER = timedelta(days=1)


def fill_template(text: str, asset_name: Optional[str] = None, location: Optional[str] = None,
                  notes: Optional[str] = None) -> str:
    """
    Substitute [asset], [location] and [notes] in a work order template.
    Placeholders without a value are left as written.
    """
    for placeholder, value in (('[asset]', asset_name), ('[location]', location), ('[notes]', notes)):
        if value:
            text = text.replace(placeholder, value)
    return text


class ProblemService:
    """Service for problem buttons and problem events"""

    @staticmethod
    def get_buttons(active: Optional[bool] = None) -> List[ProblemButton]:
        query = ProblemButton.query
        if active is not None:
            query = query.filter(ProblemButton.active == active)
        return query.order_by(ProblemButton.label, ProblemButton.id).all()

    @staticmethod
    def get_events(
        start: Optional[date] = None,
        end: Optional[date] = None,
        resolved: Optional[bool] = None,
        button_id: Optional[int] = None
    ) -> List[ProblemEvent]:
        """Events newest first; start and end are inclusive calendar days."""
        query = ProblemEvent.query
        if start is not None:
            query = query.filter(ProblemEvent.timestamp >= datetime.combine(start, datetime.min.time()))
        if end is not None:
            query = query.filter(ProblemEvent.timestamp <= end_of_day(end))
        if resolved is not None:
            query = query.filter(ProblemEvent.resolved == resolved)
        if button_id:
            query = query.filter(ProblemEvent.button_id == button_id)
        return query.order_by(ProblemEvent.timestamp.desc(), ProblemEvent.id.desc()).all()

    @staticmethod
    def count_open() -> int:
        return ProblemEvent.query.filter(ProblemEvent.resolved.is_(False)).count()

    @staticmethod
    def report_problem(
        button: ProblemButton,
        data: Dict,
        user_id: int,
        work_order: Optional[Dict] = None,
        now: Optional[datetime] = None
    ) -> ProblemEvent:
        """
        Store a problem event, opening a work order from the button's
        template when requested.

        Args:
            button: Button the report was made with
            data: ProblemEvent column values
            user_id: Reporting user
            work_order: Work order options: create (defaults to the button's
                create_work_order), title, description, priority,
                default_asset_id, notify_maintenance
            now: Report time, defaults to utcnow

        Returns:
            The committed ProblemEvent, with work_order_id set when a work
            order was opened
        """
        now = now or datetime.utcnow()
        work_order = work_order or {}

        event = ProblemEvent.from_dict(data, user_id=user_id)
        event.button = button
        if event.timestamp is None:
            event.timestamp = now

        try:
            db.session.add(event)
            if work_order.get('create', button.create_work_order):
                opened = ProblemService._open_work_order(event, button, work_order, user_id, now)
                event.work_order = opened
            db.session.commit()
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error reporting problem for button {button.id}: {e}")
            raise

        logger.info(f"Problem {event.id} reported with button '{button.label}'")
        if event.work_order_id:
            logger.info(f"Opened work order {event.work_order_id} for problem {event.id}")
            if work_order.get('notify_maintenance') or button.notify_maintenance:
                logger.info(f"Maintenance notification requested for work order {event.work_order_id}")
        return event

    @staticmethod
    def _open_work_order(event, button, options, user_id, now) -> WorkOrder:
        asset = db.session.get(Asset, event.asset_id) if event.asset_id else None
        asset_name = asset.name if asset else None

        title = options.get('title') or button.work_order_title or f"Problem: {button.label}"
        description = options.get('description') or button.work_order_description or ''

        work_order = WorkOrder(
            title=fill_template(title, asset_name=asset_name),
            description=fill_template(description, asset_name, event.location_name, event.notes),
            priority=options.get('priority') or button.work_order_priority or WorkOrderPriority.HIGH,
            asset_id=event.asset_id or options.get('default_asset_id') or button.default_asset_id,
            assigned_to_id=button.default_assigned_to_id,
            due_date=now + WORK_ORDER_DUE_AFTER,
            reported_date=now,
            created_by_id=user_id,
            updated_by_id=user_id
        )
        work_order.set_status(WorkOrderStatus.OPEN)
        db.session.add(work_order)
        return work_order

    @staticmethod
    def resolve_event(
        event: ProblemEvent,
        user_id: int,
        solution_notes: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> ProblemEvent:
        """
        Mark a problem resolved. A linked work order that is still open or in
        progress is completed with it.
        """
        now = now or datetime.utcnow()
        event.resolve(user_id, solution_notes=solution_notes, now=now)
        event.updated_by_id = user_id

        linked = event.work_order
        if linked is not None and linked.status in (WorkOrderStatus.OPEN, WorkOrderStatus.IN_PROGRESS):
            linked.set_status(WorkOrderStatus.COMPLETED, now=now)
            linked.updated_by_id = user_id

        db.session.commit()
        logger.info(f"Problem {event.id} resolved by user {user_id}")
        return event
