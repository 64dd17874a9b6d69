"""
Kitchen display queue
"""

from typing import Dict, List, Tuple
import uuid

from sqlmodel import Session, select

from dinedash.core.timeutils import local_midnight
from dinedash.models.order import KITCHEN_STATUSES, Order, OrderStatus


def _average_prep_minutes(orders: List[Order]) -> int:
    """Mean of whole minutes between placement and last update"""
    durations = [
        int((order.updated_at - order.created_at).total_seconds() // 60)
        for order in orders
        if order.updated_at is not None
    ]
    if not durations:
        return 0
    return round(sum(durations) / len(durations))


def kitchen_queue(session: Session, tenant_id: uuid.UUID) -> Tuple[List[Order], Dict[str, int]]:
    """
    Orders the kitchen still has to handle, oldest first, plus queue counters.

    The average preparation time only considers orders placed and completed
    today (business timezone).
    """
    orders = list(
        session.exec(
            select(Order)
            .where(Order.tenant_id == tenant_id, Order.status.in_(KITCHEN_STATUSES))
            .order_by(Order.created_at.asc(), Order.order_number.asc())
        ).all()
    )

    completed_today = session.exec(
        select(Order).where(
            Order.tenant_id == tenant_id,
            Order.status == OrderStatus.COMPLETED,
            Order.created_at >= local_midnight(),
        )
    ).all()

    stats = {
        "pending_count": sum(1 for o in orders if o.status in (OrderStatus.PENDING, OrderStatus.CONFIRMED)),
        "preparing_count": sum(1 for o in orders if o.status == OrderStatus.PREPARING),
        "ready_count": sum(1 for o in orders if o.status == OrderStatus.READY),
        "avg_prep_time": _average_prep_minutes(list(completed_today)),
    }
    return orders, stats
