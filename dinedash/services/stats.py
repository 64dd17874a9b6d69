"""
Dashboard and platform statistics
"""

from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, List
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from dinedash.core.errors import ValidationFailedError
from dinedash.core.timeutils import local_midnight, range_start, utcnow
from dinedash.models.order import Order, OrderStatus
from dinedash.models.tenant import Tenant

STATS_RANGES = ("today", "week", "month", "all")
OPEN_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY)
TOP_ITEMS_LIMIT = 5
RECENT_LIMIT = 10


def _revenue(orders: List[Order]) -> Decimal:
    return sum((o.total for o in orders if o.status != OrderStatus.CANCELLED), Decimal("0"))


def top_items(orders: List[Order], limit: int = TOP_ITEMS_LIMIT) -> List[Dict[str, Any]]:
    """Best sellers by quantity across non-cancelled orders; ties sorted by name"""
    totals: Dict[str, Dict[str, Any]] = {}
    for order in orders:
        if order.status == OrderStatus.CANCELLED:
            continue
        for line in order.line_items:
            entry = totals.setdefault(line.name, {"name": line.name, "quantity": 0, "revenue": Decimal("0")})
            entry["quantity"] += line.quantity
            entry["revenue"] += line.price * line.quantity

    ranked = sorted(totals.values(), key=lambda e: (-e["quantity"], e["name"]))
    return [
        {"name": e["name"], "quantity": e["quantity"], "revenue": float(e["revenue"])}
        for e in ranked[:limit]
    ]


def compute_stats(session: Session, tenant_id: uuid.UUID, range_name: str = "today") -> Dict[str, Any]:
    """Order counts, revenue and best sellers for a reporting range"""
    if range_name not in STATS_RANGES:
        raise ValidationFailedError(f"Invalid range: {range_name}")

    query = select(Order).where(Order.tenant_id == tenant_id)
    start = range_start(range_name)
    if start is not None:
        query = query.where(Order.created_at >= start)
    orders = list(session.exec(query.order_by(Order.created_at.desc())).all())

    today_start = local_midnight()
    today_orders = list(
        session.exec(
            select(Order).where(Order.tenant_id == tenant_id, Order.created_at >= today_start)
        ).all()
    )

    total_revenue = _revenue(orders)
    total_orders = len(orders)
    return {
        "range": range_name,
        "total_orders": total_orders,
        "today_orders": len(today_orders),
        "total_revenue": float(total_revenue),
        "today_revenue": float(_revenue(today_orders)),
        "pending_orders": sum(1 for o in orders if o.status in OPEN_STATUSES),
        "completed_orders": sum(1 for o in orders if o.status == OrderStatus.COMPLETED),
        "cancelled_orders": sum(1 for o in orders if o.status == OrderStatus.CANCELLED),
        "average_order_value": round(float(total_revenue) / total_orders, 2) if total_orders else 0.0,
        "top_items": top_items(orders),
        "recent_orders": orders[:RECENT_LIMIT],
    }


def platform_stats(session: Session) -> Dict[str, Any]:
    """Platform-wide tenant and order figures"""
    total_restaurants = session.exec(select(func.count(Tenant.id))).one()
    active_restaurants = session.exec(
        select(func.count(Tenant.id)).where(Tenant.is_active == True)  # noqa: E712
    ).one()
    pending_approval = session.exec(
        select(func.count(Tenant.id)).where(
            Tenant.is_verified == True, Tenant.is_active == False  # noqa: E712
        )
    ).one()

    total_orders = session.exec(select(func.count(Order.id))).one()
    total_revenue = session.exec(
        select(func.coalesce(func.sum(Order.total), 0)).where(Order.status != OrderStatus.CANCELLED)
    ).one()

    month_ago = utcnow() - timedelta(days=30)
    older_orders = session.exec(select(func.count(Order.id)).where(Order.created_at < month_ago)).one()
    if older_orders:
        monthly_growth = round((total_orders - older_orders) / older_orders * 100)
    else:
        monthly_growth = 100 if total_orders else 0

    order_counts = dict(
        session.exec(select(Order.tenant_id, func.count(Order.id)).group_by(Order.tenant_id)).all()
    )
    recent = session.exec(select(Tenant).order_by(Tenant.created_at.desc()).limit(RECENT_LIMIT)).all()
    recent_restaurants = [
        {
            "id": str(t.id),
            "name": t.name,
            "slug": t.slug,
            "is_active": t.is_active,
            "is_verified": t.is_verified,
            "subscription_plan": t.subscription_plan.value,
            "created_at": t.created_at.isoformat(),
            "order_count": order_counts.get(t.id, 0),
        }
        for t in recent
    ]

    return {
        "total_restaurants": total_restaurants,
        "active_restaurants": active_restaurants,
        "pending_approval": pending_approval,
        "total_orders": total_orders,
        "total_revenue": float(total_revenue or 0),
        "monthly_growth": float(monthly_growth),
        "recent_restaurants": recent_restaurants,
    }
