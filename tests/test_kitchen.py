"""
Tests for the kitchen display queue
"""

from datetime import timedelta
from decimal import Decimal

from dinedash.core.timeutils import utcnow
from dinedash.models.order import Order, OrderStatus
from dinedash.services.kitchen import kitchen_queue


def add_order(db, tenant, number, status, created_at, updated_at=None):
    order = Order(
        tenant_id=tenant.id,
        order_number=number,
        status=status,
        subtotal=Decimal("10.00"),
        total=Decimal("10.00"),
        created_at=created_at,
        updated_at=updated_at or created_at,
    )
    db.add(order)
    db.commit()
    return order


def test_queue_is_oldest_first(db, tenant):
    now = utcnow()
    add_order(db, tenant, "ORD-00000003", OrderStatus.READY, now - timedelta(minutes=1))
    add_order(db, tenant, "ORD-00000001", OrderStatus.CONFIRMED, now - timedelta(minutes=10))
    add_order(db, tenant, "ORD-00000002", OrderStatus.PREPARING, now - timedelta(minutes=5))

    orders, _ = kitchen_queue(db, tenant.id)

    assert [o.order_number for o in orders] == ["ORD-00000001", "ORD-00000002", "ORD-00000003"]


def test_queue_excludes_finished_orders_and_other_tenants(db, tenant, other_tenant):
    now = utcnow()
    add_order(db, tenant, "ORD-OPEN0001", OrderStatus.PENDING, now)
    add_order(db, tenant, "ORD-SERVED01", OrderStatus.SERVED, now)
    add_order(db, tenant, "ORD-DONE0001", OrderStatus.COMPLETED, now)
    add_order(db, tenant, "ORD-VOID0001", OrderStatus.CANCELLED, now)
    add_order(db, other_tenant, "ORD-ELSE0001", OrderStatus.PENDING, now)

    orders, stats = kitchen_queue(db, tenant.id)

    assert [o.order_number for o in orders] == ["ORD-OPEN0001"]
    assert stats["pending_count"] == 1
    assert stats["preparing_count"] == 0
    assert stats["ready_count"] == 0


def test_average_prep_time_uses_todays_completed_orders(db, tenant):
    now = utcnow()
    add_order(db, tenant, "ORD-DONE0001", OrderStatus.COMPLETED, now - timedelta(seconds=5), now + timedelta(minutes=10))
    add_order(db, tenant, "ORD-DONE0002", OrderStatus.COMPLETED, now - timedelta(seconds=5), now + timedelta(minutes=20))
    # Yesterday's order does not count
    add_order(
        db, tenant, "ORD-OLD00001", OrderStatus.COMPLETED,
        now - timedelta(days=2), now - timedelta(days=2) + timedelta(minutes=90),
    )

    _, stats = kitchen_queue(db, tenant.id)

    assert stats["avg_prep_time"] == 15


def test_average_prep_time_without_completed_orders(db, tenant):
    _, stats = kitchen_queue(db, tenant.id)

    assert stats["avg_prep_time"] == 0


def test_kitchen_endpoint(client, login_as, chef, place_order):
    first = place_order()
    place_order()
    login_as(chef)
    client.patch(f"/api/orders/{first['id']}", json={"status": "PREPARING"})

    response = client.get("/api/kitchen/orders")

    assert response.status_code == 200
    body = response.json()
    assert len(body["orders"]) == 2
    assert body["stats"]["pending_count"] == 1
    assert body["stats"]["preparing_count"] == 1


def test_kitchen_endpoint_requires_session(client):
    assert client.get("/api/kitchen/orders").status_code == 401
