"""
Order lifecycle: creation, lookup, listing and status transitions
"""

from decimal import Decimal
from typing import Iterable, List, Optional
import secrets
import uuid

from sqlmodel import Session, select
import structlog

from dinedash.core.errors import ForbiddenError, InternalError, NotFoundError, ValidationFailedError
from dinedash.core.timeutils import utcnow
from dinedash.models.customer import Customer
from dinedash.models.menu_item import MenuItem
from dinedash.models.order import Order, OrderStatus, PaymentStatus
from dinedash.models.order_line_item import OrderLineItem
from dinedash.models.table import Table
from dinedash.models.tenant import Tenant
from dinedash.schemas.order import OrderCreate, OrderUpdate

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")
ORDER_NUMBER_ATTEMPTS = 10

BASE_PREP_MINUTES = 15
PREP_MINUTES_PER_EXTRA_LINE = 5
MAX_PREP_MINUTES = 60


def generate_order_number() -> str:
    """Human-shareable order number, e.g. ORD-4F2A9C1B"""
    return f"ORD-{secrets.token_hex(4).upper()}"


def estimate_prep_time(line_count: int) -> int:
    """Minutes until ready: 15 for the first line, 5 per extra line, at most 60"""
    extra = max(line_count - 1, 0)
    return min(BASE_PREP_MINUTES + PREP_MINUTES_PER_EXTRA_LINE * extra, MAX_PREP_MINUTES)


def _allocate_order_number(session: Session, tenant_id: uuid.UUID) -> str:
    for _ in range(ORDER_NUMBER_ATTEMPTS):
        candidate = generate_order_number()
        taken = session.exec(
            select(Order.id).where(Order.tenant_id == tenant_id, Order.order_number == candidate)
        ).first()
        if taken is None:
            return candidate
    raise InternalError("Could not allocate an order number")


def _upsert_customer(
    session: Session,
    tenant_id: uuid.UUID,
    phone: str,
    name: Optional[str],
    order_total: Decimal,
) -> Customer:
    customer = session.exec(
        select(Customer).where(Customer.tenant_id == tenant_id, Customer.phone == phone)
    ).first()
    now = utcnow()
    if customer is None:
        customer = Customer(tenant_id=tenant_id, phone=phone, name=name)
    elif name:
        customer.name = name
        customer.updated_at = now

    customer.total_orders = (customer.total_orders or 0) + 1
    customer.total_spent = (customer.total_spent or Decimal("0")) + order_total
    customer.last_order_at = now
    session.add(customer)
    return customer


def create_order(session: Session, data: OrderCreate) -> Order:
    """
    Place an order for a diner.

    Unit prices are copied from the menu so later price changes never touch
    historical orders. The order starts CONFIRMED with payment PENDING.
    """
    tenant = session.get(Tenant, data.tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")
    if not tenant.is_active:
        raise ForbiddenError("Restaurant is not accepting orders")

    if data.table_id is not None:
        table = session.get(Table, data.table_id)
        if not table or table.tenant_id != tenant.id or not table.is_active:
            raise NotFoundError("Table not found")

    menu_item_ids = {line.menu_item_id for line in data.items}
    menu_items = {
        item.id: item
        for item in session.exec(select(MenuItem).where(MenuItem.id.in_(menu_item_ids))).all()
    }

    order = Order(
        tenant_id=tenant.id,
        order_number=_allocate_order_number(session, tenant.id),
        table_id=data.table_id,
        customer_name=data.customer_name,
        customer_phone=data.customer_phone,
        special_requests=data.special_requests,
        status=OrderStatus.CONFIRMED,
        payment_status=PaymentStatus.PENDING,
        estimated_time=estimate_prep_time(len(data.items)),
        tax=data.tax.quantize(CENTS),
        tip=data.tip.quantize(CENTS),
    )

    subtotal = Decimal("0")
    for line in data.items:
        menu_item = menu_items.get(line.menu_item_id)
        if menu_item is None or menu_item.tenant_id != tenant.id:
            raise NotFoundError(f"Menu item not found: {line.menu_item_id}")
        if not menu_item.is_available:
            raise ValidationFailedError(f"{menu_item.name} is not available")

        subtotal += menu_item.price * line.quantity
        order.line_items.append(
            OrderLineItem(
                menu_item_id=menu_item.id,
                name=menu_item.name,
                quantity=line.quantity,
                price=menu_item.price,
                customizations=line.customizations,
                notes=line.notes,
            )
        )

    order.subtotal = subtotal.quantize(CENTS)
    order.calculate_total()
    order.updated_at = order.created_at

    if data.customer_phone:
        customer = _upsert_customer(
            session, tenant.id, data.customer_phone, data.customer_name, order.total
        )
        session.flush()
        order.customer_id = customer.id

    session.add(order)
    session.flush()
    logger.info(f"Order created: {order.order_number} ({order.id}) for tenant {tenant.id}")
    return order


def find_order(session: Session, id_or_number: str, tenant_id: Optional[uuid.UUID] = None) -> Optional[Order]:
    """Look up by primary id first, then by order number"""
    order = None
    try:
        order_id = uuid.UUID(id_or_number)
    except ValueError:
        order_id = None

    if order_id is not None:
        order = session.get(Order, order_id)
        if order is not None and tenant_id is not None and order.tenant_id != tenant_id:
            order = None

    if order is None:
        query = select(Order).where(Order.order_number == id_or_number)
        if tenant_id is not None:
            query = query.where(Order.tenant_id == tenant_id)
        order = session.exec(query.order_by(Order.created_at.desc())).first()

    return order


def update_order(session: Session, order: Order, data: OrderUpdate) -> Order:
    """Apply a status / payment change after checking both transition tables"""
    if data.status is None and data.payment_status is None and data.payment_method is None:
        raise ValidationFailedError("Nothing to update")

    if data.status is not None:
        allowed, reason = order.can_transition_to(data.status)
        if not allowed:
            raise ValidationFailedError(reason)
    if data.payment_status is not None:
        allowed, reason = order.can_transition_payment_to(data.payment_status)
        if not allowed:
            raise ValidationFailedError(reason)

    if data.status is not None:
        order.status = data.status
    if data.payment_status is not None:
        order.payment_status = data.payment_status
    if data.payment_method is not None:
        order.payment_method = data.payment_method

    order.updated_at = utcnow()
    session.add(order)
    session.flush()
    logger.info(f"Order updated: {order.order_number} status={order.status.value} payment={order.payment_status.value}")
    return order


def parse_statuses(raw: Optional[str]) -> Optional[List[OrderStatus]]:
    """Parse a comma-separated status filter such as "PENDING,READY" """
    if not raw:
        return None
    statuses = []
    for value in raw.split(","):
        value = value.strip().upper()
        if not value:
            continue
        try:
            statuses.append(OrderStatus(value))
        except ValueError:
            raise ValidationFailedError(f"Invalid status: {value}")
    return statuses or None


def list_orders(
    session: Session,
    tenant_id: uuid.UUID,
    statuses: Optional[Iterable[OrderStatus]] = None,
    phone: Optional[str] = None,
) -> List[Order]:
    """Orders of a tenant, newest first"""
    query = select(Order).where(Order.tenant_id == tenant_id)
    if statuses:
        query = query.where(Order.status.in_(list(statuses)))
    if phone:
        query = query.where(Order.customer_phone == phone)
    return list(session.exec(query.order_by(Order.created_at.desc())).all())
