"""
Order model for diner orders
Status and payment status move only along their allow-listed transitions
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional, TYPE_CHECKING, List
from decimal import Decimal
from enum import Enum
import uuid

from dinedash.core.timeutils import utcnow

if TYPE_CHECKING:
    from dinedash.models.order_line_item import OrderLineItem
    from dinedash.models.table import Table


class OrderStatus(str, Enum):
    """Lifecycle of an order"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"        # Accepted, waiting for the kitchen
    PREPARING = "PREPARING"        # Kitchen is cooking
    READY = "READY"                # Waiting to be served
    SERVED = "SERVED"
    COMPLETED = "COMPLETED"        # Final
    CANCELLED = "CANCELLED"        # Final


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.SERVED, OrderStatus.CANCELLED},
    OrderStatus.SERVED: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED},
    PaymentStatus.FAILED: {PaymentStatus.PAID, PaymentStatus.PENDING},
    PaymentStatus.PAID: {PaymentStatus.REFUNDED},
    PaymentStatus.REFUNDED: set(),
}

# Statuses shown on the kitchen display
KITCHEN_STATUSES = (OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PREPARING, OrderStatus.READY)


class Order(SQLModel, table=True):
    """Order placed by a diner at a table"""

    __tablename__ = "orders"
    __table_args__ = (UniqueConstraint("tenant_id", "order_number", name="uq_order_tenant_number"),)

    # Primary key
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id",
        index=True,
        description="Tenant ID for multi-tenant isolation"
    )
    order_number: str = Field(max_length=20, index=True, description="Human-facing number, e.g. ORD-4F2A9C1B")

    # Linkage
    table_id: Optional[uuid.UUID] = Field(default=None, foreign_key="tables.id", index=True)
    customer_id: Optional[uuid.UUID] = Field(default=None, foreign_key="customers.id", index=True)
    customer_name: Optional[str] = Field(default=None, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    served_by: Optional[uuid.UUID] = Field(default=None, description="Staff member who served the order")

    # Status
    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        index=True,
        description="Current status of the order"
    )
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING, index=True)
    payment_method: Optional[str] = Field(default=None, max_length=50)

    # Amounts
    subtotal: Decimal = Field(
        default=Decimal("0.00"),
        max_digits=10,
        decimal_places=2,
        description="Sum of line quantity x unit price"
    )
    tax: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    tip: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    total: Decimal = Field(
        default=Decimal("0.00"),
        max_digits=12,
        decimal_places=2,
        description="subtotal + tax"
    )

    # Service information
    special_requests: Optional[str] = Field(default=None, max_length=2000, nullable=True)
    estimated_time: Optional[int] = Field(default=None, description="Minutes until ready")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: Optional[datetime] = Field(default=None, nullable=True)

    # Relationships
    table: Optional["Table"] = Relationship()
    line_items: List["OrderLineItem"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )

    # State machine methods
    def can_transition_to(self, new_status: OrderStatus) -> tuple[bool, str]:
        """Check if order can transition to new status"""
        if new_status == self.status:
            return True, "No change"
        if new_status in ORDER_TRANSITIONS.get(self.status, set()):
            return True, "Can transition"
        return False, f"Cannot transition from {self.status.value} to {new_status.value}"

    def can_transition_payment_to(self, new_status: PaymentStatus) -> tuple[bool, str]:
        """Check if payment status can move to new status"""
        if new_status == self.payment_status:
            return True, "No change"
        if new_status in PAYMENT_TRANSITIONS.get(self.payment_status, set()):
            return True, "Can transition"
        return False, f"Cannot change payment from {self.payment_status.value} to {new_status.value}"

    def is_final(self) -> bool:
        return self.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)

    def calculate_total(self) -> None:
        """Calculate total amount (subtotal + tax); the tip is only added on the invoice"""
        self.total = self.subtotal + self.tax
