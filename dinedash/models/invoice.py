"""
Invoice model and per-day invoice number sequence
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import Column, JSON, UniqueConstraint
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import uuid

from dinedash.core.timeutils import utcnow
from dinedash.models.order import PaymentStatus

if TYPE_CHECKING:
    from dinedash.models.order import Order


class Invoice(SQLModel, table=True):
    """Bill for a single order; at most one invoice per order"""

    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint("tenant_id", "invoice_number", name="uq_invoice_tenant_number"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True)
    order_id: uuid.UUID = Field(foreign_key="orders.id", unique=True, index=True)
    invoice_number: str = Field(max_length=30, index=True, description="INV-YYYYMMDD-NNNN")

    customer_name: Optional[str] = Field(default=None, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    customer_email: Optional[str] = Field(default=None, max_length=255)

    subtotal: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    # [{"name": "GST", "rate": 5.0, "amount": 12.5}, ...]
    tax_breakdown: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    total_tax: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    discount: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    tip: Decimal = Field(default=Decimal("0.00"), max_digits=10, decimal_places=2)
    grand_total: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)

    payment_method: Optional[str] = Field(default=None, max_length=50)
    payment_status: PaymentStatus = Field(default=PaymentStatus.PENDING)
    paid_at: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: Optional[datetime] = None

    order: Optional["Order"] = Relationship()


class InvoiceSequence(SQLModel, table=True):
    """Last invoice number issued for a tenant on a business day"""

    __tablename__ = "invoice_sequences"

    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", primary_key=True)
    day: str = Field(primary_key=True, max_length=8, description="YYYYMMDD in the business timezone")
    last_value: int = Field(default=0)
