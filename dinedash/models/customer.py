"""
Customer model - diners identified by phone within a tenant
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from dinedash.core.timeutils import utcnow


class Customer(SQLModel, table=True):
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("tenant_id", "phone", name="uq_customer_tenant_phone"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True)
    phone: str = Field(max_length=20, nullable=False, index=True)
    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    verified: bool = Field(default=False)

    # Running totals, maintained when orders are placed
    total_orders: int = Field(default=0)
    total_spent: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    last_order_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
