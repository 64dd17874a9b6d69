"""
Table model for restaurant seating
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint
from datetime import datetime
from typing import Optional
import uuid

from dinedash.core.timeutils import utcnow


class Table(SQLModel, table=True):
    """Table model for restaurant seating; numbers are unique per tenant"""

    __tablename__ = "tables"
    __table_args__ = (UniqueConstraint("tenant_id", "number", name="uq_table_tenant_number"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")

    # Table details
    number: int = Field(nullable=False, description="Table number shown to diners")
    name: Optional[str] = Field(default=None, max_length=50, nullable=True, description="Optional label (e.g., 'Patio 2')")
    capacity: int = Field(default=4, description="Maximum number of guests")

    # QR code for guest ordering
    qr_code: Optional[str] = Field(default=None, max_length=500, nullable=True, description="URL encoded in the table's QR code")

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
