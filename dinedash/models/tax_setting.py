"""
Tax setting model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from dinedash.core.timeutils import utcnow


class TaxSetting(SQLModel, table=True):
    """A named tax rate (percent) applied to invoice subtotals while active"""

    __tablename__ = "tax_settings"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True)
    name: str = Field(max_length=100)
    rate: Decimal = Field(default=Decimal("0.00"), max_digits=5, decimal_places=2, description="Percent")
    is_active: bool = Field(default=True)
    is_default: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
