"""
Tenant (restaurant) model - Multi-tenancy foundation
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from dinedash.core.timeutils import utcnow


class SubscriptionPlan(str, Enum):
    """Subscription plans offered by the platform"""
    FREE = "FREE"
    STARTER = "STARTER"
    PROFESSIONAL = "PROFESSIONAL"
    ENTERPRISE = "ENTERPRISE"


class Tenant(SQLModel, table=True):
    """Restaurant tenant; owns staff, tables, menu, orders and customers"""

    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=255)
    slug: str = Field(unique=True, index=True, max_length=255, description="URL-safe tenant identifier")
    description: Optional[str] = Field(default=None, max_length=2000)

    # Contact
    email: str = Field(index=True, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)
    country: str = Field(default="India", max_length=100)

    # Activation: verified after the registration OTP, active after onboarding
    is_active: bool = Field(default=False, index=True)
    is_verified: bool = Field(default=False, index=True)

    # Currency & tax
    currency: str = Field(default="INR", max_length=10)
    currency_symbol: str = Field(default="₹", max_length=10)
    tax_enabled: bool = Field(default=True)
    tax_inclusive: bool = Field(default=False)

    # Plan
    subscription_plan: SubscriptionPlan = Field(default=SubscriptionPlan.FREE)
    subscription_end: Optional[datetime] = None

    # Set once when onboarding completes or the platform first activates the tenant
    onboarded_at: Optional[datetime] = None

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: Optional[datetime] = None
