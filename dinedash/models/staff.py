"""
Staff model with roles and tenant scoping
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from dinedash.core.timeutils import utcnow


class StaffRole(str, Enum):
    """Staff roles for RBAC"""
    OWNER = "OWNER"
    MANAGER = "MANAGER"
    CHEF = "CHEF"
    WAITER = "WAITER"


class Staff(SQLModel, table=True):
    """Restaurant staff member; email is unique across all tenants"""

    __tablename__ = "staff"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")

    # Authentication
    email: str = Field(unique=True, index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)

    # Profile
    name: str = Field(nullable=False, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50, nullable=True)

    # RBAC
    role: StaffRole = Field(default=StaffRole.WAITER, nullable=False, index=True)

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
