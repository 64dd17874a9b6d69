"""
Platform administrator model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid

from dinedash.core.timeutils import utcnow


class PlatformRole(str, Enum):
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


class PlatformAdmin(SQLModel, table=True):
    """Operator of the platform itself; not bound to any tenant"""

    __tablename__ = "platform_admins"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, nullable=False, max_length=255)
    password_hash: str = Field(nullable=False)
    name: str = Field(nullable=False, max_length=255)
    role: PlatformRole = Field(default=PlatformRole.ADMIN, nullable=False)
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
