"""
Pydantic schemas for staff members
"""

from pydantic import Field, EmailStr, BaseModel
from typing import Optional
from datetime import datetime
import uuid

from dinedash.core.security import MIN_PASSWORD_LENGTH
from dinedash.models.staff import StaffRole
from dinedash.schemas.common import ORMModel


class StaffCreate(BaseModel):
    """Staff creation schema"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    role: StaffRole = Field(default=StaffRole.WAITER)


class StaffUpdate(BaseModel):
    """Partial staff update; password is re-hashed when supplied"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=MIN_PASSWORD_LENGTH, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)
    role: Optional[StaffRole] = None
    is_active: Optional[bool] = None


class StaffResponse(ORMModel):
    """Staff response model"""
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    role: StaffRole
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None
