"""
Pydantic schemas for the platform console
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Any, Dict, List, Optional
from datetime import datetime
import uuid

from dinedash.core.security import MIN_PASSWORD_LENGTH
from dinedash.models.platform_admin import PlatformRole
from dinedash.schemas.common import ORMModel
from dinedash.schemas.staff import StaffResponse
from dinedash.schemas.tenant import TenantSummary


class SetupRequest(BaseModel):
    setup_key: str
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=100)


class PlatformAdminCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=100)
    role: PlatformRole = PlatformRole.ADMIN


class PlatformAdminUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    password: Optional[str] = Field(default=None, min_length=MIN_PASSWORD_LENGTH, max_length=100)
    role: Optional[PlatformRole] = None
    is_active: Optional[bool] = None


class PlatformAdminResponse(ORMModel):
    id: uuid.UUID
    name: str
    email: str
    role: PlatformRole
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None


class TenantListResponse(BaseModel):
    restaurants: List[TenantSummary]
    counts: Dict[str, int]


class TenantDetailResponse(TenantSummary):
    staff: List[StaffResponse] = []


class PlatformStatsResponse(BaseModel):
    total_restaurants: int
    active_restaurants: int
    pending_approval: int
    total_orders: int
    total_revenue: float
    monthly_growth: float
    recent_restaurants: List[Dict[str, Any]]
