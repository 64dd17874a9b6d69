"""
Pydantic schemas for tables
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

from dinedash.schemas.common import ORMModel


class TableCreate(BaseModel):
    """Table creation; number defaults to one past the current highest"""
    number: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, max_length=50)
    capacity: int = Field(default=4, ge=1)


class TableUpdate(BaseModel):
    number: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, max_length=50)
    capacity: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class TableResponse(ORMModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    number: int
    name: Optional[str] = None
    capacity: int
    qr_code: Optional[str] = None
    is_active: bool
    created_at: datetime
