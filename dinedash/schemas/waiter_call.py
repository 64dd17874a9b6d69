"""
Pydantic schemas for waiter calls
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

from dinedash.models.waiter_call import WaiterCallStatus
from dinedash.schemas.common import ORMModel
from dinedash.schemas.table import TableResponse


class WaiterCallCreate(BaseModel):
    tenant_id: uuid.UUID
    table_id: uuid.UUID
    reason: Optional[str] = Field(default=None, max_length=255)


class WaiterCallUpdate(BaseModel):
    status: WaiterCallStatus


class WaiterCallResponse(ORMModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    table_id: uuid.UUID
    table: Optional[TableResponse] = None
    reason: Optional[str] = None
    status: WaiterCallStatus
    attended_by: Optional[uuid.UUID] = None
    attended_at: Optional[datetime] = None
    created_at: datetime
