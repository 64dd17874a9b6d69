"""
Waiter call model - diner requests for assistance at a table
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from enum import Enum
import uuid

from dinedash.core.timeutils import utcnow

if TYPE_CHECKING:
    from dinedash.models.table import Table


class WaiterCallStatus(str, Enum):
    PENDING = "PENDING"
    ATTENDED = "ATTENDED"
    COMPLETED = "COMPLETED"


class WaiterCall(SQLModel, table=True):
    __tablename__ = "waiter_calls"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True)
    table_id: uuid.UUID = Field(foreign_key="tables.id", index=True)
    reason: Optional[str] = Field(default=None, max_length=255)
    status: WaiterCallStatus = Field(default=WaiterCallStatus.PENDING, index=True)

    attended_by: Optional[uuid.UUID] = Field(default=None, description="Staff member who attended")
    attended_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=utcnow, index=True)
    updated_at: Optional[datetime] = None

    table: Optional["Table"] = Relationship()
