"""
Menu category model for organizing menu items
"""

from sqlmodel import Field, SQLModel, Relationship
from datetime import datetime
from typing import Optional, List, TYPE_CHECKING
import uuid

from dinedash.core.timeutils import utcnow

if TYPE_CHECKING:
    from dinedash.models.menu_item import MenuItem


class MenuCategory(SQLModel, table=True):
    """Menu category for organizing menu items"""

    __tablename__ = "menu_categories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")

    name: str = Field(max_length=255, nullable=False)
    description: Optional[str] = Field(default=None, max_length=1000)
    image: Optional[str] = Field(default=None, max_length=1000)

    sort_order: int = Field(default=0, index=True, description="Display order on the menu")
    is_active: bool = Field(default=True, index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    menu_items: List["MenuItem"] = Relationship(back_populates="category")
