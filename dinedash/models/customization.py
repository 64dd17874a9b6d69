"""
Customization model - option groups attached to a menu item
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import Any, Dict, List, Optional, TYPE_CHECKING
import uuid

from dinedash.core.timeutils import utcnow

if TYPE_CHECKING:
    from dinedash.models.menu_item import MenuItem


class Customization(SQLModel, table=True):
    """Named option group, e.g. "Spice level" with its priced options"""

    __tablename__ = "customizations"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    menu_item_id: uuid.UUID = Field(foreign_key="menu_items.id", index=True)
    name: str = Field(max_length=255, nullable=False)
    # [{"name": "Extra cheese", "price": 30}, ...]
    options: List[Dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSON))
    required: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    menu_item: Optional["MenuItem"] = Relationship(back_populates="customizations")
