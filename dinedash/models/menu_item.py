"""
Menu item model for menu items
"""

from sqlmodel import Field, SQLModel, Relationship
from decimal import Decimal
from datetime import datetime
from typing import Optional, List, TYPE_CHECKING
import uuid

from dinedash.core.timeutils import utcnow

if TYPE_CHECKING:
    from dinedash.models.menu_category import MenuCategory
    from dinedash.models.customization import Customization


class MenuItem(SQLModel, table=True):
    """Menu item for ordering"""

    __tablename__ = "menu_items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(
        foreign_key="tenants.id",
        index=True,
        description="Tenant ID for multi-tenant isolation"
    )
    category_id: uuid.UUID = Field(
        foreign_key="menu_categories.id",
        index=True,
        description="Category this item belongs to"
    )

    # Item details
    name: str = Field(max_length=255, nullable=False, description="Item name")
    description: Optional[str] = Field(default=None, max_length=2000, nullable=True, description="Item description")
    image: Optional[str] = Field(default=None, max_length=1000, nullable=True, description="Image URL")

    # Pricing
    price: Decimal = Field(
        max_digits=10,
        decimal_places=2,
        description="Base price of item"
    )

    # Dietary / kitchen
    is_veg: bool = Field(default=True, description="Vegetarian option")
    preparation_time: Optional[int] = Field(default=None, description="Prep time in minutes")

    # Availability and display
    is_available: bool = Field(default=True, index=True, description="Whether item is currently available")
    is_featured: bool = Field(default=False, index=True, description="Whether item is featured")
    sort_order: int = Field(default=0, description="Display order within category")

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    # Relationships
    category: Optional["MenuCategory"] = Relationship(back_populates="menu_items")
    customizations: List["Customization"] = Relationship(
        back_populates="menu_item",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"}
    )
