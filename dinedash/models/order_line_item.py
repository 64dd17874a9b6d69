"""
Order line item model - snapshot of a menu item at ordering time
"""

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import Column, JSON
from decimal import Decimal
from typing import Any, Dict, Optional, TYPE_CHECKING
import uuid

if TYPE_CHECKING:
    from dinedash.models.order import Order


class OrderLineItem(SQLModel, table=True):
    """Line item on an order; name and price are copied from the menu item"""

    __tablename__ = "order_line_items"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    order_id: uuid.UUID = Field(foreign_key="orders.id", index=True)
    menu_item_id: Optional[uuid.UUID] = Field(
        default=None,
        foreign_key="menu_items.id",
        ondelete="SET NULL",
        nullable=True,
        index=True,
    )

    name: str = Field(max_length=255, nullable=False)
    quantity: int = Field(default=1, ge=1)
    price: Decimal = Field(max_digits=10, decimal_places=2, description="Unit price at ordering time")
    customizations: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))
    notes: Optional[str] = Field(default=None, max_length=500)

    order: Optional["Order"] = Relationship(back_populates="line_items")

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
