"""
Pydantic schemas for orders
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
import uuid

from dinedash.models.order import OrderStatus, PaymentStatus
from dinedash.schemas.common import Money, ORMModel
from dinedash.schemas.table import TableResponse


class OrderItemCreate(BaseModel):
    menu_item_id: uuid.UUID
    quantity: int = Field(default=1, ge=1, le=100)
    customizations: Optional[Dict[str, Any]] = None
    notes: Optional[str] = Field(default=None, max_length=500)


class OrderCreate(BaseModel):
    """Order placed by a diner; prices come from the menu, never the caller"""
    tenant_id: uuid.UUID
    table_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = Field(default=None, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=20)
    items: List[OrderItemCreate] = Field(..., min_length=1)
    tax: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    tip: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    special_requests: Optional[str] = Field(default=None, max_length=2000)


class OrderUpdate(BaseModel):
    """Any subset of status, payment status and payment method"""
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)


class OrderItemResponse(ORMModel):
    id: uuid.UUID
    menu_item_id: Optional[uuid.UUID] = None
    name: str
    quantity: int
    price: Money
    customizations: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None


class OrderResponse(ORMModel):
    """Order with its line items and table"""
    id: uuid.UUID
    tenant_id: uuid.UUID
    order_number: str
    status: OrderStatus
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    table_id: Optional[uuid.UUID] = None
    table: Optional[TableResponse] = None
    customer_id: Optional[uuid.UUID] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    subtotal: Money
    tax: Money
    tip: Money
    total: Money
    special_requests: Optional[str] = None
    estimated_time: Optional[int] = None
    line_items: List[OrderItemResponse] = []
    created_at: datetime
    updated_at: Optional[datetime] = None


class KitchenStats(BaseModel):
    pending_count: int = 0
    preparing_count: int = 0
    ready_count: int = 0
    avg_prep_time: int = 0


class KitchenQueueResponse(BaseModel):
    orders: List[OrderResponse]
    stats: KitchenStats
