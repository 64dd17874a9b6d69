"""
Pydantic schemas for dashboard statistics
"""

from pydantic import BaseModel
from typing import List

from dinedash.schemas.order import OrderResponse


class TopItem(BaseModel):
    name: str
    quantity: int
    revenue: float


class DashboardStats(BaseModel):
    range: str
    total_orders: int
    today_orders: int
    total_revenue: float
    today_revenue: float
    pending_orders: int
    completed_orders: int
    cancelled_orders: int
    average_order_value: float
    top_items: List[TopItem]
    recent_orders: List[OrderResponse]
