"""
Pydantic schemas for categories, menu items and customizations
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal
import uuid

from dinedash.schemas.common import Money, ORMModel


class CustomizationOption(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(default=0, ge=0)


class CustomizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    options: List[CustomizationOption] = Field(default_factory=list)
    required: bool = False


class CustomizationResponse(ORMModel):
    id: uuid.UUID
    menu_item_id: uuid.UUID
    name: str
    options: List[Dict[str, Any]] = []
    required: bool


class CategoryCreate(BaseModel):
    """Category creation; sort_order defaults to the end of the menu"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    image: Optional[str] = Field(default=None, max_length=1000)
    sort_order: Optional[int] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    image: Optional[str] = Field(default=None, max_length=1000)
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryResponse(ORMModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    sort_order: int
    is_active: bool
    created_at: datetime


class MenuItemCreate(BaseModel):
    """Menu item creation, also used for full (PUT) replacement"""
    category_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image: Optional[str] = Field(default=None, max_length=1000)
    is_veg: bool = True
    is_available: bool = True
    is_featured: bool = False
    preparation_time: Optional[int] = Field(default=None, ge=0)
    sort_order: int = 0
    customizations: List[CustomizationCreate] = Field(default_factory=list)


class MenuItemUpdate(BaseModel):
    """Partial menu item update"""
    category_id: Optional[uuid.UUID] = None
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image: Optional[str] = Field(default=None, max_length=1000)
    is_veg: Optional[bool] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    preparation_time: Optional[int] = Field(default=None, ge=0)
    sort_order: Optional[int] = None


class MenuItemResponse(ORMModel):
    """Menu item response model"""
    id: uuid.UUID
    tenant_id: uuid.UUID
    category_id: uuid.UUID
    name: str
    description: Optional[str] = None
    price: Money
    image: Optional[str] = None
    is_veg: bool
    is_available: bool
    is_featured: bool
    preparation_time: Optional[int] = None
    sort_order: int
    customizations: List[CustomizationResponse] = []
    created_at: datetime
    updated_at: Optional[datetime] = None


class MenuSection(CategoryResponse):
    """Category with its available items, as shown to diners"""
    items: List[MenuItemResponse] = []
