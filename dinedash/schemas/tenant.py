"""
Pydantic schemas for restaurants, branding, taxes and onboarding
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Annotated, List, Literal, Optional, Union
from datetime import datetime
from decimal import Decimal
import uuid

from dinedash.core.security import MIN_PASSWORD_LENGTH
from dinedash.models.tenant import SubscriptionPlan
from dinedash.schemas.common import Money, ORMModel
from dinedash.schemas.menu import MenuSection


class BrandSettingsUpdate(BaseModel):
    logo_url: Optional[str] = Field(default=None, max_length=1000)
    favicon_url: Optional[str] = Field(default=None, max_length=1000)
    cover_image_url: Optional[str] = Field(default=None, max_length=1000)
    primary_color: Optional[str] = Field(default=None, max_length=20)
    secondary_color: Optional[str] = Field(default=None, max_length=20)
    accent_color: Optional[str] = Field(default=None, max_length=20)
    background_color: Optional[str] = Field(default=None, max_length=20)
    text_color: Optional[str] = Field(default=None, max_length=20)
    heading_font: Optional[str] = Field(default=None, max_length=100)
    body_font: Optional[str] = Field(default=None, max_length=100)
    welcome_message: Optional[str] = Field(default=None, max_length=500)
    tagline: Optional[str] = Field(default=None, max_length=255)
    gallery_images: Optional[List[str]] = None


class BrandSettingsResponse(ORMModel):
    logo_url: Optional[str] = None
    favicon_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    primary_color: str
    secondary_color: str
    accent_color: str
    background_color: str
    text_color: str
    heading_font: str
    body_font: str
    welcome_message: Optional[str] = None
    tagline: Optional[str] = None
    gallery_images: List[str] = []


class TaxSettingIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    rate: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    is_active: bool = True
    is_default: bool = False


class TaxSettingResponse(ORMModel):
    id: uuid.UUID
    name: str
    rate: Money
    is_active: bool
    is_default: bool


class RestaurantResponse(ORMModel):
    """Restaurant as exposed to staff and platform consoles"""
    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: str
    is_active: bool
    is_verified: bool
    currency: str
    currency_symbol: str
    tax_enabled: bool
    tax_inclusive: bool
    subscription_plan: SubscriptionPlan
    subscription_end: Optional[datetime] = None
    created_at: datetime


class PublicRestaurantResponse(BaseModel):
    """Restaurant as seen by diners"""
    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    currency: str
    currency_symbol: str
    tax_enabled: bool
    tax_inclusive: bool
    brand: Optional[BrandSettingsResponse] = None
    taxes: List[TaxSettingResponse] = []


class PublicMenuResponse(BaseModel):
    restaurant: PublicRestaurantResponse
    categories: List[MenuSection]


class SettingsResponse(BaseModel):
    restaurant: RestaurantResponse
    brand: Optional[BrandSettingsResponse] = None
    taxes: List[TaxSettingResponse] = []


class GeneralSettings(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    zip_code: Optional[str] = Field(default=None, max_length=20)


class BillingSettings(BaseModel):
    currency: Optional[str] = Field(default=None, max_length=10)
    currency_symbol: Optional[str] = Field(default=None, max_length=10)
    tax_enabled: Optional[bool] = None
    tax_inclusive: Optional[bool] = None
    # None keeps the current tax settings; a list replaces them
    taxes: Optional[List[TaxSettingIn]] = None


class GeneralSettingsUpdate(BaseModel):
    type: Literal["general"]
    data: GeneralSettings


class BrandingSettingsUpdate(BaseModel):
    type: Literal["branding"]
    data: BrandSettingsUpdate


class BillingSettingsUpdate(BaseModel):
    type: Literal["billing"]
    data: BillingSettings


SettingsUpdate = Annotated[
    Union[GeneralSettingsUpdate, BrandingSettingsUpdate, BillingSettingsUpdate],
    Field(discriminator="type"),
]


class RegisterRequest(BaseModel):
    """Self-service restaurant registration"""
    restaurant_name: str = Field(..., min_length=1, max_length=255)
    owner_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=50)


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    tenant_id: uuid.UUID
    slug: str
    # Only returned outside production, where no email is sent
    code: Optional[str] = None


class VerifyRegistrationRequest(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=10)


class OnboardingRequest(BaseModel):
    """Final onboarding step: branding, billing and table generation"""
    branding: Optional[BrandSettingsUpdate] = None
    description: Optional[str] = Field(default=None, max_length=2000)
    address: Optional[str] = Field(default=None, max_length=500)
    city: Optional[str] = Field(default=None, max_length=100)
    currency: Optional[str] = Field(default=None, max_length=10)
    currency_symbol: Optional[str] = Field(default=None, max_length=10)
    tax_enabled: Optional[bool] = None
    tax_inclusive: Optional[bool] = None
    taxes: List[TaxSettingIn] = Field(default_factory=list)
    table_count: int = Field(default=0, ge=0, le=500)
    table_prefix: str = Field(default="Table", min_length=1, max_length=40)


class TenantUpdate(BaseModel):
    """Platform-side tenant update"""
    is_active: Optional[bool] = None
    is_verified: Optional[bool] = None
    subscription_plan: Optional[SubscriptionPlan] = None
    subscription_end: Optional[datetime] = None


class TenantSummary(RestaurantResponse):
    order_count: int = 0
    staff_count: int = 0
    table_count: int = 0
