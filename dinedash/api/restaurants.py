"""
Public restaurant API endpoints
Slug lookup and the diner-facing menu
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
import structlog

from dinedash.core.database import get_session
from dinedash.core.errors import ForbiddenError, NotFoundError
from dinedash.models.brand_settings import BrandSettings
from dinedash.models.menu_category import MenuCategory
from dinedash.models.menu_item import MenuItem
from dinedash.models.tax_setting import TaxSetting
from dinedash.models.tenant import Tenant
from dinedash.schemas.menu import CategoryResponse, MenuItemResponse, MenuSection
from dinedash.schemas.tenant import (
    BrandSettingsResponse,
    PublicMenuResponse,
    PublicRestaurantResponse,
    TaxSettingResponse,
)
from dinedash.services.provisioning import find_tenant_by_slug

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/restaurants", tags=["restaurants"])


def _active_tenant(session: Session, slug: str) -> Tenant:
    tenant = find_tenant_by_slug(session, slug)
    if not tenant:
        raise NotFoundError("Restaurant not found")
    if not tenant.is_active:
        raise ForbiddenError("Restaurant is not active")
    return tenant


def _public_restaurant(session: Session, tenant: Tenant) -> PublicRestaurantResponse:
    brand = session.exec(select(BrandSettings).where(BrandSettings.tenant_id == tenant.id)).first()
    taxes = session.exec(
        select(TaxSetting)
        .where(TaxSetting.tenant_id == tenant.id, TaxSetting.is_active == True)  # noqa: E712
        .order_by(TaxSetting.created_at)
    ).all()
    return PublicRestaurantResponse(
        id=tenant.id,
        name=tenant.name,
        slug=tenant.slug,
        description=tenant.description,
        phone=tenant.phone,
        address=tenant.address,
        city=tenant.city,
        currency=tenant.currency,
        currency_symbol=tenant.currency_symbol,
        tax_enabled=tenant.tax_enabled,
        tax_inclusive=tenant.tax_inclusive,
        brand=BrandSettingsResponse.model_validate(brand) if brand else None,
        taxes=[TaxSettingResponse.model_validate(tax) for tax in taxes],
    )


@router.get("/{slug}", response_model=PublicRestaurantResponse)
async def get_restaurant(slug: str, session: Session = Depends(get_session)):
    """Resolve a restaurant by slug; inactive restaurants are refused"""
    tenant = _active_tenant(session, slug)
    return _public_restaurant(session, tenant)


@router.get("/{slug}/menu", response_model=PublicMenuResponse)
async def get_menu(slug: str, session: Session = Depends(get_session)):
    """Active categories with their available items, both in display order"""
    tenant = _active_tenant(session, slug)

    categories = session.exec(
        select(MenuCategory)
        .where(MenuCategory.tenant_id == tenant.id, MenuCategory.is_active == True)  # noqa: E712
        .order_by(MenuCategory.sort_order, MenuCategory.name)
    ).all()
    items = session.exec(
        select(MenuItem)
        .where(MenuItem.tenant_id == tenant.id, MenuItem.is_available == True)  # noqa: E712
        .options(selectinload(MenuItem.customizations))
        .order_by(MenuItem.sort_order, MenuItem.name)
    ).all()

    by_category = {}
    for item in items:
        by_category.setdefault(item.category_id, []).append(MenuItemResponse.model_validate(item))

    sections = [
        MenuSection(
            **CategoryResponse.model_validate(category).model_dump(),
            items=by_category.get(category.id, []),
        )
        for category in categories
    ]
    return PublicMenuResponse(restaurant=_public_restaurant(session, tenant), categories=sections)
