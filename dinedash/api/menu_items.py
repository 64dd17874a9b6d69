"""
Menu items API endpoints
Items, their customizations, and full / partial updates
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from typing import List, Optional
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_optional_staff_session, get_staff_session, resolve_tenant_id
from dinedash.core.errors import InternalError, NotFoundError, ValidationFailedError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.customization import Customization
from dinedash.models.menu_category import MenuCategory
from dinedash.models.menu_item import MenuItem
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.menu import (
    CustomizationCreate,
    CustomizationResponse,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/menu-items", tags=["menu-items"])

ITEM_FIELDS = (
    "category_id", "name", "description", "price", "image", "is_veg",
    "is_available", "is_featured", "preparation_time", "sort_order",
)


def _check_category(session: Session, category_id: uuid.UUID, tenant_id: uuid.UUID) -> None:
    category = session.get(MenuCategory, category_id)
    if not category or category.tenant_id != tenant_id:
        raise ValidationFailedError("Category not found")


def _get_owned_item(session: Session, item_id: uuid.UUID, tenant_id: uuid.UUID) -> MenuItem:
    item = session.get(MenuItem, item_id)
    if not item or item.tenant_id != tenant_id:
        raise NotFoundError("Menu item not found")
    return item


def _customization(menu_item_id: uuid.UUID, data: CustomizationCreate) -> Customization:
    return Customization(
        menu_item_id=menu_item_id,
        name=data.name,
        options=[option.model_dump() for option in data.options],
        required=data.required,
    )


@router.get("", response_model=List[MenuItemResponse])
async def list_menu_items(
    tenant_id: Optional[uuid.UUID] = None,
    category_id: Optional[uuid.UUID] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """List menu items, optionally for one category"""
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    query = select(MenuItem).where(MenuItem.tenant_id == target_tenant_id)
    if category_id:
        query = query.where(MenuItem.category_id == category_id)

    items = session.exec(query.order_by(MenuItem.sort_order, MenuItem.name)).all()
    return [MenuItemResponse.model_validate(item) for item in items]


@router.get("/{item_id}", response_model=MenuItemResponse)
async def get_menu_item(
    item_id: uuid.UUID,
    tenant_id: Optional[uuid.UUID] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """Get menu item by ID"""
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    item = _get_owned_item(session, item_id, target_tenant_id)
    return MenuItemResponse.model_validate(item)


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
async def create_menu_item(
    item_data: MenuItemCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Create a new menu item with its customizations"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    tenant_id = uuid.UUID(claims.tenant_id)
    _check_category(session, item_data.category_id, tenant_id)

    try:
        item = MenuItem(
            tenant_id=tenant_id,
            **item_data.model_dump(include=set(ITEM_FIELDS)),
        )
        session.add(item)
        session.flush()
        for customization in item_data.customizations:
            session.add(_customization(item.id, customization))
        session.commit()
        session.refresh(item)

        logger.info(f"Menu item created: {item.id}")
        return MenuItemResponse.model_validate(item)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating menu item: {e}")
        raise InternalError("Failed to create menu item")


@router.put("/{item_id}", response_model=MenuItemResponse)
async def replace_menu_item(
    item_id: uuid.UUID,
    item_data: MenuItemCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Full update; customizations are replaced by the supplied list"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    tenant_id = uuid.UUID(claims.tenant_id)
    item = _get_owned_item(session, item_id, tenant_id)
    _check_category(session, item_data.category_id, tenant_id)

    try:
        for key, value in item_data.model_dump(include=set(ITEM_FIELDS)).items():
            setattr(item, key, value)
        item.customizations = [_customization(item.id, c) for c in item_data.customizations]
        item.updated_at = utcnow()
        session.add(item)
        session.commit()
        session.refresh(item)

        logger.info(f"Menu item replaced: {item_id}")
        return MenuItemResponse.model_validate(item)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating menu item: {e}")
        raise InternalError("Failed to update menu item")


@router.patch("/{item_id}", response_model=MenuItemResponse)
async def update_menu_item(
    item_id: uuid.UUID,
    item_data: MenuItemUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Partial update, e.g. toggling availability"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    tenant_id = uuid.UUID(claims.tenant_id)
    item = _get_owned_item(session, item_id, tenant_id)

    changes = item_data.model_dump(exclude_unset=True)
    if changes.get("category_id") is not None:
        _check_category(session, changes["category_id"], tenant_id)

    try:
        for key, value in changes.items():
            setattr(item, key, value)
        item.updated_at = utcnow()
        session.add(item)
        session.commit()
        session.refresh(item)

        logger.info(f"Menu item updated: {item_id}")
        return MenuItemResponse.model_validate(item)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating menu item: {e}")
        raise InternalError("Failed to update menu item")


@router.delete("/{item_id}", response_model=SuccessResponse)
async def delete_menu_item(
    item_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Delete menu item (hard delete; past orders keep their snapshot)"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    item = _get_owned_item(session, item_id, uuid.UUID(claims.tenant_id))

    try:
        session.delete(item)
        session.commit()

        logger.info(f"Menu item deleted: {item_id}")
        return SuccessResponse(message="Menu item deleted")

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting menu item: {e}")
        raise InternalError("Failed to delete menu item")


@router.post(
    "/{item_id}/customizations",
    response_model=CustomizationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_customization(
    item_id: uuid.UUID,
    customization_data: CustomizationCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    ensure_permission(claims, Permission.MANAGE_MENU)
    item = _get_owned_item(session, item_id, uuid.UUID(claims.tenant_id))

    customization = _customization(item.id, customization_data)
    session.add(customization)
    session.commit()
    session.refresh(customization)

    logger.info(f"Customization {customization.id} added to menu item {item_id}")
    return customization


@router.delete("/{item_id}/customizations/{customization_id}", response_model=SuccessResponse)
async def delete_customization(
    item_id: uuid.UUID,
    customization_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    ensure_permission(claims, Permission.MANAGE_MENU)
    _get_owned_item(session, item_id, uuid.UUID(claims.tenant_id))

    customization = session.get(Customization, customization_id)
    if not customization or customization.menu_item_id != item_id:
        raise NotFoundError("Customization not found")

    session.delete(customization)
    session.commit()
    logger.info(f"Customization deleted: {customization_id}")
    return SuccessResponse(message="Customization deleted")
