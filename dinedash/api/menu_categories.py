"""
Menu categories API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlmodel import Session, select
from typing import List, Optional
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_optional_staff_session, get_staff_session, resolve_tenant_id
from dinedash.core.errors import InternalError, NotFoundError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.menu_category import MenuCategory
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.menu import CategoryCreate, CategoryResponse, CategoryUpdate

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/categories", tags=["categories"])


def _get_owned_category(session: Session, category_id: uuid.UUID, tenant_id: uuid.UUID) -> MenuCategory:
    category = session.get(MenuCategory, category_id)
    if not category or category.tenant_id != tenant_id:
        raise NotFoundError("Category not found")
    return category


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    tenant_id: Optional[uuid.UUID] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """List active categories in menu order"""
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    categories = session.exec(
        select(MenuCategory)
        .where(MenuCategory.tenant_id == target_tenant_id, MenuCategory.is_active == True)  # noqa: E712
        .order_by(MenuCategory.sort_order, MenuCategory.name)
    ).all()
    return categories


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Create a category; without sort_order it goes to the end of the menu"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    tenant_id = uuid.UUID(claims.tenant_id)

    try:
        sort_order = category_data.sort_order
        if sort_order is None:
            highest = session.exec(
                select(func.max(MenuCategory.sort_order)).where(MenuCategory.tenant_id == tenant_id)
            ).one()
            sort_order = (highest if highest is not None else -1) + 1

        category = MenuCategory(
            tenant_id=tenant_id,
            name=category_data.name,
            description=category_data.description,
            image=category_data.image,
            sort_order=sort_order,
        )
        session.add(category)
        session.commit()
        session.refresh(category)

        logger.info(f"Category created: {category.id}")
        return category

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating category: {e}")
        raise InternalError("Failed to create category")


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: uuid.UUID,
    category_data: CategoryUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Update category"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    category = _get_owned_category(session, category_id, uuid.UUID(claims.tenant_id))

    try:
        for key, value in category_data.model_dump(exclude_unset=True).items():
            setattr(category, key, value)
        category.updated_at = utcnow()
        session.add(category)
        session.commit()
        session.refresh(category)

        logger.info(f"Category updated: {category_id}")
        return category

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating category: {e}")
        raise InternalError("Failed to update category")


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Soft delete: the category is hidden from the menu"""
    ensure_permission(claims, Permission.MANAGE_MENU)
    category = _get_owned_category(session, category_id, uuid.UUID(claims.tenant_id))

    category.is_active = False
    category.updated_at = utcnow()
    session.add(category)
    session.commit()

    logger.info(f"Category deactivated: {category_id}")
    return SuccessResponse(message="Category deleted")
