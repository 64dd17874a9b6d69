"""
Dashboard API endpoints
Invoices, statistics and restaurant settings for the staff console
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session, select
from typing import List
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_staff_session
from dinedash.core.errors import InternalError, NotFoundError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.tax_setting import TaxSetting
from dinedash.models.tenant import Tenant
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.invoice import InvoiceCreate, InvoiceResponse
from dinedash.schemas.order import OrderResponse
from dinedash.schemas.stats import DashboardStats
from dinedash.schemas.tenant import (
    BillingSettingsUpdate,
    BrandingSettingsUpdate,
    BrandSettingsResponse,
    GeneralSettingsUpdate,
    RestaurantResponse,
    SettingsResponse,
    SettingsUpdate,
    TaxSettingResponse,
)
from dinedash.services import invoicing
from dinedash.services.provisioning import apply_branding, get_or_create_brand, replace_tax_settings
from dinedash.services.stats import compute_stats

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _tenant_for(session: Session, claims: SessionClaims) -> Tenant:
    tenant = session.get(Tenant, uuid.UUID(claims.tenant_id))
    if not tenant:
        raise NotFoundError("Restaurant not found")
    return tenant


@router.get("/invoices", response_model=List[InvoiceResponse])
async def list_invoices(
    range_name: str = Query(default="today", alias="range"),
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Invoices for today / week / month / all"""
    ensure_permission(claims, Permission.VIEW_ANALYTICS, Permission.MANAGE_ORDERS)
    return invoicing.list_invoices(session, uuid.UUID(claims.tenant_id), range_name)


@router.post("/invoices", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
async def create_invoice(
    invoice_data: InvoiceCreate,
    response: Response,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Invoice an order; an existing invoice is returned with 200"""
    ensure_permission(claims, Permission.MANAGE_ORDERS, Permission.WAITER)

    try:
        invoice, created = invoicing.create_invoice(session, uuid.UUID(claims.tenant_id), invoice_data.order_id)
        if created:
            session.commit()
            session.refresh(invoice)
        else:
            response.status_code = status.HTTP_200_OK
        return invoice

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating invoice: {e}")
        raise InternalError("Failed to create invoice")


@router.get("/stats", response_model=DashboardStats)
async def get_stats(
    range_name: str = Query(default="today", alias="range"),
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Order and revenue statistics for the restaurant"""
    ensure_permission(claims, Permission.VIEW_ANALYTICS)
    stats = compute_stats(session, uuid.UUID(claims.tenant_id), range_name)
    stats["recent_orders"] = [OrderResponse.model_validate(order) for order in stats["recent_orders"]]
    return DashboardStats(**stats)


@router.get("/settings", response_model=SettingsResponse)
async def get_settings_view(
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Restaurant profile, branding and tax settings"""
    tenant = _tenant_for(session, claims)
    brand = get_or_create_brand(session, tenant.id)
    taxes = session.exec(
        select(TaxSetting).where(TaxSetting.tenant_id == tenant.id).order_by(TaxSetting.created_at)
    ).all()
    session.commit()
    return SettingsResponse(
        restaurant=RestaurantResponse.model_validate(tenant),
        brand=BrandSettingsResponse.model_validate(brand),
        taxes=[TaxSettingResponse.model_validate(tax) for tax in taxes],
    )


@router.patch("/settings", response_model=SuccessResponse)
async def update_settings(
    update: SettingsUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Update one settings section: general, branding or billing"""
    ensure_permission(claims, Permission.MANAGE_RESTAURANT)
    tenant = _tenant_for(session, claims)

    try:
        if isinstance(update, GeneralSettingsUpdate):
            for key, value in update.data.model_dump(exclude_unset=True).items():
                setattr(tenant, key, value)
        elif isinstance(update, BrandingSettingsUpdate):
            apply_branding(session, tenant.id, update.data)
        elif isinstance(update, BillingSettingsUpdate):
            changes = update.data.model_dump(exclude_unset=True, exclude={"taxes"})
            for key, value in changes.items():
                setattr(tenant, key, value)
            if update.data.taxes is not None:
                replace_tax_settings(session, tenant.id, update.data.taxes)

        tenant.updated_at = utcnow()
        session.add(tenant)
        session.commit()

        logger.info(f"Settings updated ({update.type}) for tenant {tenant.id}")
        return SuccessResponse(message="Settings updated")

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating settings: {e}")
        raise InternalError("Failed to update settings")
