"""
Platform console API endpoints
Platform admin auth, initial setup, admin management, tenants and stats
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import func
from sqlmodel import Session, select
from typing import Dict, List
import secrets
import structlog
import uuid

from dinedash.api.auth import admin_claims, authenticate_platform_admin, session_user
from dinedash.core.config import get_settings
from dinedash.core.database import get_session
from dinedash.core.dependencies import clear_session_cookie, get_platform_session, set_session_cookie
from dinedash.core.errors import (
    ConflictError,
    ForbiddenError,
    InternalError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from dinedash.core.security import hash_password
from dinedash.core.session import SessionClaims, SessionKind
from dinedash.core.timeutils import utcnow
from dinedash.models.order import Order
from dinedash.models.platform_admin import PlatformAdmin, PlatformRole
from dinedash.models.staff import Staff
from dinedash.models.table import Table
from dinedash.models.tenant import Tenant
from dinedash.schemas.auth import LoginRequest, LoginResponse, VerifyResponse
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.platform import (
    PlatformAdminCreate,
    PlatformAdminResponse,
    PlatformAdminUpdate,
    PlatformStatsResponse,
    SetupRequest,
    TenantDetailResponse,
    TenantListResponse,
)
from dinedash.schemas.staff import StaffResponse
from dinedash.schemas.tenant import RestaurantResponse, TenantSummary, TenantUpdate
from dinedash.services.provisioning import delete_tenant
from dinedash.services.stats import platform_stats

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/platform", tags=["platform"])
settings = get_settings()

TENANT_FILTERS = ("all", "active", "pending", "inactive")


def _require_super_admin(claims: SessionClaims) -> None:
    if claims.role != PlatformRole.SUPER_ADMIN.value:
        raise ForbiddenError()


def _count_by_tenant(session: Session, model) -> Dict[uuid.UUID, int]:
    rows = session.exec(select(model.tenant_id, func.count(model.id)).group_by(model.tenant_id)).all()
    return dict(rows)


def _summaries(session: Session, tenants: List[Tenant]) -> List[TenantSummary]:
    orders = _count_by_tenant(session, Order)
    staff = _count_by_tenant(session, Staff)
    tables = _count_by_tenant(session, Table)
    return [
        TenantSummary(
            **RestaurantResponse.model_validate(tenant).model_dump(),
            order_count=orders.get(tenant.id, 0),
            staff_count=staff.get(tenant.id, 0),
            table_count=tables.get(tenant.id, 0),
        )
        for tenant in tenants
    ]


# Auth

@router.post("/auth/login", response_model=LoginResponse)
async def platform_login(
    login_data: LoginRequest,
    response: Response,
    session: Session = Depends(get_session)
):
    try:
        admin = authenticate_platform_admin(session, login_data.email, login_data.password)
        claims = admin_claims(admin, SessionKind.PLATFORM)
        set_session_cookie(response, claims)
        logger.info(f"Platform admin logged in: {admin.id}")
        return LoginResponse(user=session_user(claims))

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error logging in platform admin: {e}")
        raise InternalError("Failed to login")


@router.get("/auth/verify", response_model=VerifyResponse)
async def platform_verify(claims: SessionClaims = Depends(get_platform_session)):
    return VerifyResponse(user=session_user(claims))


@router.post("/auth/logout", response_model=SuccessResponse)
async def platform_logout(response: Response):
    clear_session_cookie(response, SessionKind.PLATFORM)
    return SuccessResponse(message="Logged out")


@router.post("/setup", response_model=SuccessResponse)
async def setup(
    setup_data: SetupRequest,
    session: Session = Depends(get_session)
):
    """Create the first SUPER_ADMIN; only works while no platform admin exists"""
    if not settings.PLATFORM_SETUP_KEY or not secrets.compare_digest(setup_data.setup_key, settings.PLATFORM_SETUP_KEY):
        logger.warning("Platform setup attempted with an invalid key")
        raise UnauthorizedError("Invalid setup key")

    if session.exec(select(PlatformAdmin.id)).first() is not None:
        raise ConflictError("Platform admin already exists")

    try:
        admin = PlatformAdmin(
            name=setup_data.name,
            email=setup_data.email.lower(),
            password_hash=hash_password(setup_data.password),
            role=PlatformRole.SUPER_ADMIN,
        )
        session.add(admin)
        session.commit()

        logger.info(f"Platform super admin created: {admin.email}")
        return SuccessResponse(message="Platform admin created successfully")

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Platform setup error: {e}")
        raise InternalError("Setup failed")


# Admins

@router.get("/admins", response_model=List[PlatformAdminResponse])
async def list_admins(
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    return session.exec(select(PlatformAdmin).order_by(PlatformAdmin.created_at)).all()


@router.post("/admins", response_model=PlatformAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_admin(
    admin_data: PlatformAdminCreate,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    """Add a platform admin (SUPER_ADMIN only)"""
    _require_super_admin(claims)
    if admin_data.role == PlatformRole.SUPER_ADMIN:
        raise ValidationFailedError("Cannot create super admin")

    email = admin_data.email.lower()
    if session.exec(select(PlatformAdmin.id).where(PlatformAdmin.email == email)).first() is not None:
        raise ConflictError("Email already in use")

    try:
        admin = PlatformAdmin(
            name=admin_data.name,
            email=email,
            password_hash=hash_password(admin_data.password),
            role=admin_data.role,
        )
        session.add(admin)
        session.commit()
        session.refresh(admin)

        logger.info(f"Platform admin created: {admin.id}")
        return admin

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating platform admin: {e}")
        raise InternalError("Failed to create admin")


def _get_managed_admin(session: Session, admin_id: uuid.UUID) -> PlatformAdmin:
    admin = session.get(PlatformAdmin, admin_id)
    if not admin:
        raise NotFoundError("Admin not found")
    if admin.role == PlatformRole.SUPER_ADMIN:
        raise ValidationFailedError("Super admin cannot be modified or deleted")
    return admin


@router.patch("/admins/{admin_id}", response_model=PlatformAdminResponse)
async def update_admin(
    admin_id: uuid.UUID,
    admin_data: PlatformAdminUpdate,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    _require_super_admin(claims)
    admin = _get_managed_admin(session, admin_id)

    changes = admin_data.model_dump(exclude_unset=True)
    if changes.get("role") == PlatformRole.SUPER_ADMIN:
        raise ValidationFailedError("Cannot promote to super admin")

    password = changes.pop("password", None)
    if password:
        admin.password_hash = hash_password(password)
    for key, value in changes.items():
        setattr(admin, key, value)
    admin.updated_at = utcnow()
    session.add(admin)
    session.commit()
    session.refresh(admin)

    logger.info(f"Platform admin updated: {admin_id}")
    return admin


@router.delete("/admins/{admin_id}", response_model=SuccessResponse)
async def delete_admin(
    admin_id: uuid.UUID,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    _require_super_admin(claims)
    admin = _get_managed_admin(session, admin_id)

    session.delete(admin)
    session.commit()
    logger.info(f"Platform admin deleted: {admin_id}")
    return SuccessResponse(message="Admin deleted")


# Restaurants

@router.get("/restaurants", response_model=TenantListResponse)
async def list_restaurants(
    status_filter: str = Query(default="all", alias="status"),
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    """Tenants filtered by all / active / pending (verified, not active) / inactive"""
    if status_filter not in TENANT_FILTERS:
        raise ValidationFailedError(f"Invalid status: {status_filter}")

    query = select(Tenant)
    if status_filter == "active":
        query = query.where(Tenant.is_active == True)  # noqa: E712
    elif status_filter == "pending":
        query = query.where(Tenant.is_verified == True, Tenant.is_active == False)  # noqa: E712
    elif status_filter == "inactive":
        query = query.where(Tenant.is_verified == False, Tenant.is_active == False)  # noqa: E712
    tenants = session.exec(query.order_by(Tenant.created_at.desc())).all()

    all_tenants = session.exec(select(Tenant.is_active, Tenant.is_verified)).all()
    counts = {
        "all": len(all_tenants),
        "active": sum(1 for active, _ in all_tenants if active),
        "pending": sum(1 for active, verified in all_tenants if verified and not active),
        "inactive": sum(1 for active, verified in all_tenants if not verified and not active),
    }
    return TenantListResponse(restaurants=_summaries(session, list(tenants)), counts=counts)


@router.get("/restaurants/{tenant_id}", response_model=TenantDetailResponse)
async def get_restaurant(
    tenant_id: uuid.UUID,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    tenant = session.get(Tenant, tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")

    staff = session.exec(select(Staff).where(Staff.tenant_id == tenant.id).order_by(Staff.created_at)).all()
    summary = _summaries(session, [tenant])[0]
    return TenantDetailResponse(
        **summary.model_dump(),
        staff=[StaffResponse.model_validate(member) for member in staff],
    )


@router.patch("/restaurants/{tenant_id}", response_model=RestaurantResponse)
async def update_restaurant(
    tenant_id: uuid.UUID,
    tenant_data: TenantUpdate,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    """Approve, suspend or change the plan of a tenant"""
    tenant = session.get(Tenant, tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")

    for key, value in tenant_data.model_dump(exclude_unset=True).items():
        setattr(tenant, key, value)
    # Approval counts as onboarding; a later deactivation cannot be undone by the owner
    if tenant.is_active and tenant.onboarded_at is None:
        tenant.onboarded_at = utcnow()
    tenant.updated_at = utcnow()
    session.add(tenant)
    session.commit()
    session.refresh(tenant)

    logger.info(f"Tenant updated by platform admin {claims.sub}: {tenant_id}")
    return tenant


@router.delete("/restaurants/{tenant_id}", response_model=SuccessResponse)
async def delete_restaurant(
    tenant_id: uuid.UUID,
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    """Delete a tenant and all its data (SUPER_ADMIN only)"""
    _require_super_admin(claims)
    tenant = session.get(Tenant, tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")

    try:
        delete_tenant(session, tenant)
        session.commit()
        return SuccessResponse(message="Restaurant deleted")

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error deleting tenant {tenant_id}: {e}")
        raise InternalError("Failed to delete restaurant")


@router.get("/stats", response_model=PlatformStatsResponse)
async def get_platform_stats(
    claims: SessionClaims = Depends(get_platform_session),
    session: Session = Depends(get_session)
):
    return PlatformStatsResponse(**platform_stats(session))
