"""
Authentication API endpoints
Staff and admin console login / verify / logout, plus password reset
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from typing import Optional
from sqlmodel import Session, select
import secrets
import uuid
import structlog

from dinedash.core.config import get_settings
from dinedash.core.database import get_session
from dinedash.core.dependencies import (
    clear_session_cookie,
    get_admin_session,
    get_staff_session,
    set_session_cookie,
)
from dinedash.core.errors import InternalError, NotFoundError, UnauthorizedError, ValidationFailedError
from dinedash.core.security import hash_password, verify_password
from dinedash.core.session import SessionClaims, SessionKind
from dinedash.core.timeutils import utcnow
from dinedash.models.platform_admin import PlatformAdmin
from dinedash.models.staff import Staff, StaffRole
from dinedash.models.tenant import Tenant
from dinedash.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    ResetPasswordRequest,
    SessionUser,
    VerifyResponse,
)
from dinedash.schemas.common import SuccessResponse
from dinedash.services import otp as otp_service

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])
settings = get_settings()

INVALID_CREDENTIALS = "Invalid credentials"
RESET_MESSAGE = "If an account exists for this email, reset instructions have been sent"


def staff_claims(staff: Staff) -> SessionClaims:
    return SessionClaims(
        sub=str(staff.id),
        kind=SessionKind.STAFF,
        role=staff.role.value,
        name=staff.name,
        email=staff.email,
        tenant_id=str(staff.tenant_id),
    )


def admin_claims(admin: PlatformAdmin, kind: SessionKind) -> SessionClaims:
    return SessionClaims(
        sub=str(admin.id),
        kind=kind,
        role=admin.role.value,
        name=admin.name,
        email=admin.email,
    )


def session_user(claims: SessionClaims, tenant: Optional[Tenant] = None) -> SessionUser:
    return SessionUser(
        id=claims.sub,
        name=claims.name,
        email=claims.email,
        role=claims.role,
        tenant_id=claims.tenant_id,
        tenant_name=tenant.name if tenant else None,
        tenant_slug=tenant.slug if tenant else None,
    )


def authenticate_platform_admin(session: Session, email: str, password: str) -> PlatformAdmin:
    """Shared by the admin and platform consoles"""
    admin = session.exec(select(PlatformAdmin).where(PlatformAdmin.email == email.lower())).first()
    if not admin or not verify_password(password, admin.password_hash) or not admin.is_active:
        logger.warning(f"Failed platform admin login for {email}")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    admin.last_login_at = utcnow()
    session.add(admin)
    session.commit()
    session.refresh(admin)
    return admin


@router.post("/staff/login", response_model=LoginResponse)
async def staff_login(
    login_data: LoginRequest,
    response: Response,
    session: Session = Depends(get_session)
):
    """Login restaurant staff"""
    try:
        staff = session.exec(select(Staff).where(Staff.email == login_data.email.lower())).first()

        if not staff or not verify_password(login_data.password, staff.password_hash) or not staff.is_active:
            logger.warning(f"Failed staff login for {login_data.email}")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        tenant = session.get(Tenant, staff.tenant_id)
        # An owner may sign in to a verified, never-onboarded restaurant to finish onboarding
        can_onboard = (
            tenant is not None
            and tenant.is_verified
            and tenant.onboarded_at is None
            and staff.role == StaffRole.OWNER
        )
        if not tenant or not (tenant.is_active or can_onboard):
            logger.warning(f"Staff login for inactive restaurant: {staff.id}")
            raise UnauthorizedError("Restaurant is not active")

        staff.last_login_at = utcnow()
        session.add(staff)
        session.commit()
        session.refresh(staff)

        claims = staff_claims(staff)
        set_session_cookie(response, claims)
        logger.info(f"Staff logged in: {staff.id}")
        return LoginResponse(user=session_user(claims, tenant))

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error logging in staff: {e}")
        raise InternalError("Failed to login")


@router.get("/staff/verify", response_model=VerifyResponse)
async def staff_verify(
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Return the identity carried by the staff session"""
    tenant = session.get(Tenant, uuid.UUID(claims.tenant_id)) if claims.tenant_id else None
    return VerifyResponse(user=session_user(claims, tenant))


@router.post("/staff/logout", response_model=SuccessResponse)
async def staff_logout(response: Response):
    clear_session_cookie(response, SessionKind.STAFF)
    return SuccessResponse(message="Logged out")


@router.post("/admin/login", response_model=LoginResponse)
async def admin_login(
    login_data: LoginRequest,
    response: Response,
    session: Session = Depends(get_session)
):
    """Login to the admin console"""
    try:
        admin = authenticate_platform_admin(session, login_data.email, login_data.password)
        claims = admin_claims(admin, SessionKind.ADMIN)
        set_session_cookie(response, claims)
        logger.info(f"Admin logged in: {admin.id}")
        return LoginResponse(user=session_user(claims))

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error logging in admin: {e}")
        raise InternalError("Failed to login")


@router.get("/admin/verify", response_model=VerifyResponse)
async def admin_verify(claims: SessionClaims = Depends(get_admin_session)):
    return VerifyResponse(user=session_user(claims))


@router.post("/admin/logout", response_model=SuccessResponse)
async def admin_logout(response: Response):
    clear_session_cookie(response, SessionKind.ADMIN)
    return SuccessResponse(message="Logged out")


@router.post("/forgot-password", response_model=SuccessResponse)
async def forgot_password(
    request_data: ForgotPasswordRequest,
    session: Session = Depends(get_session)
):
    """
    Issue a reset code or link token for a staff member or platform admin.

    The response is identical whether or not the email is known.
    """
    email = request_data.email.lower()
    try:
        staff = session.exec(select(Staff.id).where(Staff.email == email)).first()
        admin = session.exec(select(PlatformAdmin.id).where(PlatformAdmin.email == email)).first()
        if staff is None and admin is None:
            logger.info(f"Password reset requested for unknown email {email}")
            return SuccessResponse(message=RESET_MESSAGE)

        identifier = otp_service.reset_identifier(email)
        if request_data.type == "link":
            token = secrets.token_urlsafe(32)
            otp_service.issue(session, identifier, settings.RESET_LINK_TTL_MINUTES, code=token)
            link = f"{settings.PUBLIC_BASE_URL.rstrip('/')}/reset-password?email={email}&token={token}"
            logger.info(f"Password reset link for {email}: {link}")
        else:
            code = otp_service.issue(session, identifier, settings.RESET_OTP_TTL_MINUTES)
            logger.info(f"Password reset code for {email}: {code}")

        session.commit()
        return SuccessResponse(message=RESET_MESSAGE)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error issuing password reset: {e}")
        raise InternalError("Failed to process request")


@router.post("/reset-password", response_model=SuccessResponse)
async def reset_password(
    request_data: ResetPasswordRequest,
    session: Session = Depends(get_session)
):
    """Set a new password using a reset code or link token"""
    secret = request_data.code or request_data.token
    if not secret:
        raise ValidationFailedError("Code or token is required")

    email = request_data.email.lower()
    try:
        otp_service.verify(session, otp_service.reset_identifier(email), secret)

        account = session.exec(select(Staff).where(Staff.email == email)).first()
        if account is None:
            account = session.exec(select(PlatformAdmin).where(PlatformAdmin.email == email)).first()
        if account is None:
            raise NotFoundError("Account not found")

        account.password_hash = hash_password(request_data.new_password)
        account.updated_at = utcnow()
        session.add(account)
        session.commit()

        logger.info(f"Password reset for {email}")
        return SuccessResponse(message="Password has been reset")

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error resetting password: {e}")
        raise InternalError("Failed to reset password")
