"""
Restaurant onboarding API endpoints
register -> verify email code -> complete onboarding
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session
import structlog
import uuid

from dinedash.api.auth import session_user, staff_claims
from dinedash.core.config import get_settings
from dinedash.core.database import get_session
from dinedash.core.dependencies import get_staff_session, set_session_cookie
from dinedash.core.errors import InternalError, NotFoundError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.models.tenant import Tenant
from dinedash.schemas.auth import LoginResponse
from dinedash.schemas.table import TableResponse
from dinedash.schemas.tenant import OnboardingRequest, RegisterRequest, RegisterResponse, VerifyRegistrationRequest
from dinedash.services import provisioning

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/onboarding", tags=["onboarding"])
settings = get_settings()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    registration: RegisterRequest,
    session: Session = Depends(get_session)
):
    """Create the restaurant and its owner, and send an email verification code"""
    try:
        tenant, owner, code = provisioning.register(session, registration)
        session.commit()

        return RegisterResponse(
            message="Verification code sent to your email",
            tenant_id=tenant.id,
            slug=tenant.slug,
            code=None if settings.ENVIRONMENT == "production" else code,
        )

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error registering restaurant: {e}")
        raise InternalError("Registration failed")


@router.post("/verify", response_model=LoginResponse)
async def verify(
    verification: VerifyRegistrationRequest,
    response: Response,
    session: Session = Depends(get_session)
):
    """Confirm the email code; the owner is signed in to continue onboarding"""
    try:
        tenant, owner = provisioning.verify_registration(session, verification.email, verification.code)
        session.commit()
        session.refresh(owner)
        session.refresh(tenant)

        claims = staff_claims(owner)
        set_session_cookie(response, claims)
        return LoginResponse(user=session_user(claims, tenant))

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error verifying registration: {e}")
        raise InternalError("Verification failed")


@router.post("/complete")
async def complete(
    onboarding: OnboardingRequest,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Apply branding and billing, generate tables and activate the restaurant"""
    ensure_permission(claims, Permission.MANAGE_RESTAURANT)
    tenant = session.get(Tenant, uuid.UUID(claims.tenant_id))
    if not tenant:
        raise NotFoundError("Restaurant not found")

    try:
        tables = provisioning.complete_onboarding(session, tenant, onboarding)
        session.commit()

        return {
            "success": True,
            "slug": tenant.slug,
            "tables": [TableResponse.model_validate(table) for table in tables],
        }

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error completing onboarding: {e}")
        raise InternalError("Failed to complete onboarding")
