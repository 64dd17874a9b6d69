"""
Session dependencies for FastAPI

Each protected handler receives the decoded claims as an explicit argument.
Tests can override these dependencies or send a cookie minted by the codec.
"""

from typing import Optional
import uuid

from fastapi import Depends, Request, Response
import structlog

from dinedash.core.config import get_settings
from dinedash.core.errors import UnauthorizedError, ValidationFailedError
from dinedash.core.session import (
    SessionClaims,
    SessionKind,
    cookie_name,
    default_ttl,
    encode,
    read_session,
)

logger = structlog.get_logger(__name__)
settings = get_settings()


def _session_from_request(request: Request, kind: SessionKind) -> Optional[SessionClaims]:
    return read_session(request.cookies.get(cookie_name(kind)), kind)


async def get_optional_staff_session(request: Request) -> Optional[SessionClaims]:
    """Staff claims if a valid staff session is present, otherwise None"""
    return _session_from_request(request, SessionKind.STAFF)


async def get_staff_session(request: Request) -> SessionClaims:
    """Require a valid staff session"""
    claims = _session_from_request(request, SessionKind.STAFF)
    if claims is None:
        raise UnauthorizedError()
    logger.debug(f"Staff authenticated: {claims.sub}")
    return claims


async def get_admin_session(request: Request) -> SessionClaims:
    """Require a valid admin console session"""
    claims = _session_from_request(request, SessionKind.ADMIN)
    if claims is None:
        raise UnauthorizedError("Not authenticated")
    return claims


async def get_platform_session(request: Request) -> SessionClaims:
    """Require a valid platform console session"""
    claims = _session_from_request(request, SessionKind.PLATFORM)
    if claims is None:
        raise UnauthorizedError()
    return claims


def get_staff_tenant_id(claims: SessionClaims = Depends(get_staff_session)) -> uuid.UUID:
    """Tenant ID of the acting staff session"""
    return uuid.UUID(claims.tenant_id)


def resolve_tenant_id(
    claims: Optional[SessionClaims],
    tenant_id: Optional[uuid.UUID],
) -> uuid.UUID:
    """Tenant from the staff session first, then the explicit query parameter"""
    if claims is not None and claims.tenant_id:
        return uuid.UUID(claims.tenant_id)
    if tenant_id is None:
        raise ValidationFailedError("Restaurant ID required")
    return tenant_id


def set_session_cookie(response: Response, claims: SessionClaims) -> str:
    """Encode the claims and attach them as the audience's httpOnly cookie"""
    ttl = default_ttl()
    token = encode(claims, ttl)
    response.set_cookie(
        key=cookie_name(claims.kind),
        value=token,
        max_age=int(ttl.total_seconds()),
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    return token


def clear_session_cookie(response: Response, kind: SessionKind) -> None:
    response.delete_cookie(key=cookie_name(kind), path="/")
