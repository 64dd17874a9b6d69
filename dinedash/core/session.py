"""
Session codec shared by every audience

Staff, admin and platform sessions all use the same claims shape and the same
encode/decode logic; the audience is carried in the ``kind`` claim and selects
the cookie the token travels in.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from dinedash.core.config import get_settings

settings = get_settings()


class SessionKind(str, Enum):
    """Session audiences"""
    STAFF = "staff"
    ADMIN = "admin"
    PLATFORM = "platform"


COOKIE_NAMES = {
    SessionKind.STAFF: "staff-session",
    SessionKind.ADMIN: "admin-session",
    SessionKind.PLATFORM: "platform-session",
}


class InvalidToken(Exception):
    """Raised when a session token cannot be decoded"""


class SessionClaims(BaseModel):
    """Claims carried by a session token"""
    sub: str
    kind: SessionKind
    role: str
    name: Optional[str] = None
    email: Optional[str] = None
    tenant_id: Optional[str] = None
    exp: int = 0


def cookie_name(kind: SessionKind) -> str:
    return COOKIE_NAMES[kind]


def default_ttl() -> timedelta:
    return timedelta(hours=settings.SESSION_TTL_HOURS)


def encode(claims: SessionClaims, ttl: Optional[timedelta] = None) -> str:
    """Stamp an absolute expiry on the claims and serialise them into a cookie-safe token"""
    expire = datetime.now(timezone.utc) + (ttl if ttl is not None else default_ttl())
    payload = claims.model_dump(mode="json")
    payload["exp"] = int(expire.timestamp())
    return jwt.encode(payload, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def decode(token: str) -> SessionClaims:
    """Reverse ``encode``; expiry is checked separately by ``is_expired``"""
    if not token:
        raise InvalidToken("Empty token")
    try:
        payload = jwt.decode(
            token,
            settings.SESSION_SECRET_KEY,
            algorithms=[settings.SESSION_ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    try:
        return SessionClaims.model_validate(payload)
    except ValidationError as e:
        raise InvalidToken("Unexpected session payload") from e


def is_expired(claims: SessionClaims, now: Optional[datetime] = None) -> bool:
    current = now or datetime.now(timezone.utc)
    return current.timestamp() > claims.exp


def read_session(token: Optional[str], kind: SessionKind) -> Optional[SessionClaims]:
    """Decode a cookie value, failing closed: any problem means no session"""
    if not token:
        return None
    try:
        claims = decode(token)
    except InvalidToken:
        return None
    if is_expired(claims) or claims.kind != kind:
        return None
    return claims
