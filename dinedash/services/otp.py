"""
One-time codes for phone verification, registration and password reset

A single store serves three namespaces, told apart by the identifier:
a bare phone number (diners), a bare email (registration) and
``reset:<email>`` (password reset).
"""

from datetime import timedelta
from typing import Optional
import secrets

from sqlalchemy import update
from sqlmodel import Session, select
import structlog

from dinedash.core.errors import ValidationFailedError
from dinedash.core.timeutils import utcnow
from dinedash.models.otp import OTP

logger = structlog.get_logger(__name__)

CODE_LENGTH = 6
INVALID_CODE_MESSAGE = "Invalid or expired code"


class InvalidOrExpiredCode(ValidationFailedError):
    """Raised for a wrong, expired or already used code; the cause is not revealed"""

    def __init__(self):
        super().__init__(INVALID_CODE_MESSAGE)


def reset_identifier(email: str) -> str:
    return f"reset:{email.lower()}"


def generate_code() -> str:
    """Uniform random 6-digit code (100000-999999)"""
    return str(secrets.randbelow(9 * 10 ** (CODE_LENGTH - 1)) + 10 ** (CODE_LENGTH - 1))


def issue(session: Session, identifier: str, ttl_minutes: int, code: Optional[str] = None) -> str:
    """
    Persist a new code for the identifier.

    Earlier codes for the same identifier stay valid until they expire.
    """
    code = code or generate_code()
    session.add(
        OTP(
            identifier=identifier,
            code=code,
            expires_at=utcnow() + timedelta(minutes=ttl_minutes),
        )
    )
    session.flush()
    return code


def verify(session: Session, identifier: str, code: str) -> OTP:
    """
    Consume the newest unverified, unexpired code matching identifier and code.

    The verified flag is flipped with a conditional update so concurrent
    attempts cannot both consume the same row.
    """
    if not identifier or not code:
        raise InvalidOrExpiredCode()

    otp = session.exec(
        select(OTP)
        .where(
            OTP.identifier == identifier,
            OTP.code == code,
            OTP.verified == False,  # noqa: E712
            OTP.expires_at > utcnow(),
        )
        .order_by(OTP.created_at.desc())
        .limit(1)
    ).first()
    if otp is None:
        raise InvalidOrExpiredCode()

    result = session.connection().execute(
        update(OTP)
        .where(OTP.id == otp.id, OTP.verified == False)  # noqa: E712
        .values(verified=True)
    )
    if result.rowcount != 1:
        raise InvalidOrExpiredCode()

    session.refresh(otp)
    logger.info(f"OTP verified for {identifier}")
    return otp
