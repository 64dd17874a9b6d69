"""
Unit tests for the session codec
"""

import pytest
from datetime import datetime, timedelta, timezone
import uuid

from jose import jwt

from dinedash.core.session import (
    InvalidToken,
    SessionClaims,
    SessionKind,
    cookie_name,
    decode,
    encode,
    is_expired,
    read_session,
)


def make_claims(kind: SessionKind = SessionKind.STAFF, role: str = "WAITER") -> SessionClaims:
    return SessionClaims(
        sub=str(uuid.uuid4()),
        kind=kind,
        role=role,
        name="Sam",
        email="sam@bistro.com",
        tenant_id=str(uuid.uuid4()) if kind == SessionKind.STAFF else None,
    )


def test_encode_decode_preserves_claims():
    """Test that decode reverses encode"""
    claims = make_claims()

    token = encode(claims, timedelta(hours=1))
    decoded = decode(token)

    assert decoded.sub == claims.sub
    assert decoded.kind == SessionKind.STAFF
    assert decoded.role == "WAITER"
    assert decoded.tenant_id == claims.tenant_id
    assert decoded.email == "sam@bistro.com"
    assert not is_expired(decoded)


def test_encode_stamps_expiry():
    before = datetime.now(timezone.utc)
    decoded = decode(encode(make_claims(), timedelta(hours=2)))

    expected = before + timedelta(hours=2)
    assert abs(decoded.exp - expected.timestamp()) < 5


def test_expired_token_decodes_but_is_expired():
    """Expiry is not checked by decode; is_expired reports it"""
    decoded = decode(encode(make_claims(), timedelta(hours=-1)))

    assert is_expired(decoded)


def test_decode_rejects_garbage():
    with pytest.raises(InvalidToken):
        decode("invalid.token.string.here")

    with pytest.raises(InvalidToken):
        decode("")


def test_decode_rejects_foreign_signature():
    token = jwt.encode({"sub": "x", "kind": "staff", "role": "OWNER", "exp": 0}, "another-key", algorithm="HS256")

    with pytest.raises(InvalidToken):
        decode(token)


def test_decode_rejects_unexpected_payload():
    from dinedash.core.config import get_settings

    settings = get_settings()
    token = jwt.encode({"hello": "world"}, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)

    with pytest.raises(InvalidToken):
        decode(token)


def test_read_session_fails_closed():
    staff_token = encode(make_claims())

    assert read_session(staff_token, SessionKind.STAFF) is not None
    # Wrong audience
    assert read_session(staff_token, SessionKind.PLATFORM) is None
    # Expired
    assert read_session(encode(make_claims(), timedelta(seconds=-10)), SessionKind.STAFF) is None
    # Missing or malformed
    assert read_session(None, SessionKind.STAFF) is None
    assert read_session("nonsense", SessionKind.STAFF) is None


def test_cookie_names():
    assert cookie_name(SessionKind.STAFF) == "staff-session"
    assert cookie_name(SessionKind.ADMIN) == "admin-session"
    assert cookie_name(SessionKind.PLATFORM) == "platform-session"
