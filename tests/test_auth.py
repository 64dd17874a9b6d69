"""
Integration tests for staff / admin authentication and password reset
"""

from sqlmodel import select

from dinedash.models.otp import OTP
from dinedash.models.staff import StaffRole
from conftest import TEST_PASSWORD, create_staff, create_tenant


def test_staff_login_sets_session_cookie(client, tenant, owner):
    response = client.post("/api/auth/staff/login", json={"email": "owner@bistro.com", "password": TEST_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["id"] == str(owner.id)
    assert body["user"]["role"] == "OWNER"
    assert body["user"]["tenant_slug"] == "test-bistro"
    assert "staff-session" in response.cookies

    # The cookie now authenticates verify
    verify = client.get("/api/auth/staff/verify")
    assert verify.status_code == 200
    assert verify.json()["authenticated"] is True
    assert verify.json()["user"]["email"] == "owner@bistro.com"


def test_staff_login_is_case_insensitive_on_email(client, tenant, waiter):
    response = client.post("/api/auth/staff/login", json={"email": "WAITER@Bistro.com", "password": TEST_PASSWORD})

    assert response.status_code == 200


def test_staff_login_wrong_password(client, tenant, owner):
    response = client.post("/api/auth/staff/login", json={"email": "owner@bistro.com", "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in response.headers


def test_staff_login_unknown_email(client, tenant):
    response = client.post("/api/auth/staff/login", json={"email": "nobody@bistro.com", "password": TEST_PASSWORD})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_deactivated_staff_cannot_login(client, db, tenant):
    create_staff(db, tenant, StaffRole.WAITER, "gone@bistro.com", is_active=False)

    response = client.post("/api/auth/staff/login", json={"email": "gone@bistro.com", "password": TEST_PASSWORD})

    assert response.status_code == 401


def test_inactive_restaurant_blocks_staff_login(client, db):
    closed = create_tenant(db, name="Closed", slug="closed", is_active=False, is_verified=True)
    create_staff(db, closed, StaffRole.WAITER, "waiter@closed.com")

    response = client.post("/api/auth/staff/login", json={"email": "waiter@closed.com", "password": TEST_PASSWORD})

    assert response.status_code == 401
    assert response.json() == {"error": "Restaurant is not active"}


def test_owner_of_verified_restaurant_can_login_to_finish_onboarding(client, db):
    pending = create_tenant(db, name="Pending", slug="pending", is_active=False, is_verified=True)
    create_staff(db, pending, StaffRole.OWNER, "owner@pending.com")

    response = client.post("/api/auth/staff/login", json={"email": "owner@pending.com", "password": TEST_PASSWORD})

    assert response.status_code == 200


def test_owner_of_unverified_restaurant_cannot_login(client, db):
    unverified = create_tenant(db, name="New", slug="new", is_active=False, is_verified=False)
    create_staff(db, unverified, StaffRole.OWNER, "owner@new.com")

    response = client.post("/api/auth/staff/login", json={"email": "owner@new.com", "password": TEST_PASSWORD})

    assert response.status_code == 401


def test_staff_verify_without_session(client):
    response = client.get("/api/auth/staff/verify")

    assert response.status_code == 401
    assert "error" in response.json()


def test_staff_logout_clears_cookie(client, tenant, owner):
    client.post("/api/auth/staff/login", json={"email": "owner@bistro.com", "password": TEST_PASSWORD})
    assert client.get("/api/auth/staff/verify").status_code == 200

    response = client.post("/api/auth/staff/logout")

    assert response.status_code == 200
    assert "staff-session=" in response.headers["set-cookie"]
    assert client.get("/api/auth/staff/verify").status_code == 401


def test_admin_login_and_verify(client, super_admin):
    response = client.post("/api/auth/admin/login", json={"email": "root@dinedash.com", "password": TEST_PASSWORD})

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "SUPER_ADMIN"
    assert "admin-session" in response.cookies

    verify = client.get("/api/auth/admin/verify")
    assert verify.status_code == 200
    assert verify.json()["user"]["email"] == "root@dinedash.com"


def test_staff_session_does_not_open_admin_console(client, login_as, owner):
    login_as(owner)

    assert client.get("/api/auth/admin/verify").status_code == 401


def test_forgot_password_does_not_reveal_accounts(client, tenant, owner):
    known = client.post("/api/auth/forgot-password", json={"email": "owner@bistro.com"})
    unknown = client.post("/api/auth/forgot-password", json={"email": "ghost@bistro.com"})

    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json()


def test_password_reset_with_code(client, db, tenant, owner):
    client.post("/api/auth/forgot-password", json={"email": "owner@bistro.com", "type": "otp"})
    otp = db.exec(select(OTP).where(OTP.identifier == "reset:owner@bistro.com")).one()
    assert len(otp.code) == 6

    response = client.post(
        "/api/auth/reset-password",
        json={"email": "owner@bistro.com", "code": otp.code, "new_password": "brand-new-pass"},
    )
    assert response.status_code == 200

    old = client.post("/api/auth/staff/login", json={"email": "owner@bistro.com", "password": TEST_PASSWORD})
    new = client.post("/api/auth/staff/login", json={"email": "owner@bistro.com", "password": "brand-new-pass"})
    assert old.status_code == 401
    assert new.status_code == 200

    # Codes are single use
    replay = client.post(
        "/api/auth/reset-password",
        json={"email": "owner@bistro.com", "code": otp.code, "new_password": "another-pass"},
    )
    assert replay.status_code == 400
    assert replay.json() == {"error": "Invalid or expired code"}


def test_password_reset_with_link_token(client, db, tenant, owner):
    client.post("/api/auth/forgot-password", json={"email": "owner@bistro.com", "type": "link"})
    otp = db.exec(select(OTP).where(OTP.identifier == "reset:owner@bistro.com")).one()

    response = client.post(
        "/api/auth/reset-password",
        json={"email": "owner@bistro.com", "token": otp.code, "new_password": "link-reset-pass"},
    )

    assert response.status_code == 200


def test_password_reset_requires_code_or_token(client, tenant, owner):
    response = client.post(
        "/api/auth/reset-password",
        json={"email": "owner@bistro.com", "new_password": "brand-new-pass"},
    )

    assert response.status_code == 400


def test_password_reset_rejects_short_password(client, tenant, owner):
    response = client.post(
        "/api/auth/reset-password",
        json={"email": "owner@bistro.com", "code": "123456", "new_password": "short"},
    )

    assert response.status_code == 400
    assert "error" in response.json()
