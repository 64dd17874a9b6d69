"""
Integration tests for staff management
"""

from conftest import TEST_PASSWORD

NEW_WAITER = {"name": "Wendy", "email": "wendy@bistro.com", "password": "waiter-pass", "role": "WAITER"}


def test_owner_lists_staff(client, login_as, owner, waiter):
    login_as(owner)

    response = client.get("/api/dashboard/staff")

    assert response.status_code == 200
    assert {member["email"] for member in response.json()} == {"owner@bistro.com", "waiter@bistro.com"}
    assert all("password_hash" not in member for member in response.json())


def test_manager_cannot_manage_staff(client, login_as, manager):
    login_as(manager)

    assert client.get("/api/dashboard/staff").status_code == 403


def test_create_staff_member_who_can_login(client, login_as, owner):
    login_as(owner)

    created = client.post("/api/dashboard/staff", json=NEW_WAITER)

    assert created.status_code == 201
    assert created.json()["role"] == "WAITER"
    assert created.json()["tenant_id"] == str(owner.tenant_id)
    login = client.post("/api/auth/staff/login", json={"email": "wendy@bistro.com", "password": "waiter-pass"})
    assert login.status_code == 200


def test_create_duplicate_email(client, login_as, owner, waiter):
    login_as(owner)

    response = client.post("/api/dashboard/staff", json={**NEW_WAITER, "email": "waiter@bistro.com"})

    assert response.status_code == 409


def test_cannot_create_second_owner(client, login_as, owner):
    login_as(owner)

    response = client.post("/api/dashboard/staff", json={**NEW_WAITER, "role": "OWNER"})

    assert response.status_code == 400


def test_owner_cannot_be_modified_or_deleted(client, login_as, owner):
    login_as(owner)

    patched = client.patch(f"/api/dashboard/staff/{owner.id}", json={"name": "Someone Else"})
    deleted = client.delete(f"/api/dashboard/staff/{owner.id}")

    assert patched.status_code == 400
    assert patched.json() == {"error": "The restaurant owner cannot be modified or deleted"}
    assert deleted.status_code == 400


def test_cannot_promote_to_owner(client, login_as, owner, waiter):
    login_as(owner)

    response = client.patch(f"/api/dashboard/staff/{waiter.id}", json={"role": "OWNER"})

    assert response.status_code == 400


def test_update_role_and_password(client, login_as, owner, waiter):
    login_as(owner)

    response = client.patch(
        f"/api/dashboard/staff/{waiter.id}",
        json={"role": "CHEF", "password": "fresh-password"},
    )

    assert response.status_code == 200
    assert response.json()["role"] == "CHEF"
    old = client.post("/api/auth/staff/login", json={"email": "waiter@bistro.com", "password": TEST_PASSWORD})
    assert old.status_code == 401


def test_delete_staff_member(client, login_as, owner, waiter):
    login_as(owner)

    response = client.delete(f"/api/dashboard/staff/{waiter.id}")

    assert response.status_code == 200
    assert [m["email"] for m in client.get("/api/dashboard/staff").json()] == ["owner@bistro.com"]
