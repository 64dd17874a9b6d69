"""
Tests for restaurant registration, verification and onboarding
"""

from sqlmodel import select

from dinedash.models.brand_settings import BrandSettings
from dinedash.models.staff import Staff, StaffRole
from dinedash.models.table import Table
from dinedash.models.tax_setting import TaxSetting
from dinedash.models.tenant import Tenant
from dinedash.services.provisioning import slugify, unique_slug
from conftest import TEST_PASSWORD, create_staff, create_tenant

REGISTRATION = {
    "restaurant_name": "Joe's Diner",
    "owner_name": "Joe",
    "email": "joe@joesdiner.com",
    "password": "diner-pass-1",
    "phone": "9876543210",
}


def test_slugify():
    assert slugify("Joe's Diner") == "joes-diner"
    assert slugify("  Café  & Bar!! ") == "caf-bar"
    assert slugify("The   Spice Route") == "the-spice-route"


def test_unique_slug_appends_counter(db):
    assert unique_slug(db, "Joe's Diner") == "joes-diner"

    create_tenant(db, name="Joe's Diner", slug="joes-diner")
    assert unique_slug(db, "Joe's Diner") == "joes-diner-1"

    create_tenant(db, name="Joe's Diner", slug="joes-diner-1")
    assert unique_slug(db, "Joe's Diner") == "joes-diner-2"


def test_register_creates_inactive_tenant_and_owner(client, db):
    response = client.post("/api/onboarding/register", json=REGISTRATION)

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "joes-diner"
    assert len(body["code"]) == 6

    tenant = db.exec(select(Tenant).where(Tenant.slug == "joes-diner")).one()
    assert tenant.is_active is False
    assert tenant.is_verified is False
    owner = db.exec(select(Staff).where(Staff.tenant_id == tenant.id)).one()
    assert owner.role == StaffRole.OWNER
    assert owner.password_hash != REGISTRATION["password"]
    assert db.exec(select(BrandSettings).where(BrandSettings.tenant_id == tenant.id)).one() is not None


def test_register_duplicate_email(client):
    client.post("/api/onboarding/register", json=REGISTRATION)

    response = client.post("/api/onboarding/register", json={**REGISTRATION, "restaurant_name": "Another"})

    assert response.status_code == 409
    assert "error" in response.json()


def test_register_same_name_gets_suffixed_slug(client):
    client.post("/api/onboarding/register", json=REGISTRATION)

    response = client.post("/api/onboarding/register", json={**REGISTRATION, "email": "joe2@joesdiner.com"})

    assert response.json()["slug"] == "joes-diner-1"


def test_verify_with_wrong_code(client):
    client.post("/api/onboarding/register", json=REGISTRATION)

    response = client.post("/api/onboarding/verify", json={"email": REGISTRATION["email"], "code": "000000x"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid or expired code"}


def test_complete_requires_session(client):
    response = client.post("/api/onboarding/complete", json={"table_count": 2})

    assert response.status_code == 401


def test_full_onboarding_flow(client, db):
    registered = client.post("/api/onboarding/register", json=REGISTRATION).json()

    verified = client.post(
        "/api/onboarding/verify",
        json={"email": REGISTRATION["email"], "code": registered["code"]},
    )
    assert verified.status_code == 200
    assert verified.json()["user"]["role"] == "OWNER"
    assert "staff-session" in verified.cookies

    completed = client.post(
        "/api/onboarding/complete",
        json={
            "branding": {"primary_color": "#112233", "tagline": "Since 1999"},
            "city": "Pune",
            "taxes": [{"name": "CGST", "rate": 2.5}, {"name": "SGST", "rate": 2.5}],
            "table_count": 10,
        },
    )
    assert completed.status_code == 200
    assert completed.json()["success"] is True
    assert completed.json()["slug"] == "joes-diner"
    assert len(completed.json()["tables"]) == 10

    tables = client.get("/api/tables").json()
    assert [t["number"] for t in tables] == list(range(1, 11))
    assert [t["name"] for t in tables] == [f"Table {n}" for n in range(1, 11)]
    assert tables[0]["qr_code"].endswith("/r/joes-diner?table=1")

    tenant = db.exec(select(Tenant).where(Tenant.slug == "joes-diner")).one()
    assert tenant.is_active is True
    assert tenant.is_verified is True
    assert tenant.city == "Pune"
    assert len(db.exec(select(TaxSetting).where(TaxSetting.tenant_id == tenant.id)).all()) == 2

    public = client.get("/api/restaurants/joes-diner")
    assert public.status_code == 200
    assert public.json()["brand"]["primary_color"] == "#112233"
    assert public.json()["brand"]["tagline"] == "Since 1999"


def test_registration_code_is_single_use(client):
    registered = client.post("/api/onboarding/register", json=REGISTRATION).json()
    payload = {"email": REGISTRATION["email"], "code": registered["code"]}

    assert client.post("/api/onboarding/verify", json=payload).status_code == 200
    assert client.post("/api/onboarding/verify", json=payload).status_code == 400


def test_unverified_restaurant_is_not_public(client):
    client.post("/api/onboarding/register", json=REGISTRATION)

    response = client.get("/api/restaurants/joes-diner")

    assert response.status_code == 403


def test_tables_continue_numbering(client, db, login_as):
    pending = create_tenant(db, name="Pending", slug="pending", is_active=False, is_verified=True)
    db.add(Table(tenant_id=pending.id, number=1, name="Table 1"))
    db.commit()
    login_as(create_staff(db, pending, StaffRole.OWNER, "owner@pending.com"))

    response = client.post("/api/onboarding/complete", json={"table_count": 3, "table_prefix": "Patio"})

    assert [t["number"] for t in response.json()["tables"]] == [2, 3, 4]
    assert [t["name"] for t in response.json()["tables"]] == ["Patio 2", "Patio 3", "Patio 4"]


def test_onboarding_runs_only_once(client, db, login_as):
    pending = create_tenant(db, name="Pending", slug="pending", is_active=False, is_verified=True)
    login_as(create_staff(db, pending, StaffRole.OWNER, "owner@pending.com"))

    first = client.post("/api/onboarding/complete", json={"table_count": 1})
    second = client.post("/api/onboarding/complete", json={"table_count": 1})

    assert first.status_code == 200
    assert second.status_code == 403
    db.refresh(pending)
    assert pending.onboarded_at is not None


def test_owner_cannot_reactivate_deactivated_restaurant(client, db, login_as, platform_login_as, super_admin):
    live = create_tenant(db, name="Live", slug="live")
    owner = create_staff(db, live, StaffRole.OWNER, "owner@live.com")
    platform_login_as(super_admin)
    assert client.patch(f"/api/platform/restaurants/{live.id}", json={"is_active": False}).status_code == 200
    client.cookies.clear()

    login = client.post("/api/auth/staff/login", json={"email": "owner@live.com", "password": TEST_PASSWORD})
    login_as(owner)
    complete = client.post("/api/onboarding/complete", json={"table_count": 1})

    assert login.status_code == 401
    assert complete.status_code == 403
    db.refresh(live)
    assert live.is_active is False
