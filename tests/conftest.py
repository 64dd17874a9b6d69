"""
Test configuration for pytest
"""

import os
import tempfile
from decimal import Decimal
from typing import Generator

# Test environment variables, set before the application reads its settings
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SESSION_SECRET_KEY"] = "test-session-secret"
os.environ["PLATFORM_SETUP_KEY"] = "test-setup-key"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="dinedash-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

import dinedash.models  # noqa: F401
from dinedash.api.auth import admin_claims, staff_claims
from dinedash.core.database import get_session
from dinedash.core.security import hash_password
from dinedash.core.session import SessionKind, cookie_name, encode
from dinedash.core.timeutils import utcnow
from dinedash.main import app
from dinedash.models.menu_category import MenuCategory
from dinedash.models.menu_item import MenuItem
from dinedash.models.platform_admin import PlatformAdmin, PlatformRole
from dinedash.models.staff import Staff, StaffRole
from dinedash.models.table import Table
from dinedash.models.tenant import Tenant

TEST_PASSWORD = "password123"


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite shared by the test and the application sessions"""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture(scope="function")
def db(engine) -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    with Session(engine) as session:
        yield session


@pytest.fixture(scope="function")
def client(engine) -> Generator[TestClient, None, None]:
    def get_session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


def create_tenant(db: Session, name: str = "Test Bistro", slug: str = "test-bistro", **kwargs) -> Tenant:
    values = {"is_active": True, "is_verified": True, "email": f"hello@{slug}.com"}
    values.update(kwargs)
    # Active tenants have been through onboarding
    values.setdefault("onboarded_at", utcnow() if values["is_active"] else None)
    tenant = Tenant(name=name, slug=slug, **values)
    db.add(tenant)
    db.commit()
    db.refresh(tenant)
    return tenant


def create_staff(db: Session, tenant: Tenant, role: StaffRole, email: str, **kwargs) -> Staff:
    staff = Staff(
        tenant_id=tenant.id,
        name=kwargs.pop("name", role.value.title()),
        email=email,
        password_hash=hash_password(kwargs.pop("password", TEST_PASSWORD)),
        role=role,
        **kwargs,
    )
    db.add(staff)
    db.commit()
    db.refresh(staff)
    return staff


@pytest.fixture
def tenant(db: Session) -> Tenant:
    return create_tenant(db)


@pytest.fixture
def other_tenant(db: Session) -> Tenant:
    return create_tenant(db, name="Other Place", slug="other-place")


@pytest.fixture
def owner(db: Session, tenant: Tenant) -> Staff:
    return create_staff(db, tenant, StaffRole.OWNER, "owner@bistro.com", name="Olivia Owner")


@pytest.fixture
def manager(db: Session, tenant: Tenant) -> Staff:
    return create_staff(db, tenant, StaffRole.MANAGER, "manager@bistro.com")


@pytest.fixture
def chef(db: Session, tenant: Tenant) -> Staff:
    return create_staff(db, tenant, StaffRole.CHEF, "chef@bistro.com")


@pytest.fixture
def waiter(db: Session, tenant: Tenant) -> Staff:
    return create_staff(db, tenant, StaffRole.WAITER, "waiter@bistro.com")


@pytest.fixture
def table(db: Session, tenant: Tenant) -> Table:
    table = Table(tenant_id=tenant.id, number=1, name="Table 1")
    db.add(table)
    db.commit()
    db.refresh(table)
    return table


@pytest.fixture
def menu(db: Session, tenant: Tenant) -> dict:
    """A category with two available items and one unavailable item"""
    category = MenuCategory(tenant_id=tenant.id, name="Mains", sort_order=0)
    db.add(category)
    db.commit()
    db.refresh(category)

    items = {
        "burger": MenuItem(tenant_id=tenant.id, category_id=category.id, name="Burger", price=Decimal("10.00")),
        "fries": MenuItem(tenant_id=tenant.id, category_id=category.id, name="Fries", price=Decimal("4.50")),
        "soup": MenuItem(
            tenant_id=tenant.id, category_id=category.id, name="Soup", price=Decimal("6.00"), is_available=False
        ),
    }
    db.add_all(items.values())
    db.commit()
    for item in items.values():
        db.refresh(item)
    db.refresh(category)
    return {"category": category, **items}


@pytest.fixture
def super_admin(db: Session) -> PlatformAdmin:
    admin = PlatformAdmin(
        name="Root",
        email="root@dinedash.com",
        password_hash=hash_password(TEST_PASSWORD),
        role=PlatformRole.SUPER_ADMIN,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def login_as(client: TestClient):
    """Attach a staff session cookie for the given staff member to the client"""

    def _login(staff: Staff) -> TestClient:
        client.cookies.set(cookie_name(SessionKind.STAFF), encode(staff_claims(staff)))
        return client

    return _login


@pytest.fixture
def platform_login_as(client: TestClient):
    """Attach a platform console session cookie for the given admin"""

    def _login(admin: PlatformAdmin) -> TestClient:
        client.cookies.set(cookie_name(SessionKind.PLATFORM), encode(admin_claims(admin, SessionKind.PLATFORM)))
        return client

    return _login


def order_payload(tenant: Tenant, *lines, **extra) -> dict:
    """Build an order body from (menu_item, quantity) pairs"""
    payload = {
        "tenant_id": str(tenant.id),
        "items": [{"menu_item_id": str(item.id), "quantity": quantity} for item, quantity in lines],
    }
    payload.update(extra)
    return payload


@pytest.fixture
def place_order(client: TestClient, tenant: Tenant, table: Table, menu: dict):
    """Place an order for the test tenant through the API and return its JSON"""

    def _place(*lines, **extra) -> dict:
        lines = lines or ((menu["burger"], 1),)
        extra.setdefault("table_id", str(table.id))
        response = client.post("/api/orders", json=order_payload(tenant, *lines, **extra))
        assert response.status_code == 201, response.text
        return response.json()

    return _place
