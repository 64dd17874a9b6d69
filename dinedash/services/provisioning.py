"""
Tenant provisioning: registration, verification, onboarding and removal
"""

from typing import List, Optional, Tuple
import re
import uuid

from sqlalchemy import delete, func
from sqlmodel import Session, select
import structlog

from dinedash.core.config import get_settings
from dinedash.core.errors import ConflictError, ForbiddenError, NotFoundError
from dinedash.core.security import hash_password
from dinedash.core.timeutils import utcnow
from dinedash.models.brand_settings import BrandSettings
from dinedash.models.customer import Customer
from dinedash.models.customization import Customization
from dinedash.models.invoice import Invoice, InvoiceSequence
from dinedash.models.menu_category import MenuCategory
from dinedash.models.menu_item import MenuItem
from dinedash.models.order import Order
from dinedash.models.order_line_item import OrderLineItem
from dinedash.models.staff import Staff, StaffRole
from dinedash.models.table import Table
from dinedash.models.tax_setting import TaxSetting
from dinedash.models.tenant import Tenant
from dinedash.models.waiter_call import WaiterCall
from dinedash.schemas.tenant import BrandSettingsUpdate, OnboardingRequest, RegisterRequest, TaxSettingIn
from dinedash.services import otp as otp_service

logger = structlog.get_logger(__name__)
settings = get_settings()

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """
    URL-safe slug: lowercase, apostrophes dropped, other runs of
    non-alphanumerics collapsed to "-", no leading or trailing "-".

    >>> slugify("Joe's Diner")
    'joes-diner'
    """
    value = name.lower().replace("'", "").replace("’", "")
    return _NON_ALNUM.sub("-", value).strip("-")


def unique_slug(session: Session, name: str) -> str:
    """Slug for the name, suffixed with -1, -2, ... until no tenant uses it"""
    base = slugify(name) or "restaurant"
    candidate = base
    suffix = 0
    while session.exec(select(Tenant.id).where(Tenant.slug == candidate)).first() is not None:
        suffix += 1
        candidate = f"{base}-{suffix}"
    return candidate


def register(session: Session, data: RegisterRequest) -> Tuple[Tenant, Staff, str]:
    """
    Create an inactive, unverified tenant with default branding, its OWNER
    and a registration code, in the caller's transaction.
    """
    email = data.email.lower()
    if session.exec(select(Staff.id).where(Staff.email == email)).first() is not None:
        raise ConflictError("An account with this email already exists")

    tenant = Tenant(
        name=data.restaurant_name,
        slug=unique_slug(session, data.restaurant_name),
        email=email,
        phone=data.phone,
        is_active=False,
        is_verified=False,
    )
    session.add(tenant)
    session.flush()

    session.add(BrandSettings(tenant_id=tenant.id))
    owner = Staff(
        tenant_id=tenant.id,
        name=data.owner_name,
        email=email,
        phone=data.phone,
        password_hash=hash_password(data.password),
        role=StaffRole.OWNER,
    )
    session.add(owner)

    code = otp_service.issue(session, email, settings.REGISTRATION_OTP_TTL_MINUTES)
    logger.info(f"Registration code for {email}: {code}")
    logger.info(f"Tenant registered: {tenant.slug} ({tenant.id})")
    return tenant, owner, code


def verify_registration(session: Session, email: str, code: str) -> Tuple[Tenant, Staff]:
    """Consume the registration code and mark the tenant verified"""
    email = email.lower()
    otp_service.verify(session, email, code)

    owner = session.exec(
        select(Staff).where(Staff.email == email, Staff.role == StaffRole.OWNER)
    ).first()
    if not owner:
        raise NotFoundError("Account not found")
    tenant = session.get(Tenant, owner.tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")

    tenant.is_verified = True
    tenant.updated_at = utcnow()
    owner.last_login_at = utcnow()
    session.add(tenant)
    session.add(owner)
    logger.info(f"Tenant verified: {tenant.slug}")
    return tenant, owner


def table_qr_payload(tenant: Tenant, number: int) -> str:
    """URL a diner's phone opens when scanning the table's QR code"""
    return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/r/{tenant.slug}?table={number}"


def next_table_number(session: Session, tenant_id: uuid.UUID) -> int:
    highest = session.exec(select(func.max(Table.number)).where(Table.tenant_id == tenant_id)).one()
    return (highest or 0) + 1


def generate_tables(session: Session, tenant: Tenant, count: int, prefix: str = "Table") -> List[Table]:
    """
    Add ``count`` tables named "<prefix> <n>", numbered after the current
    highest number. Flushed as one batch in the caller's transaction.
    """
    start = next_table_number(session, tenant.id)
    tables = [
        Table(
            tenant_id=tenant.id,
            number=number,
            name=f"{prefix} {number}",
            qr_code=table_qr_payload(tenant, number),
        )
        for number in range(start, start + count)
    ]
    session.add_all(tables)
    session.flush()
    return tables


def replace_tax_settings(session: Session, tenant_id: uuid.UUID, taxes: List[TaxSettingIn]) -> List[TaxSetting]:
    """Delete the tenant's tax settings and recreate them from the list"""
    session.exec(delete(TaxSetting).where(TaxSetting.tenant_id == tenant_id))
    created = [
        TaxSetting(
            tenant_id=tenant_id,
            name=tax.name,
            rate=tax.rate,
            is_active=tax.is_active,
            is_default=tax.is_default,
        )
        for tax in taxes
    ]
    session.add_all(created)
    session.flush()
    return created


def get_or_create_brand(session: Session, tenant_id: uuid.UUID) -> BrandSettings:
    brand = session.exec(select(BrandSettings).where(BrandSettings.tenant_id == tenant_id)).first()
    if brand is None:
        brand = BrandSettings(tenant_id=tenant_id)
        session.add(brand)
    return brand


def apply_branding(session: Session, tenant_id: uuid.UUID, data: BrandSettingsUpdate) -> BrandSettings:
    brand = get_or_create_brand(session, tenant_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(brand, key, value)
    brand.updated_at = utcnow()
    session.add(brand)
    return brand


def complete_onboarding(session: Session, tenant: Tenant, data: OnboardingRequest) -> List[Table]:
    """
    Apply branding and billing, replace tax settings, generate tables and
    activate the tenant. Everything lands in the caller's single transaction.

    Runs once per tenant; a tenant that was onboarded (and possibly
    deactivated by the platform since) is rejected.
    """
    if tenant.onboarded_at is not None:
        raise ForbiddenError("Restaurant onboarding is already complete")

    if data.branding is not None:
        apply_branding(session, tenant.id, data.branding)

    for field in ("description", "address", "city", "currency", "currency_symbol", "tax_enabled", "tax_inclusive"):
        value = getattr(data, field)
        if value is not None:
            setattr(tenant, field, value)

    replace_tax_settings(session, tenant.id, data.taxes)
    tables = generate_tables(session, tenant, data.table_count, data.table_prefix)

    now = utcnow()
    tenant.is_active = True
    tenant.onboarded_at = now
    tenant.updated_at = now
    session.add(tenant)
    session.flush()
    logger.info(f"Onboarding completed for {tenant.slug}: {len(tables)} tables created")
    return tables


def delete_tenant(session: Session, tenant: Tenant) -> None:
    """Remove a tenant and everything it owns"""
    tenant_id = tenant.id
    order_ids = select(Order.id).where(Order.tenant_id == tenant_id)
    menu_item_ids = select(MenuItem.id).where(MenuItem.tenant_id == tenant_id)

    session.exec(delete(Invoice).where(Invoice.tenant_id == tenant_id))
    session.exec(delete(InvoiceSequence).where(InvoiceSequence.tenant_id == tenant_id))
    session.exec(delete(OrderLineItem).where(OrderLineItem.order_id.in_(order_ids)))
    session.exec(delete(Order).where(Order.tenant_id == tenant_id))
    session.exec(delete(WaiterCall).where(WaiterCall.tenant_id == tenant_id))
    session.exec(delete(Customization).where(Customization.menu_item_id.in_(menu_item_ids)))
    session.exec(delete(MenuItem).where(MenuItem.tenant_id == tenant_id))
    session.exec(delete(MenuCategory).where(MenuCategory.tenant_id == tenant_id))
    session.exec(delete(Table).where(Table.tenant_id == tenant_id))
    session.exec(delete(Customer).where(Customer.tenant_id == tenant_id))
    session.exec(delete(TaxSetting).where(TaxSetting.tenant_id == tenant_id))
    session.exec(delete(BrandSettings).where(BrandSettings.tenant_id == tenant_id))
    session.exec(delete(Staff).where(Staff.tenant_id == tenant_id))
    session.delete(tenant)
    session.flush()
    logger.info(f"Tenant deleted: {tenant_id}")


def find_tenant_by_slug(session: Session, slug: str) -> Optional[Tenant]:
    return session.exec(select(Tenant).where(Tenant.slug == slug)).first()
