"""
Invoice creation and per-tenant, per-day invoice numbering
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Tuple
import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from dinedash.core.errors import NotFoundError, ValidationFailedError
from dinedash.core.timeutils import local_date_stamp, range_start, utcnow
from dinedash.models.invoice import Invoice, InvoiceSequence
from dinedash.models.order import Order, PaymentStatus
from dinedash.models.tax_setting import TaxSetting

logger = structlog.get_logger(__name__)

CENTS = Decimal("0.01")
INVOICE_RANGES = ("today", "week", "month", "all")


def format_invoice_number(day: str, value: int) -> str:
    return f"INV-{day}-{value:04d}"


def _bump_sequence(session: Session, tenant_id: uuid.UUID, day: str) -> int:
    """Atomically increment the counter row; returns 0 when the row does not exist yet"""
    result = session.connection().execute(
        update(InvoiceSequence)
        .where(InvoiceSequence.tenant_id == tenant_id, InvoiceSequence.day == day)
        .values(last_value=InvoiceSequence.last_value + 1)
    )
    if result.rowcount == 0:
        return 0
    return session.exec(
        select(InvoiceSequence.last_value).where(
            InvoiceSequence.tenant_id == tenant_id, InvoiceSequence.day == day
        )
    ).one()


def next_invoice_number(session: Session, tenant_id: uuid.UUID, now: Optional[datetime] = None) -> str:
    """
    Allocate the next invoice number for the tenant's current business day.

    The increment is a single UPDATE, so concurrent transactions serialise on
    the counter row instead of racing on a count of existing invoices.
    """
    day = local_date_stamp(now)
    value = _bump_sequence(session, tenant_id, day)
    if value == 0:
        try:
            with session.begin_nested():
                session.add(InvoiceSequence(tenant_id=tenant_id, day=day, last_value=1))
            value = 1
        except IntegrityError:
            # Another transaction opened the day first
            value = _bump_sequence(session, tenant_id, day)
    return format_invoice_number(day, value)


def build_tax_breakdown(taxes: List[TaxSetting], subtotal: Decimal) -> Tuple[List[dict], Decimal]:
    """Apply each active rate (percent) to the subtotal"""
    breakdown = []
    total_tax = Decimal("0")
    for tax in taxes:
        amount = (subtotal * Decimal(tax.rate) / Decimal("100")).quantize(CENTS)
        total_tax += amount
        breakdown.append({"name": tax.name, "rate": float(tax.rate), "amount": float(amount)})
    return breakdown, total_tax.quantize(CENTS)


def create_invoice(session: Session, tenant_id: uuid.UUID, order_id: uuid.UUID) -> Tuple[Invoice, bool]:
    """
    Invoice an order. Idempotent: an existing invoice is returned unchanged.

    Returns the invoice and whether it was created by this call.
    """
    order = session.get(Order, order_id)
    if not order or order.tenant_id != tenant_id:
        raise NotFoundError("Order not found")

    existing = session.exec(select(Invoice).where(Invoice.order_id == order.id)).first()
    if existing:
        return existing, False

    taxes = session.exec(
        select(TaxSetting)
        .where(TaxSetting.tenant_id == tenant_id, TaxSetting.is_active == True)  # noqa: E712
        .order_by(TaxSetting.created_at, TaxSetting.name)
    ).all()
    breakdown, total_tax = build_tax_breakdown(list(taxes), order.subtotal)

    now = utcnow()
    invoice = Invoice(
        tenant_id=tenant_id,
        order_id=order.id,
        invoice_number=next_invoice_number(session, tenant_id, now),
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        subtotal=order.subtotal,
        tax_breakdown=breakdown,
        total_tax=total_tax,
        tip=order.tip,
        grand_total=(order.subtotal + total_tax + order.tip).quantize(CENTS),
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        paid_at=now if order.payment_status == PaymentStatus.PAID else None,
        created_at=now,
    )
    session.add(invoice)
    session.flush()
    logger.info(f"Invoice created: {invoice.invoice_number} for order {order.order_number}")
    return invoice, True


def list_invoices(session: Session, tenant_id: uuid.UUID, range_name: str = "today") -> List[Invoice]:
    """Invoices of a tenant within a reporting range, newest first"""
    if range_name not in INVOICE_RANGES:
        raise ValidationFailedError(f"Invalid range: {range_name}")
    query = select(Invoice).where(Invoice.tenant_id == tenant_id)
    start = range_start(range_name)
    if start is not None:
        query = query.where(Invoice.created_at >= start)
    return list(session.exec(query.order_by(Invoice.created_at.desc())).all())
