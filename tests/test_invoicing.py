"""
Tests for invoice creation and numbering
"""

import pytest
from datetime import datetime
from decimal import Decimal
import uuid

from sqlmodel import select

from dinedash.core.errors import NotFoundError
from dinedash.models.invoice import Invoice, InvoiceSequence
from dinedash.models.tax_setting import TaxSetting
from dinedash.services.invoicing import (
    build_tax_breakdown,
    create_invoice,
    format_invoice_number,
    next_invoice_number,
)


def test_format_invoice_number():
    assert format_invoice_number("20240115", 1) == "INV-20240115-0001"
    assert format_invoice_number("20240115", 123) == "INV-20240115-0123"


def test_numbers_increase_per_day_and_tenant(db, tenant, other_tenant):
    day = datetime(2024, 1, 15, 12, 0)

    assert next_invoice_number(db, tenant.id, day) == "INV-20240115-0001"
    assert next_invoice_number(db, tenant.id, day) == "INV-20240115-0002"
    assert next_invoice_number(db, other_tenant.id, day) == "INV-20240115-0001"
    assert next_invoice_number(db, tenant.id, datetime(2024, 1, 16, 9, 0)) == "INV-20240116-0001"
    db.commit()

    sequence = db.get(InvoiceSequence, (tenant.id, "20240115"))
    assert sequence.last_value == 2


def test_tax_breakdown():
    taxes = [
        TaxSetting(tenant_id=uuid.uuid4(), name="CGST", rate=Decimal("2.50")),
        TaxSetting(tenant_id=uuid.uuid4(), name="SGST", rate=Decimal("2.50")),
    ]

    breakdown, total_tax = build_tax_breakdown(taxes, Decimal("200.00"))

    assert breakdown == [
        {"name": "CGST", "rate": 2.5, "amount": 5.0},
        {"name": "SGST", "rate": 2.5, "amount": 5.0},
    ]
    assert total_tax == Decimal("10.00")


def test_create_invoice_is_idempotent(client, db, tenant, menu, place_order):
    db.add(TaxSetting(tenant_id=tenant.id, name="GST", rate=Decimal("5.00")))
    db.add(TaxSetting(tenant_id=tenant.id, name="Inactive", rate=Decimal("50.00"), is_active=False))
    db.commit()
    order = place_order((menu["burger"], 2), tip="3.00")

    invoice, created = create_invoice(db, tenant.id, uuid.UUID(order["id"]))
    db.commit()
    again, created_again = create_invoice(db, tenant.id, uuid.UUID(order["id"]))

    assert created is True
    assert created_again is False
    assert again.id == invoice.id
    assert invoice.invoice_number.startswith("INV-")
    assert invoice.invoice_number.endswith("-0001")
    assert invoice.subtotal == Decimal("20.00")
    assert invoice.total_tax == Decimal("1.00")
    assert invoice.grand_total == Decimal("24.00")
    assert [entry["name"] for entry in invoice.tax_breakdown] == ["GST"]
    assert len(db.exec(select(Invoice)).all()) == 1


def test_invoice_for_other_tenants_order(client, db, tenant, other_tenant, place_order):
    order = place_order()

    with pytest.raises(NotFoundError):
        create_invoice(db, other_tenant.id, uuid.UUID(order["id"]))


def test_invoice_endpoint(client, login_as, waiter, place_order):
    first = place_order()
    second = place_order()
    login_as(waiter)

    created = client.post("/api/dashboard/invoices", json={"order_id": first["id"]})
    repeated = client.post("/api/dashboard/invoices", json={"order_id": first["id"]})
    next_one = client.post("/api/dashboard/invoices", json={"order_id": second["id"]})

    assert created.status_code == 201
    assert repeated.status_code == 200
    assert repeated.json()["invoice_number"] == created.json()["invoice_number"]
    assert created.json()["invoice_number"].endswith("-0001")
    assert next_one.json()["invoice_number"].endswith("-0002")


def test_paid_order_invoice_records_payment(client, login_as, manager, place_order):
    order = place_order()
    login_as(manager)
    client.patch(f"/api/orders/{order['id']}", json={"payment_status": "PAID", "payment_method": "upi"})

    invoice = client.post("/api/dashboard/invoices", json={"order_id": order["id"]}).json()

    assert invoice["payment_status"] == "PAID"
    assert invoice["payment_method"] == "upi"
    assert invoice["paid_at"] is not None


def test_list_invoices(client, login_as, manager, place_order):
    order = place_order()
    login_as(manager)
    client.post("/api/dashboard/invoices", json={"order_id": order["id"]})

    today = client.get("/api/dashboard/invoices")
    everything = client.get("/api/dashboard/invoices", params={"range": "all"})
    invalid = client.get("/api/dashboard/invoices", params={"range": "decade"})

    assert len(today.json()) == 1
    assert len(everything.json()) == 1
    assert invalid.status_code == 400


def test_chef_cannot_invoice(client, login_as, chef, place_order):
    order = place_order()
    login_as(chef)

    response = client.post("/api/dashboard/invoices", json={"order_id": order["id"]})

    assert response.status_code == 403
