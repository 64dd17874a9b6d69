"""
Pydantic schemas for invoices
"""

from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime
import uuid

from dinedash.models.order import PaymentStatus
from dinedash.schemas.common import Money, ORMModel


class InvoiceCreate(BaseModel):
    order_id: uuid.UUID


class InvoiceResponse(ORMModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    order_id: uuid.UUID
    invoice_number: str
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_email: Optional[str] = None
    subtotal: Money
    tax_breakdown: List[Dict[str, Any]] = []
    total_tax: Money
    discount: Money
    tip: Money
    grand_total: Money
    payment_method: Optional[str] = None
    payment_status: PaymentStatus
    paid_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: datetime
