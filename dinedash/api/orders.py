"""
Order management API endpoints
Handles creation, retrieval, listing and status updates of orders
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session
from typing import List, Optional
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_optional_staff_session, get_staff_session, resolve_tenant_id
from dinedash.core.errors import InternalError, NotFoundError, ValidationFailedError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from dinedash.services import orders as order_service

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    tenant_id: Optional[uuid.UUID] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    phone: Optional[str] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """
    List orders, newest first.

    Staff see their restaurant's orders. Diners (no session) must pass the
    restaurant and their phone number and only see their own orders.
    ``status`` is a comma-separated list such as ``PREPARING,READY``.
    """
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    if claims is None and not phone:
        raise ValidationFailedError("Phone number required")

    statuses = order_service.parse_statuses(status_filter)
    orders = order_service.list_orders(session, target_tenant_id, statuses=statuses, phone=phone)
    return [OrderResponse.model_validate(order) for order in orders]


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    session: Session = Depends(get_session)
):
    """Place an order from a table"""
    try:
        order = order_service.create_order(session, order_data)
        session.commit()
        session.refresh(order)
        return OrderResponse.model_validate(order)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating order: {e}")
        raise InternalError("Failed to create order")


@router.get("/{order_ref}", response_model=OrderResponse)
async def get_order(
    order_ref: str,
    tenant_id: Optional[uuid.UUID] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """Get an order by id or order number"""
    scope = uuid.UUID(claims.tenant_id) if claims and claims.tenant_id else tenant_id
    order = order_service.find_order(session, order_ref, scope)
    if not order:
        raise NotFoundError("Order not found")
    return OrderResponse.model_validate(order)


@router.patch("/{order_ref}", response_model=OrderResponse)
async def update_order(
    order_ref: str,
    order_data: OrderUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Move an order (or its payment) along the allowed transitions"""
    if order_data.status is not None:
        ensure_permission(claims, Permission.KITCHEN, Permission.WAITER, Permission.MANAGE_ORDERS)
    if order_data.payment_status is not None or order_data.payment_method is not None:
        ensure_permission(claims, Permission.MANAGE_ORDERS, Permission.WAITER)

    order = order_service.find_order(session, order_ref, uuid.UUID(claims.tenant_id))
    if not order:
        raise NotFoundError("Order not found")

    try:
        order_service.update_order(session, order, order_data)
        session.commit()
        session.refresh(order)
        return OrderResponse.model_validate(order)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating order: {e}")
        raise InternalError("Failed to update order")
