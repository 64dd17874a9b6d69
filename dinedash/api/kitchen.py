"""
Kitchen display API endpoints
"""

from fastapi import APIRouter, Depends
from sqlmodel import Session
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_staff_session
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.schemas.order import KitchenQueueResponse, KitchenStats, OrderResponse
from dinedash.services.kitchen import kitchen_queue

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/kitchen", tags=["kitchen"])


@router.get("/orders", response_model=KitchenQueueResponse)
async def get_kitchen_orders(
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Open orders oldest first, with queue counters"""
    ensure_permission(claims, Permission.KITCHEN, Permission.VIEW_ORDERS)
    orders, stats = kitchen_queue(session, uuid.UUID(claims.tenant_id))
    return KitchenQueueResponse(
        orders=[OrderResponse.model_validate(order) for order in orders],
        stats=KitchenStats(**stats),
    )
