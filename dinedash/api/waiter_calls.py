"""
Waiter call API endpoints
Diners call for assistance from a table; staff attend and complete calls
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session, select
from typing import List, Optional
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_optional_staff_session, get_staff_session, resolve_tenant_id
from dinedash.core.errors import ConflictError, InternalError, NotFoundError, ValidationFailedError
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.table import Table
from dinedash.models.tenant import Tenant
from dinedash.models.waiter_call import WaiterCall, WaiterCallStatus
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.waiter_call import WaiterCallCreate, WaiterCallResponse, WaiterCallUpdate

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/waiter-calls", tags=["waiter-calls"])


def _get_owned_call(session: Session, call_id: uuid.UUID, tenant_id: uuid.UUID) -> WaiterCall:
    call = session.get(WaiterCall, call_id)
    if not call or call.tenant_id != tenant_id:
        raise NotFoundError("Waiter call not found")
    return call


def _parse_call_statuses(raw: Optional[str]) -> List[WaiterCallStatus]:
    statuses = []
    for value in (raw or "").split(","):
        value = value.strip().upper()
        if not value:
            continue
        try:
            statuses.append(WaiterCallStatus(value))
        except ValueError:
            raise ValidationFailedError(f"Invalid status: {value}")
    return statuses


@router.get("", response_model=List[WaiterCallResponse])
async def list_waiter_calls(
    tenant_id: Optional[uuid.UUID] = None,
    status_filter: Optional[str] = Query(default=None, alias="status"),
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """List calls, newest first, optionally filtered by comma-separated statuses"""
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    query = select(WaiterCall).where(WaiterCall.tenant_id == target_tenant_id)
    statuses = _parse_call_statuses(status_filter)
    if statuses:
        query = query.where(WaiterCall.status.in_(statuses))

    calls = session.exec(query.order_by(WaiterCall.created_at.desc())).all()
    return [WaiterCallResponse.model_validate(call) for call in calls]


@router.post("", response_model=WaiterCallResponse, status_code=status.HTTP_201_CREATED)
async def create_waiter_call(
    call_data: WaiterCallCreate,
    session: Session = Depends(get_session)
):
    """Call a waiter; refused while the table already has a pending call"""
    tenant = session.get(Tenant, call_data.tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")
    table = session.get(Table, call_data.table_id)
    if not table or table.tenant_id != tenant.id:
        raise NotFoundError("Table not found")

    existing = session.exec(
        select(WaiterCall.id).where(
            WaiterCall.tenant_id == tenant.id,
            WaiterCall.table_id == table.id,
            WaiterCall.status == WaiterCallStatus.PENDING,
        )
    ).first()
    if existing is not None:
        raise ConflictError("A waiter has already been called for this table")

    try:
        call = WaiterCall(tenant_id=tenant.id, table_id=table.id, reason=call_data.reason)
        session.add(call)
        session.commit()
        session.refresh(call)

        logger.info(f"Waiter called to table {table.number} ({call.id})")
        return WaiterCallResponse.model_validate(call)

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating waiter call: {e}")
        raise InternalError("Failed to create waiter call")


@router.patch("/{call_id}", response_model=WaiterCallResponse)
async def update_waiter_call(
    call_id: uuid.UUID,
    call_data: WaiterCallUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Attend or complete a call; the acting staff member is recorded"""
    call = _get_owned_call(session, call_id, uuid.UUID(claims.tenant_id))

    call.status = call_data.status
    if call_data.status in (WaiterCallStatus.ATTENDED, WaiterCallStatus.COMPLETED):
        call.attended_by = uuid.UUID(claims.sub)
        call.attended_at = utcnow()
    call.updated_at = utcnow()
    session.add(call)
    session.commit()
    session.refresh(call)

    logger.info(f"Waiter call {call_id} -> {call.status.value}")
    return WaiterCallResponse.model_validate(call)


@router.delete("/{call_id}", response_model=SuccessResponse)
async def delete_waiter_call(
    call_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    call = _get_owned_call(session, call_id, uuid.UUID(claims.tenant_id))
    session.delete(call)
    session.commit()

    logger.info(f"Waiter call deleted: {call_id}")
    return SuccessResponse(message="Waiter call deleted")
