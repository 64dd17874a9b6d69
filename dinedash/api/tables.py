"""
Tables API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlmodel import Session, select
from typing import List, Optional
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_optional_staff_session, get_staff_session, resolve_tenant_id
from dinedash.core.errors import ConflictError, InternalError, NotFoundError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.table import Table
from dinedash.models.tenant import Tenant
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.table import TableCreate, TableResponse, TableUpdate
from dinedash.services.provisioning import next_table_number, table_qr_payload
from dinedash.services.qr import render_qr_png

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/tables", tags=["tables"])


def _get_owned_table(session: Session, table_id: uuid.UUID, tenant_id: uuid.UUID) -> Table:
    table = session.get(Table, table_id)
    if not table or table.tenant_id != tenant_id:
        raise NotFoundError("Table not found")
    return table


def _number_taken(session: Session, tenant_id: uuid.UUID, number: int, exclude_id: Optional[uuid.UUID] = None) -> bool:
    query = select(Table.id).where(Table.tenant_id == tenant_id, Table.number == number)
    if exclude_id is not None:
        query = query.where(Table.id != exclude_id)
    return session.exec(query).first() is not None


@router.get("", response_model=List[TableResponse])
async def list_tables(
    tenant_id: Optional[uuid.UUID] = None,
    claims: Optional[SessionClaims] = Depends(get_optional_staff_session),
    session: Session = Depends(get_session)
):
    """List active tables by number"""
    target_tenant_id = resolve_tenant_id(claims, tenant_id)
    tables = session.exec(
        select(Table)
        .where(Table.tenant_id == target_tenant_id, Table.is_active == True)  # noqa: E712
        .order_by(Table.number)
    ).all()
    return tables


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
async def create_table(
    table_data: TableCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Create a new table"""
    ensure_permission(claims, Permission.MANAGE_TABLES)
    tenant = session.get(Tenant, uuid.UUID(claims.tenant_id))
    if not tenant:
        raise NotFoundError("Restaurant not found")

    number = table_data.number or next_table_number(session, tenant.id)
    if _number_taken(session, tenant.id, number):
        raise ConflictError(f"Table {number} already exists")

    try:
        table = Table(
            tenant_id=tenant.id,
            number=number,
            name=table_data.name or f"Table {number}",
            capacity=table_data.capacity,
            qr_code=table_qr_payload(tenant, number),
        )
        session.add(table)
        session.commit()
        session.refresh(table)

        logger.info(f"Table created: {table.id}")
        return table

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating table: {e}")
        raise InternalError("Failed to create table")


@router.patch("/{table_id}", response_model=TableResponse)
async def update_table(
    table_id: uuid.UUID,
    table_data: TableUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Update table"""
    ensure_permission(claims, Permission.MANAGE_TABLES)
    tenant_id = uuid.UUID(claims.tenant_id)
    table = _get_owned_table(session, table_id, tenant_id)

    changes = table_data.model_dump(exclude_unset=True)
    new_number = changes.get("number")
    if new_number is not None and _number_taken(session, tenant_id, new_number, exclude_id=table.id):
        raise ConflictError(f"Table {new_number} already exists")

    try:
        for key, value in changes.items():
            setattr(table, key, value)
        if new_number is not None:
            table.qr_code = table_qr_payload(session.get(Tenant, tenant_id), new_number)
        table.updated_at = utcnow()
        session.add(table)
        session.commit()
        session.refresh(table)

        logger.info(f"Table updated: {table_id}")
        return table

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating table: {e}")
        raise InternalError("Failed to update table")


@router.delete("/{table_id}", response_model=SuccessResponse)
async def delete_table(
    table_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Soft delete: the table disappears from listings"""
    ensure_permission(claims, Permission.MANAGE_TABLES)
    table = _get_owned_table(session, table_id, uuid.UUID(claims.tenant_id))

    table.is_active = False
    table.updated_at = utcnow()
    session.add(table)
    session.commit()

    logger.info(f"Table deactivated: {table_id}")
    return SuccessResponse(message="Table deleted")


@router.get("/{table_id}/qr", response_class=Response)
async def get_table_qr(
    table_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """PNG QR code that opens the restaurant's menu for this table"""
    ensure_permission(claims, Permission.MANAGE_TABLES)
    tenant_id = uuid.UUID(claims.tenant_id)
    table = _get_owned_table(session, table_id, tenant_id)

    payload = table.qr_code or table_qr_payload(session.get(Tenant, tenant_id), table.number)
    return Response(
        content=render_qr_png(payload),
        media_type="image/png",
        headers={"Content-Disposition": f'inline; filename="table-{table.number}.png"'},
    )
