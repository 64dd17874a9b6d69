"""
Staff management API endpoints
The restaurant owner is created at registration and is never managed here
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select
from typing import List
import structlog
import uuid

from dinedash.core.database import get_session
from dinedash.core.dependencies import get_staff_session
from dinedash.core.errors import ConflictError, InternalError, NotFoundError, ValidationFailedError
from dinedash.core.permissions import Permission, ensure_permission
from dinedash.core.security import hash_password
from dinedash.core.session import SessionClaims
from dinedash.core.timeutils import utcnow
from dinedash.models.staff import Staff, StaffRole
from dinedash.schemas.common import SuccessResponse
from dinedash.schemas.staff import StaffCreate, StaffResponse, StaffUpdate

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/dashboard/staff", tags=["staff"])


def _get_managed_staff(session: Session, staff_id: uuid.UUID, tenant_id: uuid.UUID) -> Staff:
    """Staff member of the tenant that may be changed through this API"""
    member = session.get(Staff, staff_id)
    if not member or member.tenant_id != tenant_id:
        raise NotFoundError("Staff member not found")
    if member.role == StaffRole.OWNER:
        raise ValidationFailedError("The restaurant owner cannot be modified or deleted")
    return member


def _email_taken(session: Session, email: str) -> bool:
    return session.exec(select(Staff.id).where(Staff.email == email)).first() is not None


@router.get("", response_model=List[StaffResponse])
async def list_staff(
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    ensure_permission(claims, Permission.MANAGE_STAFF)
    members = session.exec(
        select(Staff)
        .where(Staff.tenant_id == uuid.UUID(claims.tenant_id))
        .order_by(Staff.created_at)
    ).all()
    return members


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    staff_data: StaffCreate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    """Add a manager, chef or waiter"""
    ensure_permission(claims, Permission.MANAGE_STAFF)
    if staff_data.role == StaffRole.OWNER:
        raise ValidationFailedError("Cannot create another owner")

    email = staff_data.email.lower()
    if _email_taken(session, email):
        raise ConflictError("A staff member with this email already exists")

    try:
        member = Staff(
            tenant_id=uuid.UUID(claims.tenant_id),
            name=staff_data.name,
            email=email,
            phone=staff_data.phone,
            password_hash=hash_password(staff_data.password),
            role=staff_data.role,
        )
        session.add(member)
        session.commit()
        session.refresh(member)

        logger.info(f"Staff created: {member.id} ({member.role.value})")
        return member

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error creating staff: {e}")
        raise InternalError("Failed to create staff member")


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: uuid.UUID,
    staff_data: StaffUpdate,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    ensure_permission(claims, Permission.MANAGE_STAFF)
    member = _get_managed_staff(session, staff_id, uuid.UUID(claims.tenant_id))

    changes = staff_data.model_dump(exclude_unset=True)
    if changes.get("role") == StaffRole.OWNER:
        raise ValidationFailedError("Cannot promote staff to owner")
    if changes.get("email"):
        changes["email"] = changes["email"].lower()
        if changes["email"] != member.email and _email_taken(session, changes["email"]):
            raise ConflictError("A staff member with this email already exists")

    try:
        password = changes.pop("password", None)
        if password:
            member.password_hash = hash_password(password)
        for key, value in changes.items():
            setattr(member, key, value)
        member.updated_at = utcnow()
        session.add(member)
        session.commit()
        session.refresh(member)

        logger.info(f"Staff updated: {staff_id}")
        return member

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error updating staff: {e}")
        raise InternalError("Failed to update staff member")


@router.delete("/{staff_id}", response_model=SuccessResponse)
async def delete_staff(
    staff_id: uuid.UUID,
    claims: SessionClaims = Depends(get_staff_session),
    session: Session = Depends(get_session)
):
    ensure_permission(claims, Permission.MANAGE_STAFF)
    member = _get_managed_staff(session, staff_id, uuid.UUID(claims.tenant_id))

    session.delete(member)
    session.commit()

    logger.info(f"Staff deleted: {staff_id}")
    return SuccessResponse(message="Staff member deleted")
