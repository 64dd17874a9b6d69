"""
Diner phone verification API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select
import structlog

from dinedash.core.config import get_settings
from dinedash.core.database import get_session
from dinedash.core.errors import InternalError, NotFoundError
from dinedash.core.timeutils import utcnow
from dinedash.models.customer import Customer
from dinedash.models.tenant import Tenant
from dinedash.schemas.auth import OTPSendRequest, OTPVerifyRequest
from dinedash.services import otp as otp_service

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/otp", tags=["otp"])
settings = get_settings()


@router.post("/send")
async def send_otp(
    request_data: OTPSendRequest,
    session: Session = Depends(get_session)
):
    """Issue a 6-digit code for a 10-digit phone number"""
    try:
        code = otp_service.issue(session, request_data.phone, settings.CUSTOMER_OTP_TTL_MINUTES)
        session.commit()
        logger.info(f"OTP for {request_data.phone}: {code}")

        body = {"success": True, "message": "OTP sent successfully"}
        if settings.ENVIRONMENT != "production":
            body["code"] = code
        return body

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error sending OTP: {e}")
        raise InternalError("Failed to send OTP")


@router.post("/verify")
async def verify_otp(
    request_data: OTPVerifyRequest,
    session: Session = Depends(get_session)
):
    """Consume the code and mark the diner verified for this restaurant"""
    tenant = session.get(Tenant, request_data.tenant_id)
    if not tenant:
        raise NotFoundError("Restaurant not found")

    try:
        otp_service.verify(session, request_data.phone, request_data.code)

        customer = session.exec(
            select(Customer).where(Customer.tenant_id == tenant.id, Customer.phone == request_data.phone)
        ).first()
        if customer is None:
            customer = Customer(tenant_id=tenant.id, phone=request_data.phone)
        if request_data.name:
            customer.name = request_data.name
        customer.verified = True
        customer.updated_at = utcnow()
        session.add(customer)
        session.commit()
        session.refresh(customer)

        logger.info(f"Customer verified: {customer.id}")
        return {
            "success": True,
            "customer": {
                "id": str(customer.id),
                "phone": customer.phone,
                "name": customer.name,
                "verified": customer.verified,
            },
        }

    except HTTPException:
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"Error verifying OTP: {e}")
        raise InternalError("Failed to verify OTP")
