"""
Pydantic schemas for authentication and password reset
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Literal, Optional
import uuid

from dinedash.core.security import MIN_PASSWORD_LENGTH


class LoginRequest(BaseModel):
    """Credentials for any console login"""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=100)


class SessionUser(BaseModel):
    """Identity echoed back by login and verify endpoints"""
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: str
    tenant_id: Optional[str] = None
    tenant_name: Optional[str] = None
    tenant_slug: Optional[str] = None


class LoginResponse(BaseModel):
    success: bool = True
    user: SessionUser


class VerifyResponse(BaseModel):
    authenticated: bool = True
    user: SessionUser


class ForgotPasswordRequest(BaseModel):
    email: EmailStr
    type: Literal["otp", "link"] = "otp"


class ResetPasswordRequest(BaseModel):
    """Reset with either the emailed code or the link token"""
    email: EmailStr
    code: Optional[str] = Field(default=None, max_length=128)
    token: Optional[str] = Field(default=None, max_length=128)
    new_password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=100)


class OTPSendRequest(BaseModel):
    phone: str = Field(..., pattern=r"^\d{10}$", description="10-digit phone number")


class OTPVerifyRequest(BaseModel):
    phone: str = Field(..., pattern=r"^\d{10}$")
    code: str = Field(..., min_length=1, max_length=10)
    tenant_id: uuid.UUID
    name: Optional[str] = Field(default=None, max_length=255)
