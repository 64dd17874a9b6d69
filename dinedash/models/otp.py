"""
One-time password model
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
import uuid

from dinedash.core.timeutils import utcnow


class OTP(SQLModel, table=True):
    """Short-lived code bound to an identifier (phone, email or "reset:<email>")"""

    __tablename__ = "otps"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    identifier: str = Field(index=True, max_length=255)
    code: str = Field(max_length=128)
    expires_at: datetime = Field(index=True)
    verified: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, index=True)
