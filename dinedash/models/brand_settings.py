"""
Brand settings model - per-tenant presentation
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import List, Optional
import uuid

from dinedash.core.timeutils import utcnow


class BrandSettings(SQLModel, table=True):
    """Colour palette, fonts and welcome copy applied by the diner UI"""

    __tablename__ = "brand_settings"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", unique=True, index=True)

    logo_url: Optional[str] = Field(default=None, max_length=1000)
    favicon_url: Optional[str] = Field(default=None, max_length=1000)
    cover_image_url: Optional[str] = Field(default=None, max_length=1000)

    primary_color: str = Field(default="#E23744", max_length=20)
    secondary_color: str = Field(default="#1C1C1C", max_length=20)
    accent_color: str = Field(default="#FFB800", max_length=20)
    background_color: str = Field(default="#FFFFFF", max_length=20)
    text_color: str = Field(default="#1C1C1C", max_length=20)

    heading_font: str = Field(default="Playfair Display", max_length=100)
    body_font: str = Field(default="Inter", max_length=100)

    welcome_message: Optional[str] = Field(default=None, max_length=500)
    tagline: Optional[str] = Field(default=None, max_length=255)
    gallery_images: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: Optional[datetime] = None
