"""
Image upload API endpoint
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
import structlog
import uuid

from dinedash.core.dependencies import get_staff_session
from dinedash.core.session import SessionClaims
from dinedash.services.uploads import save_image

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/upload", tags=["upload"])


@router.post("")
async def upload_image(
    file: UploadFile = File(...),
    upload_type: str = Form(default="image", alias="type"),
    claims: SessionClaims = Depends(get_staff_session),
):
    """Store a logo / menu / cover image for the restaurant and return its URL"""
    content = await file.read()
    url = save_image(
        tenant_id=uuid.UUID(claims.tenant_id),
        content=content,
        content_type=file.content_type,
        filename=file.filename,
        upload_type=upload_type,
    )
    return {"url": url}
