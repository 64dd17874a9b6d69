"""
Image uploads stored on local disk under a per-tenant directory
"""

from pathlib import Path
from typing import Optional
import time
import uuid

import structlog

from dinedash.core.config import get_settings
from dinedash.core.errors import ValidationFailedError

logger = structlog.get_logger(__name__)

ALLOWED_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}
_SAFE_TYPE = set("abcdefghijklmnopqrstuvwxyz0123456789_-")


def save_image(
    tenant_id: uuid.UUID,
    content: bytes,
    content_type: Optional[str],
    filename: Optional[str] = None,
    upload_type: str = "image",
) -> str:
    """
    Validate and store an uploaded image.

    Returns the public URL the file is served under.
    """
    settings = get_settings()
    content_type = (content_type or "").lower()
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationFailedError("Invalid file type. Allowed: JPEG, PNG, WebP, GIF")
    if not content:
        raise ValidationFailedError("No file uploaded")
    if len(content) > settings.UPLOAD_MAX_BYTES:
        raise ValidationFailedError(f"File too large. Maximum size is {settings.UPLOAD_MAX_BYTES // (1024 * 1024)}MB")

    upload_type = (upload_type or "image").lower()
    if not set(upload_type) <= _SAFE_TYPE:
        raise ValidationFailedError("Invalid upload type")

    # Extension follows the validated content type, never the client filename
    name = f"{upload_type}-{int(time.time() * 1000)}{ALLOWED_CONTENT_TYPES[content_type]}"
    directory = Path(settings.UPLOAD_DIR) / str(tenant_id)
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_bytes(content)

    logger.info(f"Uploaded {filename or '-'} as {name} for tenant {tenant_id} ({len(content)} bytes)")
    return f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{tenant_id}/{name}"
