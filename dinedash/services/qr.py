"""
QR code rendering for table ordering links
"""

from io import BytesIO

import qrcode
import structlog

logger = structlog.get_logger(__name__)


def render_qr_png(payload: str, box_size: int = 10, border: int = 4) -> bytes:
    """
    Render a payload (usually a table URL) as a PNG image.

    Args:
        payload: Text encoded in the QR code
        box_size: Pixels per module
        border: Quiet zone width in modules

    Returns:
        PNG bytes
    """
    try:
        qr = qrcode.QRCode(
            version=None,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=box_size,
            border=border,
        )
        qr.add_data(payload)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buffer = BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    except Exception as e:
        logger.error(f"Error generating QR image: {e}")
        raise
