"""
QR code rendering.

Encodes a URL as a PNG and returns it as a data URI that can be dropped
straight into an <img src>. Nothing is written to disk.
"""
import base64
import io
import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_H, ERROR_CORRECT_L, ERROR_CORRECT_M, ERROR_CORRECT_Q

from app.exceptions import QrEncodingFailed
from app.utils.metrics import qr_codes_generated_total

logger = logging.getLogger(__name__)

ERROR_CORRECTION_LEVELS = {
    "L": ERROR_CORRECT_L,
    "M": ERROR_CORRECT_M,
    "Q": ERROR_CORRECT_Q,
    "H": ERROR_CORRECT_H,
}

DATA_URI_PREFIX = "data:image/png;base64,"


class QrEncoder:
    """Render text as a PNG QR code."""

    def __init__(self, box_size: int = 10, border: int = 4, error_correction: str = "M"):
        """
        Args:
            box_size: Pixels per QR module
            border: Quiet zone width in modules (4 is the minimum the standard allows)
            error_correction: One of L, M, Q, H
        """
        level = error_correction.upper()
        if level not in ERROR_CORRECTION_LEVELS:
            raise ValueError(f"Unknown QR error correction level: {error_correction}")

        self.box_size = box_size
        self.border = border
        self.error_correction = ERROR_CORRECTION_LEVELS[level]

    def render_png(self, data: str) -> bytes:
        """Render data as PNG bytes."""
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=self.box_size,
            border=self.border,
        )
        qr.add_data(data)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_uri(self, data: str) -> str:
        """
        Encode data as a PNG data URI.

        Raises:
            QrEncodingFailed: if the payload cannot be encoded (empty or too long)
        """
        if not data:
            raise QrEncodingFailed("Cannot encode an empty QR payload")

        try:
            png = self.render_png(data)
        except Exception as e:
            logger.error(f"QR encoding failed: {e}")
            raise QrEncodingFailed() from e

        qr_codes_generated_total.inc()
        return DATA_URI_PREFIX + base64.b64encode(png).decode("ascii")
