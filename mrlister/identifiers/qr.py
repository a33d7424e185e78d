"""
QR code payloads and rendering.

The payload is the contract: any reader must recover exactly
``{"sku": ..., "title": ..., "id": ...}``. Rendering uses the highest
error-correction level, a one-module quiet zone, and a fixed square size.
"""

import base64
import io
import logging

import qrcode
from PIL import Image
from pydantic import ValidationError
from qrcode.constants import ERROR_CORRECT_H
from qrcode.exceptions import DataOverflowError

from mrlister.core.interfaces import IQrEncoder
from mrlister.core.models import QrPayload

logger = logging.getLogger(__name__)

QR_BORDER = 1
DEFAULT_IMAGE_SIZE = 200


def build_qr_payload(sku: str, title: str, item_id: int | None = None) -> QrPayload:
    """Payload for an item; the id is 0 until the item has been stored."""
    return QrPayload(sku=sku, title=title, id=item_id or 0)


def parse_qr_payload(text: str) -> QrPayload:
    """
    Decode the text read from a scanned QR code.

    Raises:
        ValueError: If the text is not a valid payload.
    """
    try:
        return QrPayload.model_validate_json(text)
    except ValidationError as e:
        raise ValueError(f"Not an item QR payload: {e.error_count()} error(s)") from e


class QrCodeEncoder(IQrEncoder):
    """Renders payloads to ``data:image/png;base64,...`` URLs."""

    def __init__(self, image_size: int = DEFAULT_IMAGE_SIZE):
        self._image_size = image_size

    def encode(self, payload: QrPayload) -> str:
        try:
            png = self.render_png(payload)
        except (DataOverflowError, ValueError, OSError) as e:
            logger.error(f"QR encoding failed for SKU {payload.sku}: {e}")
            return ""
        return "data:image/png;base64," + base64.b64encode(png).decode("ascii")

    def render_png(self, payload: QrPayload) -> bytes:
        """PNG bytes of the QR symbol, exactly ``image_size`` pixels square."""
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, border=QR_BORDER)
        qr.add_data(payload.to_json())
        qr.make(fit=True)

        modules = qr.modules_count + 2 * QR_BORDER
        qr.box_size = max(1, self._image_size // modules)

        image = qr.make_image(fill_color="black", back_color="white").get_image()
        if image.size != (self._image_size, self._image_size):
            image = image.resize(
                (self._image_size, self._image_size), Image.Resampling.NEAREST
            )

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
