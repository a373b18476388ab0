"""
QR encoding for asset codes.

The sticker on an asset carries ``kode_sarpras`` verbatim, so scanning it
yields the exact key used by ``GET /sarpras/qr/{kode}``. The same code always
produces the same PNG (fixed version/error-correction/box settings).
"""

import base64
import io
import logging

import qrcode
from qrcode.constants import ERROR_CORRECT_M

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = "data:image/png;base64,"


def generate_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """
    Render ``data`` as a QR code PNG.

    Args:
        data: The exact string to encode (no normalisation)
        box_size: Pixels per module
        border: Quiet zone width in modules

    Returns:
        PNG bytes
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buffer = io.BytesIO()
    img.save(buffer)
    return buffer.getvalue()


def generate_qr_data_url(data: str) -> str:
    """Base64 PNG data URL, ready for an <img src>."""
    png = generate_qr_png(data)
    logger.debug("Generated QR code for %r (%d bytes)", data, len(png))
    return DATA_URL_PREFIX + base64.b64encode(png).decode("ascii")


def decode_data_url(data_url: str) -> bytes:
    if not data_url or not data_url.startswith(DATA_URL_PREFIX):
        raise ValueError("Not a PNG data URL")
    return base64.b64decode(data_url[len(DATA_URL_PREFIX):])
