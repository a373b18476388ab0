import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile

from lapor_sarpras.core.config import settings
from lapor_sarpras.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def save_photo(foto: Optional[UploadFile]) -> Optional[str]:
    """Store an uploaded photo under UPLOAD_DIR, return its file name."""
    if foto is None or not foto.filename:
        return None

    ext = os.path.splitext(foto.filename)[1].lower()
    if ext not in ALLOWED_EXTENSIONS:
        raise ValidationFailed("Foto harus berupa gambar (jpg, png, gif, webp)")

    content = foto.file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise ValidationFailed("Ukuran foto terlalu besar")

    os.makedirs(settings.upload_dir, exist_ok=True)
    filename = f"{uuid.uuid4().hex}{ext}"
    with open(os.path.join(settings.upload_dir, filename), "wb") as fh:
        fh.write(content)

    logger.info("Stored photo %s (%d bytes)", filename, len(content))
    return filename


def delete_photo(filename: Optional[str]) -> None:
    if not filename:
        return
    path = os.path.join(settings.upload_dir, os.path.basename(filename))
    try:
        os.remove(path)
    except FileNotFoundError:
        logger.warning("Photo %s already gone", filename)
