# backend/binsurvey/services/photos/upload.py
import io
import logging
import uuid
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from binsurvey.errors import PhotoError

logger = logging.getLogger(__name__)

URI_PREFIX = "/uploads"


def save_photo(filename: str | None, data: bytes, upload_dir: Path, max_bytes: int) -> str:
    """Store an uploaded image under a random name and return its server-relative URI."""
    if not data:
        raise PhotoError("empty photo upload")
    if len(data) > max_bytes:
        raise PhotoError(f"photo exceeds {max_bytes} bytes")
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = (img.format or "").lower()
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise PhotoError("Only image files are allowed") from exc

    suffix = Path(filename or "").suffix.lower() or f".{fmt or 'img'}"
    name = f"{uuid.uuid4().hex}{suffix}"
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / name).write_bytes(data)
    logger.info(f"Saved photo {name} ({len(data)} bytes)")
    return f"{URI_PREFIX}/{name}"
