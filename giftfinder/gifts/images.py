from __future__ import annotations

import logging
import uuid
from pathlib import Path

from ..config import DEFAULT_APP_CONFIG, AppConfig

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads/"

ALLOWED_CONTENT_TYPES: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class ImageStorageError(Exception):
    """Raised when an uploaded image is rejected or cannot be stored."""


def save_image(
    filename: str | None,
    content_type: str | None,
    data: bytes,
    config: AppConfig = DEFAULT_APP_CONFIG,
) -> str:
    """Store an uploaded image and return its public ``/uploads/...`` reference."""
    ext = ALLOWED_CONTENT_TYPES.get((content_type or "").lower())
    if ext is None:
        raise ImageStorageError(f"Unsupported image type: {content_type or 'unknown'}")
    if not data:
        raise ImageStorageError("Uploaded image is empty")
    if len(data) > config.max_image_bytes:
        raise ImageStorageError(
            f"Image exceeds {config.max_image_bytes} bytes ({len(data)} given)"
        )

    stored_name = f"{uuid.uuid4().hex}{ext}"
    target = config.upload_dir / stored_name
    try:
        config.upload_dir.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as exc:
        logger.warning("Failed to store upload %s", filename, exc_info=True)
        raise ImageStorageError("Could not store uploaded image") from exc

    logger.info("Stored upload %s as %s", filename, stored_name)
    return UPLOAD_URL_PREFIX + stored_name


def delete_image(ref: str | None, config: AppConfig = DEFAULT_APP_CONFIG) -> bool:
    """Remove a stored upload. External image URLs are left alone."""
    if not ref or not ref.startswith(UPLOAD_URL_PREFIX):
        return False
    name = Path(ref[len(UPLOAD_URL_PREFIX):]).name
    target = config.upload_dir / name
    try:
        target.unlink()
    except FileNotFoundError:
        return False
    except OSError:
        logger.warning("Failed to remove upload %s", target, exc_info=True)
        return False
    return True
