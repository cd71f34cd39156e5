"""Image upload validation and disk storage."""

import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from app.config import get_settings

logger = logging.getLogger("daylog")

ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic", ".heif"}
PUBLIC_PREFIX = "uploads"


def validate_image_metadata(filename: str, content_type: str | None) -> str | None:
    """Validate upload file metadata (extension + MIME). Returns error message or None if valid."""
    ext = Path(filename).suffix.lower()
    if ext not in ALLOWED_EXTENSIONS:
        return f"Unsupported file type '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}"

    # Mobile pickers sometimes send a generic type
    if content_type and not content_type.startswith("image/") and content_type != "application/octet-stream":
        return f"Invalid content type '{content_type}'. Must be an image file."

    return None


async def store_image(upload: UploadFile, prefix: str = "") -> str:
    """Stream an uploaded image to disk with size limit. Returns the relative path to persist.

    Raises ValueError if the file exceeds the max upload size. A failed write removes the partial file.
    """
    settings = get_settings()
    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    ext = Path(upload.filename or "image.jpg").suffix.lower()
    stored_filename = f"{prefix}{uuid.uuid4()}{ext}"
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)

    file_path = upload_dir / stored_filename
    file_size = 0
    chunk_size = 1024 * 64

    try:
        with open(file_path, "wb") as f:
            while True:
                chunk = await upload.read(chunk_size)
                if not chunk:
                    break
                file_size += len(chunk)
                if file_size > max_bytes:
                    raise ValueError(f"File too large. Maximum: {settings.MAX_UPLOAD_SIZE_MB}MB")
                f.write(chunk)
    except BaseException:
        # Never leave a truncated file in the public directory
        if file_path.exists():
            os.remove(file_path)
        raise

    return f"{PUBLIC_PREFIX}/{stored_filename}"


def resolve_image_path(image_url: str) -> Path:
    """Map a persisted relative path back to the file under UPLOAD_DIR."""
    return Path(get_settings().UPLOAD_DIR) / Path(image_url).name


def remove_image(image_url: str | None) -> None:
    """Delete a stored image file if it exists."""
    if not image_url:
        return
    file_path = resolve_image_path(image_url)
    if file_path.exists():
        os.remove(file_path)
        logger.info("Removed image file %s", file_path.name)
