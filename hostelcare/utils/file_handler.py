"""
Upload handling: validate an incoming image and store it in the local
upload directory until it is handed to the blob store.
"""

import os
import secrets
from pathlib import Path
from typing import Optional, Set

from starlette.datastructures import UploadFile

from hostelcare.config.settings import settings
from hostelcare.core.exceptions import ValidationError
from hostelcare.core.logging import get_logger

logger = get_logger(__name__)

FILE_PERMISSIONS = 0o644
SAFE_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._- ")


def safe_filename(filename: str) -> str:
    """Strip directory components and unsafe characters."""
    if not filename or not isinstance(filename, str):
        raise ValidationError("Filename must be a non-empty string")

    name = os.path.basename(filename)
    name = "".join(ch for ch in name if ch in SAFE_CHARS).lstrip(".-")

    if not name:
        raise ValidationError("Filename contains no valid characters")

    if len(name) > 255:
        stem, ext = os.path.splitext(name)
        name = stem[:255 - len(ext)] + ext

    return name


def generate_unique_filename(original_name: str) -> str:
    stem, ext = os.path.splitext(safe_filename(original_name))
    return f"{stem}_{secrets.token_hex(8)}{ext.lower()}"


def validate_file_extension(filename: str, allowed: Optional[Set[str]] = None) -> bool:
    ext = os.path.splitext(filename)[1].lower().lstrip(".")
    return ext in (allowed if allowed is not None else settings.ALLOWED_EXTENSIONS)


async def save_upload_file(
    upload: UploadFile,
    destination_dir: Optional[str] = None,
    *,
    max_size: Optional[int] = None,
) -> Optional[str]:
    """
    Save an uploaded image and return its local path.

    Returns None when no file was sent.

    Raises:
        ValidationError: If the extension is not allowed, or the file is
            empty or too large
    """
    if upload is None or not upload.filename:
        return None

    if not validate_file_extension(upload.filename):
        allowed = ", ".join(sorted(settings.ALLOWED_EXTENSIONS))
        raise ValidationError(f"File type not allowed. Allowed types: {allowed}")

    content = await upload.read()
    if not content:
        raise ValidationError("Uploaded file is empty")

    limit = max_size or settings.MAX_UPLOAD_SIZE
    if len(content) > limit:
        raise ValidationError(f"File size exceeds limit of {limit} bytes")

    dest_dir = Path(destination_dir or settings.UPLOAD_DIR)
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest_path = dest_dir / generate_unique_filename(upload.filename)

    dest_path.write_bytes(content)
    dest_path.chmod(FILE_PERMISSIONS)
    logger.info(f"Upload stored at {dest_path} ({len(content)} bytes)")
    return str(dest_path)


def discard_file(path: Optional[str]) -> None:
    """Remove a stored upload if it is still on disk."""
    if not path:
        return
    try:
        os.remove(path)
        logger.debug(f"Discarded upload {path}")
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove upload {path}: {e}")
