"""Avatar uploads stored on local disk under the static upload directory."""
import asyncio
import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile, status

from ..config.settings import settings
from ..constants import messages
from ..middleware.errors import ApiError

logger = logging.getLogger(__name__)

AVATAR_SUBDIR = "avatars"


def avatar_filename(original_name: str) -> str:
    suffix = Path(original_name).suffix.lower()
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"avatar-{unique}{suffix}"


def validate_avatar(upload: UploadFile | None) -> UploadFile:
    if upload is None or not upload.filename:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.FILE_REQUIRED)
    extension_ok = Path(upload.filename).suffix.lower() in messages.AVATAR_EXTENSIONS
    content_type_ok = (upload.content_type or "").lower() in messages.AVATAR_CONTENT_TYPES
    if not (extension_ok and content_type_ok):
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.FILE_TYPE_INVALID)
    return upload


async def save_avatar(upload: UploadFile | None) -> str:
    """Validate and store an avatar, return its public path (/uploads/avatars/...)."""
    upload = validate_avatar(upload)
    # read one byte past the limit so oversize files are caught without loading them whole
    content = await upload.read(settings.max_upload_size + 1)
    if len(content) > settings.max_upload_size:
        raise ApiError(status.HTTP_400_BAD_REQUEST, messages.FILE_TOO_LARGE)

    target_dir = Path(settings.upload_dir) / AVATAR_SUBDIR
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = avatar_filename(upload.filename)
    await asyncio.to_thread((target_dir / filename).write_bytes, content)
    logger.info("Stored avatar %s (%d bytes)", filename, len(content))
    return f"/uploads/{AVATAR_SUBDIR}/{filename}"
