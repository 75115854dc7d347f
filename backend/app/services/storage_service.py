"""
Image storage on local disk, served by the /static mount.

Files are grouped per bucket ("trip" for cover photos, "avatars" for user
photos). Stored paths are relative to UPLOAD_DIR, e.g. "trip/<uuid>.jpg".
"""
import os
import uuid
import logging
from typing import Optional
from app.core.config import settings

logger = logging.getLogger(__name__)

TRIP_BUCKET = "trip"
AVATAR_BUCKET = "avatars"


def save_file(bucket: str, original_filename: Optional[str], content: bytes) -> str:
    """Write content under the bucket with a random name and return its relative path."""
    bucket_dir = os.path.join(settings.UPLOAD_DIR, bucket)
    os.makedirs(bucket_dir, exist_ok=True)

    file_ext = os.path.splitext(original_filename or "")[1].lower()
    unique_filename = f"{uuid.uuid4()}{file_ext}"
    with open(os.path.join(bucket_dir, unique_filename), "wb") as buffer:
        buffer.write(content)

    relative_path = f"{bucket}/{unique_filename}"
    logger.info(f"Stored upload {relative_path} ({len(content)} bytes)")
    return relative_path


def delete_file(relative_path: Optional[str]) -> None:
    """Remove a stored file if it is still on disk."""
    if not relative_path:
        return
    file_path = os.path.join(settings.UPLOAD_DIR, relative_path)
    if os.path.exists(file_path):
        os.remove(file_path)
        logger.info(f"Deleted upload {relative_path}")


def get_public_url(relative_path: Optional[str]) -> Optional[str]:
    """URL path the static mount serves the file under."""
    if not relative_path:
        return None
    if relative_path.startswith(("http://", "https://", "/")):
        return relative_path
    return f"/static/{relative_path}"
