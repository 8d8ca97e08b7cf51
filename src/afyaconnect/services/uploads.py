"""
Image Upload Storage

Validates testimonial and hospital images and writes them under UPLOAD_DIR with
collision-free names. Files are served back from /uploads.
"""

import logging
import os
import uuid
from dataclasses import dataclass
from urllib.parse import quote

from starlette.datastructures import UploadFile

from afyaconnect.core.config import settings

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


@dataclass(frozen=True)
class ImageUpload:
    field: str
    filename: str
    content_type: str
    data: bytes


def avatar_url(name: str) -> str:
    """Generated avatar used when the patient opts into a profile image."""
    return (
        f"https://ui-avatars.com/api/?name={quote(name, safe='')}"
        "&background=0D47A1&color=fff&size=200"
    )


def validate_image(upload: ImageUpload) -> str | None:
    """Return a problem description, or None when the image is acceptable."""
    if upload.content_type not in settings.ALLOWED_IMAGE_TYPES:
        return "Only image files (JPG, PNG, GIF, WebP) are allowed."
    if len(upload.data) > settings.MAX_UPLOAD_BYTES:
        limit_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
        return f"File too large. Maximum file size is {limit_mb:g}MB per image."
    if not upload.data:
        return "Uploaded file is empty."
    return None


async def read_image(field: str, upload: UploadFile) -> ImageUpload:
    """Buffer at most one byte past the size limit so oversize files fail validation."""
    return ImageUpload(
        field=field,
        filename=upload.filename or "",
        content_type=upload.content_type or "",
        data=await upload.read(settings.MAX_UPLOAD_BYTES + 1),
    )


def validate_images(uploads: list[ImageUpload]) -> dict[str, str]:
    errors: dict[str, str] = {}
    for upload in uploads:
        problem = validate_image(upload)
        if problem:
            errors[upload.field] = problem
    return errors


def _extension(upload: ImageUpload) -> str:
    ext = os.path.splitext(upload.filename or "")[1].lower()
    if ext in _EXTENSIONS.values() or ext == ".jpeg":
        return ext
    return _EXTENSIONS.get(upload.content_type, "")


def save_image(upload: ImageUpload, upload_dir: str | None = None) -> tuple[str, str]:
    """Write one validated image. Returns (filesystem path, public URL)."""
    directory = upload_dir or settings.UPLOAD_DIR
    os.makedirs(directory, exist_ok=True)
    name = f"{upload.field}-{uuid.uuid4().hex}{_extension(upload)}"
    path = os.path.join(directory, name)
    with open(path, "wb") as f:
        f.write(upload.data)
    logger.info(f"Stored {upload.field} image as {name} ({len(upload.data)} bytes)")
    return path, f"{UPLOAD_URL_PREFIX}/{name}"


def remove_files(paths: list[str]) -> None:
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning(f"Failed to remove orphaned upload {path}: {exc}")
