"""Client-side preparation of a testimonial submission."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from afyaconnect.client.errors import TestimonialValidationError
from afyaconnect.models.testimonial import validate_testimonial

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
IMAGE_FIELDS = ("beforeImage", "afterImage")


@dataclass(frozen=True)
class ImageFile:
    filename: str
    content: bytes
    content_type: str


def _image_problem(image: ImageFile) -> str | None:
    if image.content_type not in ALLOWED_IMAGE_TYPES:
        return "Only image files (JPG, PNG, GIF, WebP) are allowed."
    if len(image.content) > MAX_IMAGE_BYTES:
        return "File too large. Maximum file size is 5MB per image."
    return None


def check_submission(
    fields: Mapping[str, Any], images: Mapping[str, ImageFile] | None = None
) -> None:
    """Raise TestimonialValidationError naming every failing field."""
    errors = validate_testimonial(fields)
    for name, image in (images or {}).items():
        if name not in IMAGE_FIELDS:
            errors[name] = "Unknown image field"
            continue
        problem = _image_problem(image)
        if problem:
            errors[name] = problem
    if errors:
        raise TestimonialValidationError(errors)


def form_data(fields: Mapping[str, Any]) -> dict[str, str]:
    """Flatten fields into multipart text parts. Lists become comma-separated."""
    data: dict[str, str] = {}
    for name, value in fields.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            data[name] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            data[name] = ",".join(str(item) for item in value)
        else:
            data[name] = str(value)
    return data


def multipart_files(images: Mapping[str, ImageFile] | None) -> dict[str, tuple[str, bytes, str]]:
    return {
        name: (image.filename, image.content, image.content_type)
        for name, image in (images or {}).items()
    }
