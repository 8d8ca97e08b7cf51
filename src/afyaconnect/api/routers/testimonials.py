"""
Testimonials Router

Public published list, authenticated multipart submission, and the
caller's own submissions.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from starlette.datastructures import UploadFile

from afyaconnect.api.deps import get_current_user
from afyaconnect.api.metrics import record_testimonial_submission
from afyaconnect.api.middleware.rate_limiter import SUBMISSION_LIMIT, limiter
from afyaconnect.core.errors import ValidationError
from afyaconnect.models.testimonial import Testimonial, TestimonialCreated
from afyaconnect.services.testimonials import SUBMITTED_MESSAGE, testimonial_service
from afyaconnect.services.uploads import ImageUpload, read_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/testimonials")

IMAGE_FIELDS = ("beforeImage", "afterImage")


async def _read_submission(request: Request) -> tuple[dict[str, Any], list[ImageUpload]]:
    """Split a multipart form (or JSON body) into text fields and images."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ValidationError("Request body is not valid JSON")
        if not isinstance(body, dict):
            raise ValidationError("Request body must be a JSON object")
        return body, []

    form = await request.form()
    fields: dict[str, Any] = {}
    images: list[ImageUpload] = []
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if key in IMAGE_FIELDS and value.filename:
                images.append(await read_image(key, value))
        elif key == "tags" and key in fields:
            existing = fields[key]
            fields[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            fields[key] = value
    return fields, images


@router.get("", response_model=list[Testimonial])
async def list_testimonials(
    treatment_type: str | None = Query(None, alias="treatmentType"),
    limit: str | None = None,
):
    """Published testimonials, newest first."""
    return testimonial_service.list_published(treatment_type, limit)


@router.post("", response_model=TestimonialCreated, status_code=201)
@limiter.limit(SUBMISSION_LIMIT)
async def submit_testimonial(request: Request, user: dict = Depends(get_current_user)):
    fields, images = await _read_submission(request)
    try:
        testimonial_id = testimonial_service.create(user["id"], fields, images)
    except ValidationError:
        record_testimonial_submission(accepted=False)
        raise
    record_testimonial_submission(accepted=True)
    return TestimonialCreated(message=SUBMITTED_MESSAGE, testimonial_id=testimonial_id)


@router.get("/my", response_model=list[Testimonial])
async def my_testimonials(user: dict = Depends(get_current_user)):
    return testimonial_service.list_for_user(user["id"])
