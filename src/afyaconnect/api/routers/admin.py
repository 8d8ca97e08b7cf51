"""
Admin Router

Testimonial moderation. Every route requires an admin bearer token.
"""

from fastapi import APIRouter, Depends

from afyaconnect.api.deps import require_admin
from afyaconnect.models.testimonial import Testimonial
from afyaconnect.services.testimonials import testimonial_service

router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])


@router.get("/testimonials", response_model=list[Testimonial])
async def all_testimonials():
    """Every testimonial regardless of status, newest first."""
    return testimonial_service.list_all()


@router.put("/testimonials/{testimonial_id}/approve", response_model=Testimonial)
async def approve_testimonial(testimonial_id: int):
    return testimonial_service.approve(testimonial_id)


@router.put("/testimonials/{testimonial_id}/reject", response_model=Testimonial)
async def reject_testimonial(testimonial_id: int):
    return testimonial_service.reject(testimonial_id)


@router.put("/testimonials/{testimonial_id}/publish", response_model=Testimonial)
async def publish_testimonial(testimonial_id: int):
    """Make an approved testimonial public."""
    return testimonial_service.publish(testimonial_id)


@router.put("/testimonials/{testimonial_id}/unpublish", response_model=Testimonial)
async def unpublish_testimonial(testimonial_id: int):
    return testimonial_service.unpublish(testimonial_id)
