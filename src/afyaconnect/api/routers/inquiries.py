from fastapi import APIRouter, Depends, Request

from afyaconnect.api.deps import require_admin
from afyaconnect.api.middleware.rate_limiter import INQUIRY_LIMIT, limiter
from afyaconnect.models.inquiry import Inquiry, InquiryCreate, InquiryCreated
from afyaconnect.services.inquiries import inquiry_service

router = APIRouter(prefix="/inquiries")


@router.post("", response_model=InquiryCreated)
@limiter.limit(INQUIRY_LIMIT)
async def submit_inquiry(request: Request, inquiry: InquiryCreate):
    inquiry_id = inquiry_service.submit(inquiry)
    return InquiryCreated(id=inquiry_id)


@router.get("", response_model=list[Inquiry])
async def list_inquiries(_admin: dict = Depends(require_admin)):
    """All inquiries, newest first (admin dashboard)."""
    return inquiry_service.list_all()
