"""Hospital directory endpoints: listing, search, lookup, ratings and admin maintenance."""

import logging
import os

from fastapi import APIRouter, Depends, File, Query, Request, Response, UploadFile

from afyaconnect.api.deps import require_admin
from afyaconnect.api.metrics import record_search
from afyaconnect.api.middleware.rate_limiter import BROWSE_LIMIT, RATING_LIMIT, limiter
from afyaconnect.core.errors import ValidationError
from afyaconnect.models.hospital import (
    AdvancedSearchFilters,
    Hospital,
    HospitalCreate,
    HospitalImageUploaded,
    HospitalUpdate,
    RatingRequest,
    RatingResponse,
    SortKey,
)
from afyaconnect.services.hospitals import hospital_service
from afyaconnect.services.uploads import read_image, save_image, validate_image

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hospitals")


@router.get("", response_model=list[Hospital])
async def list_hospitals(q: str | None = None):
    """All hospitals in storage order. A non-empty `q` behaves like /search."""
    if q and q.strip():
        results = hospital_service.search(q)
        record_search("simple", len(results))
        return results
    return hospital_service.list_all()


@router.get("/search", response_model=list[Hospital])
@limiter.limit(BROWSE_LIMIT)
async def search_hospitals(request: Request, query: str | None = None):
    results = hospital_service.search(query)
    record_search("simple", len(results))
    return results


@router.get("/advanced-search", response_model=list[Hospital])
@limiter.limit(BROWSE_LIMIT)
async def advanced_search(
    request: Request,
    specialty: str | None = None,
    treatment: str | None = None,
    hospital_name: str | None = Query(None, alias="hospitalName"),
    city: str | None = None,
    district: str | None = None,
    state: str | None = None,
    price_range: str | None = Query(None, alias="priceRange"),
    accreditation: str | None = None,
    min_rating: float | None = Query(None, alias="minRating", ge=0, le=5),
    sort_by: SortKey = Query(SortKey.HIGHEST_RATED, alias="sortBy"),
    limit: int | None = Query(None, ge=1),
):
    filters = AdvancedSearchFilters(
        specialty=specialty,
        treatment=treatment,
        hospital_name=hospital_name,
        city=city,
        district=district,
        state=state,
        price_range=price_range,
        accreditation=accreditation,
        min_rating=min_rating,
        sort_by=sort_by,
        limit=limit,
    )
    results = hospital_service.advanced_search(filters)
    record_search("advanced", len(results))
    return results


@router.get("/name/{name}", response_model=Hospital)
async def get_hospital_by_name(name: str):
    return hospital_service.get_by_name(name)


@router.get("/{hospital_id}", response_model=Hospital)
async def get_hospital(hospital_id: int):
    return hospital_service.get_by_id(hospital_id)


@router.post("/{hospital_id}/ratings", response_model=RatingResponse, status_code=201)
@limiter.limit(RATING_LIMIT)
async def submit_rating(request: Request, hospital_id: int, body: RatingRequest):
    return hospital_service.submit_rating(hospital_id, body.rating)


# --- Admin maintenance ---


@router.post("", response_model=Hospital, status_code=201)
async def create_hospital(payload: HospitalCreate, _admin: dict = Depends(require_admin)):
    return hospital_service.create(payload)


@router.put("/{hospital_id}", response_model=Hospital)
async def update_hospital(
    hospital_id: int, payload: HospitalUpdate, _admin: dict = Depends(require_admin)
):
    return hospital_service.update(hospital_id, payload)


@router.delete("/{hospital_id}", status_code=204)
async def delete_hospital(hospital_id: int, _admin: dict = Depends(require_admin)):
    hospital_service.delete(hospital_id)
    return Response(status_code=204)


@router.post("/upload-image", response_model=HospitalImageUploaded)
async def upload_hospital_image(
    image: UploadFile | None = File(None), _admin: dict = Depends(require_admin)
):
    """Store a photo for a hospital listing and return its public URL."""
    if image is None or not image.filename:
        raise ValidationError("No image file provided", fields={"image": "No image file provided"})
    upload = await read_image("hospital", image)
    problem = validate_image(upload)
    if problem:
        raise ValidationError(problem, fields={"image": problem})
    path, url = save_image(upload)
    return HospitalImageUploaded(
        message="Image uploaded successfully",
        image_url=url,
        filename=os.path.basename(path),
    )
