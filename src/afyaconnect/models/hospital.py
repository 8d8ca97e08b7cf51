"""
Hospital Models

Pydantic models for the hospital directory endpoints.
"""

from enum import Enum

from pydantic import Field

from afyaconnect.models.common import ApiModel, SuccessResponse


class PriceRange(str, Enum):
    BUDGET = "budget"
    MODERATE = "moderate"
    PREMIUM = "premium"


class SortKey(str, Enum):
    """Closed set of orderings for advanced search results."""

    HIGHEST_RATED = "rating"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"
    NAME = "name"


class Hospital(ApiModel):
    id: int
    name: str
    location: str = ""
    city: str | None = None
    state: str | None = None
    specialties: str | None = None
    description: str | None = None
    contact: str | None = None
    accreditations: str | None = None
    price_range: str = PriceRange.MODERATE.value
    average_rating: float = 0.0
    rating_count: int = 0
    created_at: str | None = None


class HospitalCreate(ApiModel):
    """Admin payload for adding a hospital"""

    name: str = Field(..., min_length=1, max_length=200)
    location: str = Field("", max_length=200)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    specialties: str | None = None
    description: str | None = None
    contact: str | None = None
    accreditations: str | None = None
    price_range: PriceRange = PriceRange.MODERATE


class HospitalUpdate(ApiModel):
    """Admin payload for editing a hospital; omitted fields stay unchanged"""

    name: str | None = Field(None, min_length=1, max_length=200)
    location: str | None = Field(None, max_length=200)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=100)
    specialties: str | None = None
    description: str | None = None
    contact: str | None = None
    accreditations: str | None = None
    price_range: PriceRange | None = None


class AdvancedSearchFilters(ApiModel):
    """Server-side view of the advanced search query string.

    Empty strings and zero ratings mean "not filtered".
    """

    specialty: str | None = None
    treatment: str | None = None
    hospital_name: str | None = None
    city: str | None = None
    district: str | None = None
    state: str | None = None
    price_range: str | None = None
    accreditation: str | None = None
    min_rating: float | None = None
    sort_by: SortKey = SortKey.HIGHEST_RATED
    limit: int | None = None


class RatingRequest(ApiModel):
    rating: int = Field(..., ge=1, le=5, description="Whole-star rating, 1 to 5")


class RatingResponse(ApiModel):
    success: bool = True
    new_average_rating: float
    new_rating_count: int


class HospitalImageUploaded(SuccessResponse):
    image_url: str
    filename: str
