"""
Testimonial Models

Field validation for testimonial submissions is shared by the API and the
Python client, so a form that the client accepts is exactly a form the
server accepts.
"""

import json
import math
from collections.abc import Mapping
from typing import Any

from pydantic import Field

from afyaconnect.models.common import ApiModel

# Wire name -> message when the field is missing or blank
REQUIRED_TEXT_FIELDS: dict[str, str] = {
    "patientName": "Patient name is required",
    "patientCountry": "Country is required",
    "treatmentType": "Treatment type is required",
    "hospitalName": "Hospital name is required",
    "doctorName": "Doctor name is required",
    "testimonialText": "Testimonial text is required",
}

RATING_RANGE_MESSAGE = "Rating must be a whole number between 1 and 5"

SUGGESTED_TAGS: tuple[str, ...] = (
    "Life-changing",
    "Affordable",
    "Quick recovery",
    "Excellent care",
    "Professional staff",
    "Modern facilities",
    "Highly recommended",
    "Great communication",
)

# Public filter labels -> stored treatment types
TREATMENT_CATEGORIES: dict[str, str] = {
    "Heart Surgery": "Cardiology",
    "Orthopedics": "Orthopedics",
    "Fertility": "Fertility",
    "Eye Surgery": "Ophthalmology",
    "Cancer Treatment": "Oncology",
}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_whole_number(value: Any) -> int | None:
    """Parse an int from an int or a digit string; None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
    return None


def parse_amount(value: Any) -> float | None:
    """Parse a finite float; "inf" and "nan" are not amounts."""
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) else None


def parse_tags(value: Any) -> list[str] | None:
    """Accept a list, a JSON list string, or a comma-separated string."""
    if _blank(value):
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError:
                return None
        else:
            value = text.split(",")
    if not isinstance(value, list):
        return None
    tags = [str(tag).strip() for tag in value if str(tag).strip()]
    return tags or None


def validate_testimonial(fields: Mapping[str, Any]) -> dict[str, str]:
    """Return {wire_field_name: problem} for every invalid field.

    An empty result means the submission may be persisted.
    """
    errors: dict[str, str] = {}

    for name, message in REQUIRED_TEXT_FIELDS.items():
        if _blank(fields.get(name)):
            errors[name] = message

    raw_rating = fields.get("rating")
    if _blank(raw_rating):
        errors["rating"] = "Rating is required"
    else:
        rating = parse_whole_number(raw_rating)
        if rating is None or not 1 <= rating <= 5:
            errors["rating"] = RATING_RANGE_MESSAGE

    raw_age = fields.get("patientAge")
    if not _blank(raw_age):
        age = parse_whole_number(raw_age)
        if age is None or not 0 < age < 130:
            errors["patientAge"] = "Age must be a whole number between 1 and 129"

    raw_cost = fields.get("costSaved")
    if not _blank(raw_cost):
        cost = parse_amount(raw_cost)
        if cost is None or cost < 0:
            errors["costSaved"] = "Cost saved must be a non-negative amount"

    return errors


class TestimonialSubmission(ApiModel):
    """Normalized, validated submission ready for persistence."""

    patient_name: str
    patient_country: str
    patient_age: int | None = None
    treatment_type: str
    hospital_name: str
    doctor_name: str
    rating: int = Field(..., ge=1, le=5)
    testimonial_text: str
    treatment_date: str | None = None
    treatment_duration: str | None = None
    cost_saved: float | None = None
    video_testimonial: str | None = None
    tags: list[str] | None = None
    use_profile_image: bool = False

    @classmethod
    def from_fields(cls, fields: Mapping[str, Any]) -> "TestimonialSubmission":
        """Build from raw wire fields. Call validate_testimonial first."""

        def text(name: str) -> str | None:
            value = fields.get(name)
            return None if _blank(value) else str(value).strip()

        use_profile = fields.get("useProfileImage")
        raw_cost = fields.get("costSaved")
        return cls(
            patient_name=text("patientName"),
            patient_country=text("patientCountry"),
            patient_age=parse_whole_number(fields.get("patientAge")),
            treatment_type=text("treatmentType"),
            hospital_name=text("hospitalName"),
            doctor_name=text("doctorName"),
            rating=parse_whole_number(fields.get("rating")),
            testimonial_text=text("testimonialText"),
            treatment_date=text("treatmentDate"),
            treatment_duration=text("treatmentDuration"),
            cost_saved=None if _blank(raw_cost) else parse_amount(raw_cost),
            video_testimonial=text("videoTestimonial"),
            tags=parse_tags(fields.get("tags")),
            use_profile_image=use_profile is True or str(use_profile).lower() == "true",
        )


class Testimonial(ApiModel):
    id: int
    user_id: int
    patient_name: str
    patient_country: str
    patient_age: int | None = None
    treatment_type: str
    hospital_name: str
    doctor_name: str
    rating: int
    testimonial_text: str
    treatment_date: str | None = None
    treatment_duration: str | None = None
    cost_saved: float | None = None
    before_image: str | None = None
    after_image: str | None = None
    video_testimonial: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_verified: bool = False
    is_approved: bool = False
    is_published: bool = False
    created_at: str | None = None
    updated_at: str | None = None


class TestimonialCreated(ApiModel):
    success: bool = True
    message: str
    testimonial_id: int
