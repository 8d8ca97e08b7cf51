"""
Inquiry Models

Patient contact requests tied to a hospital by name.
"""

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from afyaconnect.models.common import ApiModel


class InquiryCreate(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    hospital_name: str = Field(..., min_length=1, max_length=200)
    patient_name: str = Field(..., min_length=1, max_length=200)
    patient_email: str = Field(
        ..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )
    message: str = Field(..., min_length=1, max_length=5000)


class Inquiry(ApiModel):
    id: int
    hospital_name: str
    patient_name: str
    patient_email: str
    message: str
    submitted_at: str | None = None


class InquiryCreated(ApiModel):
    success: bool = True
    id: int
