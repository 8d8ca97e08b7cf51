"""
Statistics Models

Aggregate counters shown on the marketing pages.
"""

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from afyaconnect.models.common import ApiModel


class Statistics(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    successful_treatments: int
    partner_hospitals: int
    registered_patients: int
    success_rate: float
    expert_doctors: int
    patient_coordinators: int
    support_available: str
    total_savings: float


# Published figures used whenever a live count is unavailable or zero.
DEFAULT_STATISTICS = Statistics(
    successful_treatments=2500,
    partner_hospitals=150,
    registered_patients=2500,
    success_rate=98.5,
    expert_doctors=500,
    patient_coordinators=50,
    support_available="24/7",
    total_savings=2800000,
)
