"""Scripted assistant and rule-based recommendation payloads."""

from typing import Literal

from pydantic import Field

from afyaconnect.models.common import ApiModel


class ChatRequest(ApiModel):
    message: str = Field(..., min_length=1, max_length=2000)


class ChatResponse(ApiModel):
    response: str


class RecommendationRequest(ApiModel):
    symptoms: str = Field(..., min_length=1, max_length=2000)


class Recommendation(ApiModel):
    id: str
    treatment_name: str
    specialty: str
    confidence: int
    reasoning: str
    estimated_cost: int
    duration: str
    success_rate: int
    risk_level: Literal["low", "medium", "high"]
    urgency: Literal["low", "medium", "high"]
    recommended_hospitals: list[str]
    recommended_doctors: list[str]
    alternative_options: list[str]
