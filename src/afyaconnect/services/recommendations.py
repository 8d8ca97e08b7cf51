"""
Rule-based treatment suggestions.

Each rule is a set of symptom phrases and the record returned when any of
them appears in the description. Every matching rule contributes, in table
order; with no match the general assessment record is returned. Confidence
and success figures are fixed per rule.
"""

from afyaconnect.core.errors import ValidationError
from afyaconnect.models.chat import Recommendation

RECOMMENDATION_RULES: tuple[tuple[tuple[str, ...], Recommendation], ...] = (
    (
        ("chest pain", "heart"),
        Recommendation(
            id="cardio-1",
            treatment_name="Cardiac Evaluation & Treatment",
            specialty="Cardiology",
            confidence=92,
            reasoning=(
                "Based on reported chest pain symptoms, a comprehensive cardiac "
                "evaluation is recommended to rule out coronary artery disease."
            ),
            estimated_cost=5000,
            duration="3-5 days",
            success_rate=95,
            risk_level="low",
            urgency="high",
            recommended_hospitals=["Apollo Hospitals Chennai", "Fortis Hospital Gurgaon"],
            recommended_doctors=["Dr. Rajesh Kumar", "Dr. Amit Singh"],
            alternative_options=["Stress Test", "Echocardiogram", "Angiography"],
        ),
    ),
    (
        ("joint pain", "knee", "hip"),
        Recommendation(
            id="ortho-1",
            treatment_name="Orthopedic Consultation & Joint Care",
            specialty="Orthopedics",
            confidence=88,
            reasoning=(
                "Joint pain symptoms suggest potential orthopedic issues that may "
                "benefit from specialized evaluation and treatment."
            ),
            estimated_cost=3500,
            duration="2-4 weeks",
            success_rate=90,
            risk_level="low",
            urgency="medium",
            recommended_hospitals=[
                "Fortis Hospital Gurgaon",
                "Max Super Speciality Hospital Delhi",
            ],
            recommended_doctors=["Dr. Amit Singh"],
            alternative_options=["Physical Therapy", "Joint Replacement", "Arthroscopy"],
        ),
    ),
    (
        ("vision", "eye", "sight"),
        Recommendation(
            id="ophth-1",
            treatment_name="Comprehensive Eye Examination",
            specialty="Ophthalmology",
            confidence=85,
            reasoning=(
                "Vision-related symptoms require thorough ophthalmologic evaluation "
                "to determine appropriate treatment options."
            ),
            estimated_cost=1500,
            duration="1-2 days",
            success_rate=98,
            risk_level="low",
            urgency="medium",
            recommended_hospitals=[
                "Max Super Speciality Hospital Delhi",
                "Apollo Hospitals Chennai",
            ],
            recommended_doctors=["Dr. Sunita Patel"],
            alternative_options=["LASIK Surgery", "Cataract Surgery", "Retinal Treatment"],
        ),
    ),
)

GENERAL_ASSESSMENT = Recommendation(
    id="general-1",
    treatment_name="General Health Assessment",
    specialty="General Medicine",
    confidence=75,
    reasoning=(
        "A comprehensive health assessment is recommended to evaluate your "
        "symptoms and determine the best course of action."
    ),
    estimated_cost=800,
    duration="1 day",
    success_rate=95,
    risk_level="low",
    urgency="low",
    recommended_hospitals=[
        "Apollo Hospitals Chennai",
        "Fortis Hospital Gurgaon",
        "Max Super Speciality Hospital Delhi",
    ],
    recommended_doctors=["Available specialists"],
    alternative_options=["Specialist Consultation", "Diagnostic Tests", "Preventive Care"],
)


def recommend(symptoms: str | None) -> list[Recommendation]:
    text = (symptoms or "").strip().lower()
    if not text:
        raise ValidationError(
            "Symptoms are required", fields={"symptoms": "Please describe your symptoms"}
        )

    matches = [
        recommendation
        for phrases, recommendation in RECOMMENDATION_RULES
        if any(phrase in text for phrase in phrases)
    ]
    return matches or [GENERAL_ASSESSMENT]
