"""
Models package initialization
"""

from afyaconnect.models.chat import (
    ChatRequest,
    ChatResponse,
    Recommendation,
    RecommendationRequest,
)
from afyaconnect.models.hospital import (
    AdvancedSearchFilters,
    Hospital,
    HospitalCreate,
    HospitalUpdate,
    PriceRange,
    RatingRequest,
    RatingResponse,
    SortKey,
)
from afyaconnect.models.inquiry import Inquiry, InquiryCreate, InquiryCreated
from afyaconnect.models.statistics import DEFAULT_STATISTICS, Statistics

__all__ = [
    "AdvancedSearchFilters",
    "ChatRequest",
    "ChatResponse",
    "DEFAULT_STATISTICS",
    "Hospital",
    "HospitalCreate",
    "HospitalUpdate",
    "Inquiry",
    "InquiryCreate",
    "InquiryCreated",
    "PriceRange",
    "RatingRequest",
    "RatingResponse",
    "Recommendation",
    "RecommendationRequest",
    "SortKey",
    "Statistics",
]
