from afyaconnect.client.api import AfyaConnectClient
from afyaconnect.client.errors import (
    ApiError,
    AuthenticationRequired,
    TestimonialValidationError,
)
from afyaconnect.client.filters import FilterSession, SearchFilters
from afyaconnect.client.sequencing import LatestRequest
from afyaconnect.client.statistics import StatisticsView, load_statistics

__all__ = [
    "AfyaConnectClient",
    "ApiError",
    "AuthenticationRequired",
    "TestimonialValidationError",
    "FilterSession",
    "SearchFilters",
    "LatestRequest",
    "StatisticsView",
    "load_statistics",
]
