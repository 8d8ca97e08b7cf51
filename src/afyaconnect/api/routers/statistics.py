from fastapi import APIRouter

from afyaconnect.models.statistics import Statistics
from afyaconnect.services.statistics import statistics_service

router = APIRouter()


@router.get("/statistics", response_model=Statistics)
async def get_statistics():
    """Aggregate counters; zero live counts are reported as published defaults."""
    return statistics_service.compute()
