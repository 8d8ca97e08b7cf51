import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from afyaconnect.client.api import AfyaConnectClient
from afyaconnect.client.errors import ApiError
from afyaconnect.models.statistics import DEFAULT_STATISTICS, Statistics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatisticsView:
    statistics: Statistics
    # False means the figures are the published defaults, not live data
    is_live: bool


async def load_statistics(
    client: AfyaConnectClient, default: Statistics = DEFAULT_STATISTICS
) -> StatisticsView:
    """Fetch live statistics, falling back to `default` on any failure."""
    try:
        data = await client.get_statistics()
        return StatisticsView(Statistics.model_validate(data), is_live=True)
    except (ApiError, httpx.HTTPError, ValidationError) as exc:
        logger.warning(f"Statistics unavailable, showing defaults: {exc}")
        return StatisticsView(default, is_live=False)
