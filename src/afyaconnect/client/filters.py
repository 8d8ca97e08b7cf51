"""
Advanced search filter composition.

Filters are an immutable value; a FilterSession owns the current value and
decides when a change should trigger a search on its own.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, fields, replace
from typing import Any, Generic, TypeVar

from afyaconnect.models.hospital import SortKey

R = TypeVar("R")

# Attribute name -> query parameter name
PARAM_NAMES: dict[str, str] = {
    "specialty": "specialty",
    "treatment": "treatment",
    "hospital_name": "hospitalName",
    "city": "city",
    "district": "district",
    "state": "state",
    "price_range": "priceRange",
    "accreditation": "accreditation",
    "min_rating": "minRating",
    "sort_by": "sortBy",
}


@dataclass(frozen=True)
class SearchFilters:
    specialty: str = ""
    treatment: str = ""
    hospital_name: str = ""
    city: str = ""
    district: str = ""
    state: str = ""
    price_range: str = ""
    accreditation: str = ""
    min_rating: float = 0
    sort_by: SortKey = SortKey.HIGHEST_RATED

    def active(self) -> dict[str, Any]:
        """Set filters, excluding the sort key. Blank strings and 0 are unset."""
        result = {}
        for field in fields(self):
            if field.name == "sort_by":
                continue
            value = getattr(self, field.name)
            if isinstance(value, str):
                value = value.strip()
            if value:
                result[field.name] = value
        return result

    def has_active(self) -> bool:
        return bool(self.active())

    def to_params(self) -> dict[str, str]:
        params = {PARAM_NAMES[name]: str(value) for name, value in self.active().items()}
        params["sortBy"] = SortKey(self.sort_by).value
        return params


class FilterSession(Generic[R]):
    """Current filters plus the search to run against them.

    Changing a filter does not search, with one exception: when a change
    clears the last active filter the unfiltered list is fetched once, so
    the results never keep showing a filter the user has removed.
    """

    def __init__(
        self,
        search: Callable[[SearchFilters], Awaitable[R]],
        filters: SearchFilters | None = None,
    ):
        self._search = search
        self.filters = filters or SearchFilters()

    async def update(self, **changes: Any) -> R | None:
        had_active = self.filters.has_active()
        self.filters = replace(self.filters, **changes)
        if had_active and not self.filters.has_active():
            return await self._search(SearchFilters(sort_by=self.filters.sort_by))
        return None

    async def clear(self) -> R:
        self.filters = SearchFilters()
        return await self._search(self.filters)

    async def submit(self) -> R:
        return await self._search(self.filters)
