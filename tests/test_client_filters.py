"""Filter composition and automatic refresh rules."""

from unittest.mock import AsyncMock

import pytest

from afyaconnect.client.filters import FilterSession, SearchFilters
from afyaconnect.models.hospital import SortKey


def test_only_truthy_values_become_params():
    filters = SearchFilters(specialty="Cardiology", city="  ", min_rating=0, price_range="budget")
    assert filters.to_params() == {
        "specialty": "Cardiology",
        "priceRange": "budget",
        "sortBy": "rating",
    }


def test_params_use_api_names():
    filters = SearchFilters(hospital_name="Central", min_rating=4, sort_by=SortKey.PRICE_LOW)
    assert filters.to_params() == {
        "hospitalName": "Central",
        "minRating": "4",
        "sortBy": "price_low",
    }


def test_sort_key_is_not_an_active_filter():
    assert not SearchFilters(sort_by=SortKey.NAME).has_active()


def test_filters_are_immutable():
    with pytest.raises(AttributeError):
        SearchFilters().city = "Nairobi"


@pytest.mark.asyncio
async def test_setting_a_filter_does_not_search():
    search = AsyncMock(return_value=[])
    session = FilterSession(search)

    assert await session.update(specialty="Cardiology") is None
    search.assert_not_called()
    assert session.filters.specialty == "Cardiology"


@pytest.mark.asyncio
async def test_clearing_last_filter_refreshes_exactly_once():
    search = AsyncMock(return_value=["all hospitals"])
    session = FilterSession(search, SearchFilters(specialty="Cardiology", city="City"))

    await session.update(city="")
    search.assert_not_called()

    result = await session.update(specialty="")
    assert result == ["all hospitals"]
    search.assert_awaited_once_with(SearchFilters())

    # Already unfiltered: further clears do not search again
    await session.update(min_rating=0)
    assert search.await_count == 1


@pytest.mark.asyncio
async def test_automatic_refresh_keeps_sort_key():
    search = AsyncMock(return_value=[])
    session = FilterSession(
        search, SearchFilters(price_range="premium", sort_by=SortKey.PRICE_HIGH)
    )

    await session.update(price_range="")
    search.assert_awaited_once_with(SearchFilters(sort_by=SortKey.PRICE_HIGH))


@pytest.mark.asyncio
async def test_changing_sort_alone_does_not_search():
    search = AsyncMock(return_value=[])
    session = FilterSession(search)
    await session.update(sort_by=SortKey.NAME)
    search.assert_not_called()


@pytest.mark.asyncio
async def test_clear_resets_and_searches_once():
    search = AsyncMock(return_value=[])
    session = FilterSession(search, SearchFilters(city="City", sort_by=SortKey.NAME))

    await session.clear()
    search.assert_awaited_once_with(SearchFilters())
    assert session.filters == SearchFilters()


@pytest.mark.asyncio
async def test_submit_uses_current_filters():
    search = AsyncMock(return_value=[])
    session = FilterSession(search)
    await session.update(accreditation="JCI")
    await session.submit()
    search.assert_awaited_once_with(SearchFilters(accreditation="JCI"))
