"""Latest-request-wins sequencing for client searches."""

import asyncio

import pytest

from afyaconnect.client.sequencing import LatestRequest


@pytest.mark.asyncio
async def test_slow_earlier_request_cannot_overwrite_later_one():
    sequencer = LatestRequest()
    slow_started = asyncio.Event()
    slow_cancelled = False

    async def slow_search():
        nonlocal slow_cancelled
        slow_started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            slow_cancelled = True
            raise
        return "stale"

    async def fast_search():
        return "fresh"

    first = asyncio.create_task(sequencer.run(slow_search))
    await slow_started.wait()
    second = await sequencer.run(fast_search)

    assert second == "fresh"
    assert await first is None
    assert slow_cancelled


@pytest.mark.asyncio
async def test_overlapping_requests_deliver_only_latest():
    sequencer = LatestRequest()
    release = asyncio.Event()

    async def first_search():
        await release.wait()
        return "old"

    async def second_search():
        release.set()
        await asyncio.sleep(0)
        return "new"

    first = asyncio.create_task(sequencer.run(first_search))
    await asyncio.sleep(0)
    results = await asyncio.gather(first, sequencer.run(second_search))
    assert results == [None, "new"]


@pytest.mark.asyncio
async def test_single_request_returns_result():
    sequencer = LatestRequest()

    async def search():
        return [1, 2]

    assert await sequencer.run(search) == [1, 2]
    assert not sequencer.in_flight


@pytest.mark.asyncio
async def test_errors_of_current_request_propagate():
    sequencer = LatestRequest()

    async def failing():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await sequencer.run(failing)


@pytest.mark.asyncio
async def test_cancelling_caller_is_not_swallowed():
    sequencer = LatestRequest()

    async def slow():
        await asyncio.sleep(10)

    task = asyncio.create_task(sequencer.run(slow))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
