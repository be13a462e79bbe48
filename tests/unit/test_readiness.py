"""Tests for signboard.readiness module."""

import asyncio

import pytest

from signboard.exceptions import FetchError
from signboard.readiness import PENDING, ReadinessAggregator
from tests.conftest import FakeGateway, make_awards, make_events, make_news

pytestmark = [pytest.mark.unit, pytest.mark.fast]


def full_gateway() -> FakeGateway:
    return FakeGateway(make_news(2), make_awards(4), make_events(1))


class TestReadinessAggregator:
    """Tests for the all-sources readiness gate."""

    def test_state_when_constructed_then_pending(self):
        aggregator = ReadinessAggregator(full_gateway())
        assert aggregator.state == PENDING
        assert not aggregator.ready

    @pytest.mark.asyncio
    async def test_load_when_all_sources_non_empty_then_ready(self):
        aggregator = ReadinessAggregator(full_gateway())
        state = await aggregator.load()
        assert state.ready
        assert not state.error
        assert "news=2" in state.status_message
        assert len(aggregator.awards) == 4

    @pytest.mark.asyncio
    async def test_load_when_one_source_empty_then_not_ready_without_error(self):
        aggregator = ReadinessAggregator(FakeGateway(make_news(2), (), make_events(1)))
        state = await aggregator.load()
        assert not state.ready
        assert not state.error
        assert state.status_message == "No content available for awards"

    @pytest.mark.asyncio
    async def test_load_when_one_fetch_fails_then_error_regardless_of_others(self):
        gateway = full_gateway()
        gateway.results["events"] = FetchError("events", "HTTP 500")
        aggregator = ReadinessAggregator(gateway)
        state = await aggregator.load()
        assert state.error
        assert not state.ready
        assert state.status_message == "Failed to load events. Press R to retry."
        # The other lists still settled
        assert len(aggregator.news) == 2

    @pytest.mark.asyncio
    async def test_load_when_fetch_fails_after_success_then_previous_list_kept(self):
        gateway = full_gateway()
        aggregator = ReadinessAggregator(gateway)
        await aggregator.load()
        gateway.results["news"] = FetchError("news", "timeout")
        state = await aggregator.retry()
        assert state.error
        assert len(aggregator.news) == 2

    @pytest.mark.asyncio
    async def test_retry_when_source_recovers_then_ready(self):
        gateway = full_gateway()
        gateway.results["awards"] = FetchError("awards", "HTTP 502")
        aggregator = ReadinessAggregator(gateway)
        assert (await aggregator.load()).error

        gateway.results["awards"] = make_awards(3)
        state = await aggregator.retry()
        assert state.ready
        assert not state.error

    @pytest.mark.asyncio
    async def test_load_when_state_changes_then_callback_sees_pending_then_result(self):
        seen = []
        aggregator = ReadinessAggregator(full_gateway(), on_change=seen.append)
        await aggregator.load()
        assert seen[0] == PENDING
        assert seen[-1].ready

    @pytest.mark.asyncio
    async def test_load_when_already_loading_then_duplicate_ignored(self):
        release = asyncio.Event()

        class SlowGateway(FakeGateway):
            async def _result(self, name):
                await release.wait()
                return await super()._result(name)

        gateway = SlowGateway(make_news(1), make_awards(1), make_events(1))
        aggregator = ReadinessAggregator(gateway)
        first = asyncio.create_task(aggregator.load())
        await asyncio.sleep(0)
        assert aggregator.loading

        duplicate = await aggregator.load()
        assert duplicate == PENDING

        release.set()
        assert (await first).ready
        assert gateway.calls == 1
