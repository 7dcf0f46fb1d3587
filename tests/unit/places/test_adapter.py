"""Unit tests for CandidateSourcingAdapter."""

from unittest.mock import AsyncMock

import pytest

from core.exceptions import UpstreamUnavailableError
from domain.entities.candidate import GeoPoint
from domain.entities.session import SessionFilters
from domain.repositories.candidate_source import SourcingStatus
from infrastructure.places.adapter import CandidateSourcingAdapter, dedupe
from infrastructure.places.fallback import FALLBACK_POOL
from tests.unit.conftest import make_candidate

ORIGIN = GeoPoint(latitude=37.7749, longitude=-122.4194)


@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


def _adapter(client: AsyncMock, **kwargs) -> CandidateSourcingAdapter:
    return CandidateSourcingAdapter(client=client, default_origin=ORIGIN, **kwargs)


class TestLiveResults:
    @pytest.mark.asyncio
    async def test_returns_live_candidates(self, client: AsyncMock):
        client.nearby_search.return_value = [make_candidate("p1"), make_candidate("p2")]

        result = await _adapter(client).fetch_candidates(SessionFilters())

        assert result.status == SourcingStatus.LIVE
        assert [c.id for c in result.candidates] == ["p1", "p2"]

    @pytest.mark.asyncio
    async def test_uses_default_origin_and_restaurant_type(self, client: AsyncMock):
        client.nearby_search.return_value = [make_candidate("p1")]

        await _adapter(client).fetch_candidates(
            SessionFilters(radius=1200, price_level=2, keyword="  noodles ")
        )

        client.nearby_search.assert_awaited_once_with(
            origin=ORIGIN,
            radius=1200,
            place_type="restaurant",
            price_level=2,
            keyword="noodles",
            limit=10,
        )

    @pytest.mark.asyncio
    async def test_restricting_tags_query_first_tag_and_filter(self, client: AsyncMock):
        client.nearby_search.return_value = [
            make_candidate("p1", types=("cafe", "food")),
            make_candidate("p2", types=("bar",)),
            make_candidate("p3", types=("bakery",)),
        ]
        origin = GeoPoint(latitude=1.0, longitude=2.0)

        result = await _adapter(client).fetch_candidates(
            SessionFilters(types=("cafe", "bakery")), origin
        )

        assert client.nearby_search.await_args.kwargs["place_type"] == "cafe"
        assert client.nearby_search.await_args.kwargs["origin"] == origin
        assert [c.id for c in result.candidates] == ["p1", "p3"]

    @pytest.mark.asyncio
    async def test_dedupes_and_truncates(self, client: AsyncMock):
        client.nearby_search.return_value = [
            make_candidate(f"p{i % 12}") for i in range(30)
        ]

        result = await _adapter(client, limit=10).fetch_candidates(SessionFilters())

        ids = [c.id for c in result.candidates]
        assert len(ids) == 10
        assert len(set(ids)) == 10

    @pytest.mark.asyncio
    async def test_zero_results_does_not_fall_back(self, client: AsyncMock):
        client.nearby_search.return_value = []

        result = await _adapter(client).fetch_candidates(SessionFilters(keyword="pizza"))

        assert result.status == SourcingStatus.NO_RESULTS
        assert result.is_empty


class TestFallback:
    @pytest.mark.asyncio
    async def test_upstream_failure_uses_filtered_pool(self, client: AsyncMock):
        client.nearby_search.side_effect = UpstreamUnavailableError("http status 500")

        result = await _adapter(client).fetch_candidates(SessionFilters(keyword="pizza"))

        assert result.status == SourcingStatus.FALLBACK
        assert [c.name for c in result.candidates] == ["Pizza Palace"]

    @pytest.mark.asyncio
    async def test_fallback_is_truncated_to_limit(self, client: AsyncMock):
        client.nearby_search.side_effect = UpstreamUnavailableError("timeout")

        result = await _adapter(client).fetch_candidates(SessionFilters())

        assert [c.id for c in result.candidates] == [c.id for c in FALLBACK_POOL[:10]]

    @pytest.mark.asyncio
    async def test_fallback_without_matches_is_empty_by_default(self, client: AsyncMock):
        client.nearby_search.side_effect = UpstreamUnavailableError("timeout")

        result = await _adapter(client).fetch_candidates(SessionFilters(keyword="xyzzy"))

        assert result.status == SourcingStatus.FALLBACK_NO_MATCHES
        assert result.candidates == []

    @pytest.mark.asyncio
    async def test_unfiltered_fallback_when_enabled(self, client: AsyncMock):
        client.nearby_search.side_effect = UpstreamUnavailableError("timeout")

        result = await _adapter(client, fallback_unfiltered_on_empty=True).fetch_candidates(
            SessionFilters(keyword="xyzzy")
        )

        assert result.status == SourcingStatus.FALLBACK_UNFILTERED
        assert len(result.candidates) == 10


def test_dedupe_keeps_first_occurrence():
    first = make_candidate("p1", name="First")
    second = make_candidate("p1", name="Second")

    assert dedupe([first, make_candidate("p2"), second]) == [first, make_candidate("p2")]
