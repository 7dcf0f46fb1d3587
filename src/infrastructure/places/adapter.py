"""Candidate sourcing backed by the places service with a built-in fallback."""

import structlog

from core.config import Settings
from core.exceptions import UpstreamUnavailableError
from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import SessionFilters
from domain.repositories.candidate_source import SourcingResult, SourcingStatus
from infrastructure.places.fallback import (
    FALLBACK_POOL,
    filter_pool,
    restricts_types,
    shares_type,
)
from infrastructure.places.google_places import GooglePlacesClient

logger = structlog.get_logger()


def dedupe(candidates: list[Candidate]) -> list[Candidate]:
    """Drop repeated place ids, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for candidate in candidates:
        if candidate.id in seen:
            continue
        seen.add(candidate.id)
        unique.append(candidate)
    return unique


class CandidateSourcingAdapter:
    """Produces a bounded candidate list for a session.

    Upstream failures are recovered locally with the fallback pool, so a
    transient outage never empties a session on its own.
    """

    def __init__(
        self,
        client: GooglePlacesClient,
        default_origin: GeoPoint,
        limit: int = 10,
        fallback_unfiltered_on_empty: bool = False,
    ) -> None:
        self._client = client
        self._default_origin = default_origin
        self._limit = limit
        self._fallback_unfiltered_on_empty = fallback_unfiltered_on_empty

    @classmethod
    def from_settings(cls, settings: Settings) -> "CandidateSourcingAdapter":
        client = GooglePlacesClient(
            api_key=settings.places_api_key,
            base_url=settings.places_base_url,
            nearby_path=settings.places_nearby_path,
            timeout=settings.places_timeout_seconds,
            max_pages=settings.places_max_pages,
            page_token_delay=settings.places_page_token_delay_seconds,
            api_key_configured=settings.places_api_key_configured,
        )
        return cls(
            client=client,
            default_origin=GeoPoint(
                latitude=settings.default_latitude,
                longitude=settings.default_longitude,
            ),
            limit=settings.candidate_limit,
            fallback_unfiltered_on_empty=settings.fallback_unfiltered_on_empty,
        )

    async def fetch_candidates(
        self, filters: SessionFilters, origin: GeoPoint | None = None
    ) -> SourcingResult:
        """Fetch up to ``limit`` candidates for the filters."""
        try:
            candidates = await self._client.nearby_search(
                origin=origin or self._default_origin,
                radius=filters.radius,
                place_type=self._primary_type(filters.types),
                price_level=filters.price_level,
                keyword=filters.keyword.strip(),
                limit=self._limit,
            )
        except UpstreamUnavailableError as e:
            logger.warning("places_fallback_used", reason=e.details["reason"])
            return self._from_fallback(filters)

        if restricts_types(filters.types):
            candidates = [c for c in candidates if shares_type(c, filters.types)]

        candidates = dedupe(candidates)[: self._limit]
        status = SourcingStatus.LIVE if candidates else SourcingStatus.NO_RESULTS
        return SourcingResult(status=status, candidates=candidates)

    def _from_fallback(self, filters: SessionFilters) -> SourcingResult:
        matched = filter_pool(filters)
        if matched:
            return SourcingResult(
                status=SourcingStatus.FALLBACK,
                candidates=matched[: self._limit],
            )

        if self._fallback_unfiltered_on_empty:
            return SourcingResult(
                status=SourcingStatus.FALLBACK_UNFILTERED,
                candidates=list(FALLBACK_POOL[: self._limit]),
            )

        logger.info("places_fallback_no_matches", keyword=filters.keyword)
        return SourcingResult(status=SourcingStatus.FALLBACK_NO_MATCHES)

    @staticmethod
    def _primary_type(types: tuple[str, ...]) -> str:
        if "restaurant" in types or not types:
            return "restaurant"
        return types[0]
