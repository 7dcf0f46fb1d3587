"""Candidate source protocol."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import SessionFilters


class SourcingStatus(str, Enum):
    """Where a candidate list came from."""

    LIVE = "live"
    NO_RESULTS = "no_results"
    FALLBACK = "fallback"
    FALLBACK_NO_MATCHES = "fallback_no_matches"
    FALLBACK_UNFILTERED = "fallback_unfiltered"


@dataclass(frozen=True)
class SourcingResult:
    """An ordered, deduplicated, bounded candidate list."""

    status: SourcingStatus
    candidates: list[Candidate] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.candidates


class ICandidateSource(Protocol):
    """Interface for anything that can produce restaurant candidates."""

    async def fetch_candidates(
        self, filters: SessionFilters, origin: GeoPoint | None = None
    ) -> SourcingResult:
        """Fetch candidates matching the filters around an origin."""
        ...
