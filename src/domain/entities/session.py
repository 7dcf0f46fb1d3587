"""Voting session domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from core.exceptions import InvalidFiltersError
from domain.entities.candidate import Candidate
from domain.entities.vote import VoteTable, VoteValue

DEFAULT_RADIUS = 5000.0
MAX_PRICE_LEVEL = 4


@dataclass(frozen=True)
class SessionFilters:
    """Search filters a session's candidate list was produced with."""

    radius: float = DEFAULT_RADIUS
    price_level: int = 0  # 0 = any price
    types: tuple[str, ...] = ("restaurant",)
    keyword: str = ""

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise InvalidFiltersError("Search radius must be positive")
        if not 0 <= self.price_level <= MAX_PRICE_LEVEL:
            raise InvalidFiltersError(
                f"Price level must be between 0 and {MAX_PRICE_LEVEL}"
            )
        if not self.types:
            raise InvalidFiltersError("At least one category tag is required")


@dataclass
class Session:
    """One voting round of a group over a frozen candidate list.

    ``version`` is bumped by every store write and is used both for
    optimistic document updates and for change detection.
    """

    group_id: UUID
    created_by: str
    candidates: list[Candidate]
    filters: SessionFilters = field(default_factory=SessionFilters)
    id: UUID = field(default_factory=uuid4)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    vote_table: VoteTable = field(default_factory=dict)
    version: int = 1

    @property
    def candidate_ids(self) -> list[str]:
        return [c.id for c in self.candidates]

    def has_candidate(self, candidate_id: str) -> bool:
        return any(c.id == candidate_id for c in self.candidates)

    def apply_vote(self, member_id: str, candidate_id: str, value: VoteValue) -> None:
        """Set a vote cell in the local snapshot, overwriting any prior value."""
        self.vote_table.setdefault(member_id, {})[candidate_id] = value
