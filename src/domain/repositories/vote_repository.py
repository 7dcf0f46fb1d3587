"""Vote repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.vote import Vote


class IVoteRepository(Protocol):
    """Repository interface for standalone Vote records."""

    async def add(self, vote: Vote) -> Vote:
        """Append a vote."""
        ...

    async def get_for_group(
        self, group_id: UUID, session_id: UUID | None = None
    ) -> list[Vote]:
        """Get a group's votes in arrival order, optionally for one session."""
        ...
