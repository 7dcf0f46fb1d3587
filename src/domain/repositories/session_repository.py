"""Session repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.session import Session
from domain.entities.vote import VoteValue


class ISessionRepository(Protocol):
    """Repository interface for voting sessions and their vote cells."""

    async def get(self, id: UUID) -> Session | None:
        """Get a session by ID, active or not."""
        ...

    async def get_active(self, group_id: UUID) -> Session | None:
        """Get the most recently created active session of a group."""
        ...

    async def create(self, session: Session) -> Session:
        """Persist a new session.

        Raises ConcurrentUpdateError when the group already has another
        active session.
        """
        ...

    async def update(self, session: Session) -> Session:
        """Overwrite the session document.

        Raises ConcurrentUpdateError when ``session.version`` is stale.
        """
        ...

    async def upsert_vote(
        self,
        session_id: UUID,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
    ) -> None:
        """Atomically set one (member, candidate) vote cell.

        Raises SessionInactiveError when the session is no longer active at
        write time.
        """
        ...

    async def conclude(self, session_id: UUID) -> bool:
        """Clear the active flag. False when it was already clear."""
        ...

    async def deactivate_for_group(self, group_id: UUID) -> int:
        """Clear the active flag on every active session of a group."""
        ...
