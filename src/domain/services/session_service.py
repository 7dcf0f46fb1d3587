"""Session lifecycle: creating, loading, watching and concluding voting rounds."""

import asyncio
from collections.abc import AsyncIterator, Callable
from uuid import UUID

import structlog

from core.exceptions import (
    EmptyCandidateSetError,
    GroupNotFoundError,
    NotAGroupMemberError,
    SessionNotFoundError,
)
from domain.entities.candidate import Candidate, GeoPoint
from domain.entities.session import Session, SessionFilters
from domain.repositories.candidate_source import ICandidateSource
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.match_resolver import compute_matches

logger = structlog.get_logger()

DEFAULT_POLL_INTERVAL = 2.0


class SessionService:
    """Service layer for a group's voting sessions.

    At most one session per group is active. Starting a new session
    supersedes the previous one; vote tables are never merged across
    sessions.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        candidate_source: ICandidateSource,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._uow_factory = uow_factory
        self._candidate_source = candidate_source
        self._poll_interval = poll_interval

    async def create_session(
        self,
        group_id: UUID,
        member_id: str,
        filters: SessionFilters,
        origin: GeoPoint | None = None,
    ) -> Session:
        """Source candidates and start a new active session for the group.

        Raises:
            GroupNotFoundError: If the group does not exist
            NotAGroupMemberError: If the member is not in the group
            EmptyCandidateSetError: If sourcing yields no candidates
        """
        async with self._uow_factory() as uow:
            group = await uow.groups.get(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))
            if not group.has_member(member_id):
                raise NotAGroupMemberError(str(group_id))

        # Network call happens outside any open transaction
        result = await self._candidate_source.fetch_candidates(filters, origin)
        if result.is_empty:
            logger.info(
                "session_not_created_empty",
                group_id=str(group_id),
                sourcing_status=result.status.value,
            )
            raise EmptyCandidateSetError(result.status.value)

        async with self._uow_factory() as uow:
            # Row lock serializes concurrent creates for the same group
            group = await uow.groups.get_for_update(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))

            superseded = await uow.sessions.deactivate_for_group(group_id)

            session = Session(
                group_id=group_id,
                created_by=member_id,
                candidates=list(result.candidates),
                filters=filters,
            )
            created = await uow.sessions.create(session)

            group.current_session_id = created.id
            await uow.groups.update(group)

            await uow.commit()

        logger.info(
            "session_created",
            session_id=str(created.id),
            group_id=str(group_id),
            candidates=len(created.candidates),
            sourcing_status=result.status.value,
            superseded=superseded,
        )
        return created

    async def load_active_session(self, group_id: UUID) -> Session | None:
        """Get the group's active session, or None when there is none."""
        async with self._uow_factory() as uow:
            group = await uow.groups.get(group_id)
            if not group:
                raise GroupNotFoundError(str(group_id))
            return await uow.sessions.get_active(group_id)

    async def get_session(self, session_id: UUID) -> Session:
        """Get any session (active or concluded) by ID."""
        async with self._uow_factory() as uow:
            session = await uow.sessions.get(session_id)
            if not session:
                raise SessionNotFoundError(str(session_id))
            return session

    async def conclude_session(self, session_id: UUID, member_id: str) -> Session:
        """Stop accepting votes for a session. Its votes are kept.

        Not conditional on the session version.

        Raises:
            SessionNotFoundError: If the session does not exist
            NotAGroupMemberError: If the member is not in the session's group
        """
        async with self._uow_factory() as uow:
            session = await uow.sessions.get(session_id)
            if not session:
                raise SessionNotFoundError(str(session_id))
            group = await uow.groups.get(session.group_id)
            if not group:
                raise GroupNotFoundError(str(session.group_id))
            if not group.has_member(member_id):
                raise NotAGroupMemberError(str(group.id))

            if session.is_active and await uow.sessions.conclude(session_id):
                if group.current_session_id == session_id:
                    group.current_session_id = None
                    await uow.groups.update(group)
                await uow.commit()
                logger.info(
                    "session_concluded", session_id=str(session_id), member_id=member_id
                )

            concluded = await uow.sessions.get(session_id)

        return concluded or session

    async def get_matches(self, session_id: UUID) -> list[Candidate]:
        """Candidates every voter in the session approved."""
        session = await self.get_session(session_id)
        return compute_matches(session)

    async def watch_session(
        self, session_id: UUID, poll_interval: float | None = None
    ) -> AsyncIterator[Session]:
        """Yield the session now and again every time it changes.

        Stops after yielding a session that is no longer active.
        """
        interval = self._poll_interval if poll_interval is None else poll_interval
        last_version: int | None = None
        while True:
            session = await self.get_session(session_id)
            if session.version != last_version:
                last_version = session.version
                yield session
            if not session.is_active:
                return
            await asyncio.sleep(interval)
