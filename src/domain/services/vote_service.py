"""Recording member votes and resolving group matches."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import (
    GroupNotFoundError,
    InvalidCandidateError,
    NoActiveSessionError,
    NotAGroupMemberError,
    SessionInactiveError,
    SessionNotFoundError,
)
from domain.entities.candidate import Candidate
from domain.entities.group import Group
from domain.entities.session import Session
from domain.entities.vote import Vote, VoteValue
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.match_resolver import RawVoteStream, compute_matches

logger = structlog.get_logger()


class VoteService:
    """Service layer for votes.

    Session votes are written cell by cell, so concurrent swipes from
    different members (or rapid swipes from one member) never overwrite
    each other's cells. Recording the same vote twice is a no-op, which
    makes retries safe.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def record_vote(
        self,
        session_id: UUID,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
    ) -> Session:
        """Set a member's vote on one candidate of an active session.

        Raises:
            SessionNotFoundError: If the session does not exist
            NotAGroupMemberError: If the member is not in the session's group
            SessionInactiveError: If the session was concluded or superseded,
                including after it was read
            InvalidCandidateError: If the candidate is not in the session
        """
        async with self._uow_factory() as uow:
            session = await uow.sessions.get(session_id)
            if not session:
                raise SessionNotFoundError(str(session_id))
            return await self._record(uow, session, member_id, candidate_id, value)

    async def record_vote_for_group(
        self,
        group_id: UUID,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
    ) -> Session:
        """Like ``record_vote`` but against the group's active session."""
        async with self._uow_factory() as uow:
            session = await uow.sessions.get_active(group_id)
            if not session:
                raise NoActiveSessionError(str(group_id))
            return await self._record(uow, session, member_id, candidate_id, value)

    async def cast_vote(
        self,
        group_id: UUID,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
        session_id: UUID | None = None,
    ) -> Vote:
        """Append a standalone vote without touching any session document.

        A ``session_id`` must name a session of the same group.
        """
        async with self._uow_factory() as uow:
            await self._get_membership(uow, group_id, member_id)
            if session_id is not None:
                session = await uow.sessions.get(session_id)
                if not session or session.group_id != group_id:
                    raise SessionNotFoundError(str(session_id))

            vote = Vote(
                member_id=member_id,
                group_id=group_id,
                candidate_id=candidate_id,
                value=value,
                session_id=session_id,
            )
            added = await uow.votes.add(vote)
            await uow.commit()

        logger.info(
            "vote_cast",
            group_id=str(group_id),
            member_id=member_id,
            candidate_id=candidate_id,
            vote=value.value,
        )
        return added

    async def get_group_matches(
        self, group_id: UUID, member_id: str, session_id: UUID | None = None
    ) -> list[Candidate]:
        """Resolve standalone votes against a session's candidate list.

        Uses the given session, or the group's active one. With an explicit
        ``session_id`` only votes tagged with it count. Otherwise untagged
        votes count too, but votes tagged with any other session never do.
        """
        async with self._uow_factory() as uow:
            await self._get_membership(uow, group_id, member_id)

            if session_id is not None:
                session = await uow.sessions.get(session_id)
                if not session or session.group_id != group_id:
                    raise SessionNotFoundError(str(session_id))
                votes = await uow.votes.get_for_group(group_id, session_id)
            else:
                session = await uow.sessions.get_active(group_id)
                if not session:
                    raise NoActiveSessionError(str(group_id))
                votes = [
                    vote
                    for vote in await uow.votes.get_for_group(group_id)
                    if vote.session_id in (None, session.id)
                ]

        return compute_matches(RawVoteStream(candidates=session.candidates, votes=votes))

    # --- Internal helpers ---

    async def _record(
        self,
        uow: IUnitOfWork,
        session: Session,
        member_id: str,
        candidate_id: str,
        value: VoteValue,
    ) -> Session:
        await self._get_membership(uow, session.group_id, member_id)
        if not session.is_active:
            raise SessionInactiveError(str(session.id))
        if not session.has_candidate(candidate_id):
            raise InvalidCandidateError(candidate_id)

        await uow.sessions.upsert_vote(session.id, member_id, candidate_id, value)
        await uow.commit()

        session.apply_vote(member_id, candidate_id, value)
        session.version += 1

        logger.info(
            "vote_recorded",
            session_id=str(session.id),
            member_id=member_id,
            candidate_id=candidate_id,
            vote=value.value,
        )
        return session

    async def _get_membership(
        self, uow: IUnitOfWork, group_id: UUID, member_id: str
    ) -> Group:
        """Load the group and check the member belongs to it."""
        group = await uow.groups.get(group_id)
        if not group:
            raise GroupNotFoundError(str(group_id))
        if not group.has_member(member_id):
            raise NotAGroupMemberError(str(group_id))
        return group
