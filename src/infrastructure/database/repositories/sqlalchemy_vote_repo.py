"""SQLAlchemy implementation of Vote repository."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.vote import Vote, VoteValue
from infrastructure.database.models import VoteModel


class SQLAlchemyVoteRepository:
    """SQLAlchemy implementation of IVoteRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, vote: Vote) -> Vote:
        """Append a vote."""
        model = self._to_model(vote)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def get_for_group(
        self, group_id: UUID, session_id: UUID | None = None
    ) -> list[Vote]:
        """Get a group's votes oldest first, optionally for one session."""
        stmt = select(VoteModel).where(VoteModel.group_id == group_id)
        if session_id is not None:
            stmt = stmt.where(VoteModel.session_id == session_id)
        stmt = stmt.order_by(VoteModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: VoteModel) -> Vote:
        """Convert ORM model to domain entity."""
        return Vote(
            id=model.id,
            group_id=model.group_id,
            session_id=model.session_id,
            member_id=model.member_id,
            candidate_id=model.candidate_id,
            value=VoteValue(model.value),
            created_at=model.created_at,
        )

    def _to_model(self, entity: Vote) -> VoteModel:
        """Convert domain entity to ORM model."""
        return VoteModel(
            id=entity.id,
            group_id=entity.group_id,
            session_id=entity.session_id,
            member_id=entity.member_id,
            candidate_id=entity.candidate_id,
            value=entity.value.value,
            created_at=entity.created_at,
        )
