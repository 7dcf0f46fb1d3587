"""SQLAlchemy implementation of Group repository."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import GroupNotFoundError
from domain.entities.group import Group
from infrastructure.database.models import GroupModel


class SQLAlchemyGroupRepository:
    """SQLAlchemy implementation of IGroupRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: UUID) -> Group | None:
        model = await self._session.get(GroupModel, id)
        return _to_entity(model) if model else None

    async def get_for_update(self, id: UUID) -> Group | None:
        """Get a group and hold its row lock until the transaction ends."""
        stmt = (
            select(GroupModel)
            .where(GroupModel.id == id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        model = (await self._session.execute(stmt)).scalar_one_or_none()
        return _to_entity(model) if model else None

    async def create(self, group: Group) -> Group:
        model = GroupModel(
            id=group.id,
            name=group.name,
            description=group.description,
            created_by=group.created_by,
            members=list(group.members),
            invite_code=group.invite_code,
            is_active=group.is_active,
            created_at=group.created_at,
            current_session_id=group.current_session_id,
        )
        self._session.add(model)
        await self._session.flush()
        return _to_entity(model)

    async def update(self, group: Group) -> Group:
        """Write back the mutable fields of a group."""
        result = await self._session.execute(
            update(GroupModel)
            .where(GroupModel.id == group.id)
            .values(
                name=group.name,
                description=group.description,
                members=list(group.members),
                is_active=group.is_active,
                current_session_id=group.current_session_id,
            )
        )
        if result.rowcount == 0:
            raise GroupNotFoundError(str(group.id))
        return group


def _to_entity(model: GroupModel) -> Group:
    return Group(
        id=model.id,
        name=model.name,
        description=model.description,
        created_by=model.created_by,
        members=list(model.members),
        invite_code=model.invite_code,
        is_active=model.is_active,
        created_at=model.created_at,
        current_session_id=model.current_session_id,
    )
