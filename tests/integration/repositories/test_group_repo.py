"""Integration tests for the group repository."""

from uuid import uuid4

import pytest

from domain.entities.group import Group


class TestGroupRepository:
    @pytest.mark.asyncio
    async def test_get_returns_members_and_invite_code(self, uow_factory, group: Group):
        async with uow_factory() as uow:
            loaded = await uow.groups.get(group.id)

        assert loaded is not None
        assert loaded.members == ["member-alice", "member-bob"]
        assert len(loaded.invite_code) == 8
        assert loaded.current_session_id is None

    @pytest.mark.asyncio
    async def test_update_sets_current_session(self, uow_factory, group: Group):
        session_id = uuid4()
        group.current_session_id = session_id

        async with uow_factory() as uow:
            await uow.groups.update(group)
            await uow.commit()

        async with uow_factory() as uow:
            loaded = await uow.groups.get(group.id)

        assert loaded is not None
        assert loaded.current_session_id == session_id

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, uow_factory):
        async with uow_factory() as uow:
            assert await uow.groups.get(uuid4()) is None

    @pytest.mark.asyncio
    async def test_get_for_update_loads_group(self, uow_factory, group: Group):
        async with uow_factory() as uow:
            locked = await uow.groups.get_for_update(group.id)
            missing = await uow.groups.get_for_update(uuid4())

        assert locked is not None
        assert locked.id == group.id
        assert locked.members == ["member-alice", "member-bob"]
        assert missing is None
