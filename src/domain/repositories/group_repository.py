"""Group repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.group import Group


class IGroupRepository(Protocol):
    """Read access to groups plus the fields sessions maintain on them."""

    async def get(self, id: UUID) -> Group | None: ...

    async def get_for_update(self, id: UUID) -> Group | None:
        """Like ``get``, but serializes writers on the group until commit."""
        ...

    async def create(self, group: Group) -> Group: ...

    async def update(self, group: Group) -> Group:
        """Persist ``current_session_id`` and other mutable fields."""
        ...
