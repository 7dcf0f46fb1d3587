"""Group domain entity."""

import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

INVITE_CODE_LENGTH = 8
_INVITE_ALPHABET = string.ascii_uppercase + string.digits


def generate_invite_code() -> str:
    """Short, human-shareable code used to join a group."""
    return "".join(secrets.choice(_INVITE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


@dataclass
class Group:
    """Domain entity for a group of friends choosing where to eat.

    Membership is managed elsewhere; sessions only read ``members`` and
    maintain ``current_session_id``.
    """

    name: str
    created_by: str
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    members: list[str] = field(default_factory=list)
    invite_code: str = field(default_factory=generate_invite_code)
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
    current_session_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.created_by not in self.members:
            self.members.insert(0, self.created_by)

    def has_member(self, member_id: str) -> bool:
        """Check whether a member belongs to the group."""
        return member_id in self.members
