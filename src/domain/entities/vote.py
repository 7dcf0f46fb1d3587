"""Vote domain entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4


class VoteValue(str, Enum):
    """A member's verdict on a candidate."""

    APPROVE = "approve"
    REJECT = "reject"


# member_id -> candidate_id -> vote
VoteTable = dict[str, dict[str, VoteValue]]


@dataclass
class Vote:
    """Standalone, append-only vote record used by session-less matching."""

    member_id: str
    group_id: UUID
    candidate_id: str
    value: VoteValue
    session_id: UUID | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
