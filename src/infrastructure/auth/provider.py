"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Protocol


@dataclass
class MemberIdentity:
    """Who is calling, as asserted by a verified bearer token.

    ``id`` is the token subject. It is the member id stored in group
    membership lists and vote tables.
    """

    id: str
    email: str | None = None
    display_name: str | None = None


class IAuthProvider(Protocol):
    """Verifies bearer tokens issued by the account service."""

    async def validate_token(self, token: str) -> MemberIdentity | None:
        """Return the identity for a valid token, None otherwise."""
        ...

    def create_token(self, member: MemberIdentity) -> str:
        """Issue a token for local tooling and tests."""
        ...
