"""JWT authentication provider implementation.

Tokens are issued by the external account service and signed with a shared
secret. Expected payload:
    {
        "sub": "member-id",
        "email": "member@example.com",
        "name": "Alice",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from core.config import settings
from infrastructure.auth.provider import MemberIdentity

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[MemberIdentity]:
        """
        Validate a JWT token and extract the member.

        Args:
            token: The JWT to validate

        Returns:
            MemberIdentity if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.debug("Rejected token: %s", e)
            return None

        member_id = payload.get("sub")
        if not member_id:
            return None

        return MemberIdentity(
            id=str(member_id),
            email=payload.get("email"),
            display_name=payload.get("name"),
        )

    def create_token(self, member: MemberIdentity) -> str:
        """
        Create a JWT token for a member (used by tests and local tooling).

        Args:
            member: The member to create a token for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": member.id,
            "email": member.email,
            "name": member.display_name,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
