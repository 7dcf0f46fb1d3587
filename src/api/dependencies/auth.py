"""Authentication dependencies for FastAPI."""

from functools import lru_cache
from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import MemberIdentity

logger = structlog.get_logger()

# Security scheme for OpenAPI docs
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def get_auth_provider() -> JWTAuthProvider:
    """Shared token verifier built from settings."""
    return JWTAuthProvider()


async def get_current_member(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> MemberIdentity:
    """Resolve the calling member from the bearer token.

    Raises:
        AuthenticationError: If no token is sent or it does not verify
    """
    if credentials is None:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )

    member = await auth_provider.validate_token(credentials.credentials)
    if member is None:
        logger.info("token_rejected")
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    return member


CurrentMember = Annotated[MemberIdentity, Depends(get_current_member)]
