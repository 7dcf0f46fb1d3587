"""Unit tests for JWTAuthProvider."""

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import MemberIdentity


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    """Create an HS256-signed JWT with a given payload."""
    return jose_jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestValidateToken:
    async def test_round_trips_member_claims(self, provider: JWTAuthProvider):
        token = provider.create_token(
            MemberIdentity(id="member-1", email="m@example.com", display_name="Mo")
        )

        result = await provider.validate_token(token)

        assert result == MemberIdentity(id="member-1", email="m@example.com", display_name="Mo")

    async def test_email_is_optional(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "member-2", "exp": 9999999999})

        result = await provider.validate_token(token)

        assert result is not None
        assert result.id == "member-2"
        assert result.email is None

    async def test_numeric_sub_becomes_string(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "12345", "exp": 9999999999})

        result = await provider.validate_token(token)

        assert result is not None
        assert result.id == "12345"

    async def test_returns_none_without_sub(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"email": "user@example.com", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_returns_none_for_empty_sub(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "", "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_returns_none_for_wrong_secret(self, provider: JWTAuthProvider):
        token = _make_hs256_token({"sub": "member-3", "exp": 9999999999}, secret="other")

        assert await provider.validate_token(token) is None

    async def test_returns_none_for_garbage(self, provider: JWTAuthProvider):
        assert await provider.validate_token("not-a-jwt") is None


class TestInit:
    def test_stores_configuration(self):
        provider = JWTAuthProvider(secret_key="my-secret", algorithm="HS256", expire_minutes=15)

        assert provider._algorithm == "HS256"
        assert provider._secret_key == "my-secret"
        assert provider._expire_minutes == 15
