"""
Test suite for JWTIdentityResolver.

Tokens are signed locally with an HS256 secret.

System role: Verification of session token verification
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import pytest

from docchat.boundary.auth.identity_resolver import Identity, JWTIdentityResolver

SECRET = "test-secret-with-enough-length-for-hs256"


def make_token(secret: str = SECRET, **claims) -> str:
    payload = {
        "sub": "kp_123",
        "email": "user@example.com",
        "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
    }
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestJWTIdentityResolver:
    """Test suite for JWTIdentityResolver.resolve_identity()."""

    def test_requires_secret_or_jwks_url(self) -> None:
        with pytest.raises(ValueError):
            JWTIdentityResolver()

    @pytest.mark.asyncio
    async def test_valid_token_resolves_identity(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        identity = await resolver.resolve_identity(make_token())

        assert identity == Identity(id="kp_123", email="user@example.com")

    @pytest.mark.asyncio
    async def test_missing_token_resolves_to_none(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        assert await resolver.resolve_identity(None) is None
        assert await resolver.resolve_identity("") is None

    @pytest.mark.asyncio
    async def test_wrong_signature_resolves_to_none(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        token = make_token(secret="another-secret-with-enough-length-too")

        assert await resolver.resolve_identity(token) is None

    @pytest.mark.asyncio
    async def test_expired_token_resolves_to_none(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        token = make_token(exp=datetime.now(timezone.utc) - timedelta(minutes=1))

        assert await resolver.resolve_identity(token) is None

    @pytest.mark.asyncio
    async def test_garbage_token_resolves_to_none(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        assert await resolver.resolve_identity("not-a-jwt") is None

    @pytest.mark.asyncio
    async def test_audience_enforced_when_configured(self) -> None:
        """Test aud is checked only when an audience is configured."""
        strict = JWTIdentityResolver(secret=SECRET, audience="docchat")

        assert await strict.resolve_identity(make_token(aud="other")) is None
        assert await strict.resolve_identity(make_token(aud="docchat")) is not None

    @pytest.mark.asyncio
    async def test_token_without_email_keeps_id(self) -> None:
        resolver = JWTIdentityResolver(secret=SECRET)

        token = jwt.encode({"sub": "kp_9"}, SECRET, algorithm="HS256")

        assert await resolver.resolve_identity(token) == Identity(id="kp_9", email=None)

    @pytest.mark.asyncio
    async def test_jwks_key_fetch_failure_resolves_to_none(self) -> None:
        """Test JWKS errors are reported as unresolvable identity."""
        resolver = JWTIdentityResolver(jwks_url="https://id.example.com/.well-known/jwks.json")
        resolver._jwks_client = MagicMock()
        resolver._jwks_client.get_signing_key_from_jwt.side_effect = jwt.PyJWKClientError("unreachable")

        assert await resolver.resolve_identity(make_token()) is None
