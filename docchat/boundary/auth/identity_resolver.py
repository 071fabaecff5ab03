"""
Identity resolution from session tokens.

Maps an opaque session token issued by the identity provider to a stable
user identity. Session management itself stays with the provider.

Dependencies: PyJWT
System role: Identity provider collaborator
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import jwt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Resolved caller identity; either field may be missing from the token."""

    id: str | None
    email: str | None


class IdentityResolver(ABC):
    """Abstract identity resolver interface."""

    @abstractmethod
    async def resolve_identity(self, token: str | None) -> Identity | None:
        """
        Resolve a session token to an identity.

        Args:
            token: Raw session token, None when the caller sent none

        Returns:
            Identity if the token is valid, None otherwise
        """
        pass


class JWTIdentityResolver(IdentityResolver):
    """
    Verifies identity-provider JWTs.

    Uses an HS256 shared secret when configured, otherwise RS256 keys from
    the provider's JWKS endpoint. Issuer and audience are checked only when
    configured.
    """

    def __init__(
        self,
        secret: str | None = None,
        jwks_url: str | None = None,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        """
        Initialize resolver.

        Args:
            secret: HS256 shared secret
            jwks_url: JWKS endpoint for RS256 tokens
            issuer: Expected "iss" claim
            audience: Expected "aud" claim

        Raises:
            ValueError: If neither secret nor jwks_url is given
        """
        if not secret and not jwks_url:
            raise ValueError("Either a JWT secret or a JWKS URL must be configured")
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._jwks_client = jwt.PyJWKClient(jwks_url) if jwks_url and not secret else None

    async def _signing_key(self, token: str):
        if self._jwks_client is None:
            return self._secret, ["HS256"]
        signing_key = await asyncio.to_thread(
            self._jwks_client.get_signing_key_from_jwt, token
        )
        return signing_key.key, ["RS256"]

    async def resolve_identity(self, token: str | None) -> Identity | None:
        """Verify the token and read the subject and email claims."""
        if not token:
            return None

        try:
            key, algorithms = await self._signing_key(token)
            payload = jwt.decode(
                token,
                key,
                algorithms=algorithms,
                issuer=self._issuer,
                audience=self._audience,
                options={
                    "verify_iss": self._issuer is not None,
                    "verify_aud": self._audience is not None,
                },
            )
        except jwt.PyJWKClientError as e:
            logger.warning(f"Unable to fetch signing key: {e}")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Rejected session token: {e}")
            return None

        return Identity(id=payload.get("sub"), email=payload.get("email"))
