"""
Authentication configuration settings.

Settings for verifying identity-provider session tokens.
Either a shared HS256 secret or a JWKS URL must be configured.

Dependencies: pydantic_settings
System role: Identity resolver configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Identity provider token verification settings."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    jwt_secret: str | None = Field(
        default=None,
        description="Shared secret for HS256 session tokens",
    )
    jwks_url: str | None = Field(
        default=None,
        description="JWKS endpoint of the identity provider (RS256 tokens)",
    )
    issuer: str | None = Field(default=None, description="Expected token issuer")
    audience: str | None = Field(default=None, description="Expected token audience")
    session_cookie: str = Field(
        default="session",
        description="Cookie holding the session token when no bearer header is sent",
    )
