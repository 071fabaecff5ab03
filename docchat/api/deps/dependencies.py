"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: docchat.configs, docchat.boundary
System role: DI container for collaborator injection
"""

from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.api.rpc.router import ProcedureContext, classify_error
from docchat.boundary.auth.identity_resolver import IdentityResolver
from docchat.boundary.aws.s3_client import FileStorage, S3FileStorage
from docchat.boundary.billing.payment_provider import PaymentProvider
from docchat.boundary.db import get_async_db
from docchat.configs import Settings, get_settings


class ServiceCache:
    """Container for process-wide collaborator instances."""

    def __init__(self):
        self._s3_storage = None
        self._payment_provider = None
        self._identity_resolver = None

    @property
    def s3_storage(self) -> FileStorage:
        """Get cached S3 file storage client."""
        if self._s3_storage is None:
            settings = get_settings()
            self._s3_storage = S3FileStorage(
                bucket=settings.s3_files.bucket,
                region=settings.s3_files.region,
            )
        return self._s3_storage

    @property
    def payment_provider(self) -> PaymentProvider:
        """Get cached Stripe payment provider."""
        if self._payment_provider is None:
            from docchat.boundary.billing.payment_provider import StripePaymentProvider

            billing = get_settings().billing
            self._payment_provider = StripePaymentProvider(
                api_key=billing.stripe_secret_key,
                api_version=billing.stripe_api_version,
            )
        return self._payment_provider

    @property
    def identity_resolver(self) -> IdentityResolver:
        """Get cached JWT identity resolver."""
        if self._identity_resolver is None:
            from docchat.boundary.auth.identity_resolver import JWTIdentityResolver

            auth = get_settings().auth
            self._identity_resolver = JWTIdentityResolver(
                secret=auth.jwt_secret,
                jwks_url=auth.jwks_url,
                issuer=auth.issuer,
                audience=auth.audience,
            )
        return self._identity_resolver

    def clear(self) -> None:
        """Clear all cached instances."""
        self._s3_storage = None
        self._payment_provider = None
        self._identity_resolver = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def _from_cache(attribute: str):
    """
    Fetch a cached collaborator, building it on first use.

    Construction failures (e.g. missing credentials) are raised as classified
    RPC errors so callers still receive the RPC error envelope.
    """
    try:
        return getattr(get_service_cache(), attribute)
    except Exception as e:
        raise classify_error(e, attribute) from e


def get_file_storage() -> FileStorage:
    """Get S3 storage client for the uploaded-files bucket."""
    return _from_cache("s3_storage")


def get_payment_provider() -> PaymentProvider:
    """Get payment provider."""
    return _from_cache("payment_provider")


def get_identity_resolver() -> IdentityResolver:
    """Get identity resolver."""
    return _from_cache("identity_resolver")


def get_session_token(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> str | None:
    """
    Extract the session token from the request.

    A bearer Authorization header wins over the session cookie.

    Returns:
        str | None: Raw token, None when the request carries neither
    """
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(settings.auth.session_cookie) or None


def get_procedure_context(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    storage: FileStorage = Depends(get_file_storage),
    payments: PaymentProvider = Depends(get_payment_provider),
    token: str | None = Depends(get_session_token),
) -> ProcedureContext:
    """
    Build the per-call procedure context.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings
        resolver: Identity resolver
        storage: File storage client
        payments: Payment provider
        token: Caller's session token

    Returns:
        ProcedureContext: Context for a single procedure call
    """
    return ProcedureContext(
        db=db,
        settings=settings,
        resolver=resolver,
        storage=storage,
        payments=payments,
        token=token,
    )
