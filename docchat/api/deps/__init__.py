"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_file_storage,
    get_identity_resolver,
    get_payment_provider,
    get_procedure_context,
    get_service_cache,
    get_session_token,
    get_settings_dependency,
)

__all__ = [
    "get_file_storage",
    "get_identity_resolver",
    "get_payment_provider",
    "get_procedure_context",
    "get_service_cache",
    "get_session_token",
    "get_settings_dependency",
]
