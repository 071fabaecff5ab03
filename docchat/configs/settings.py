"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from docchat.configs.auth import AuthSettings
from docchat.configs.base import BaseSettings
from docchat.configs.billing import BillingSettings
from docchat.configs.database import DatabaseSettings
from docchat.configs.pagination import PaginationSettings
from docchat.configs.s3_files import S3FilesSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = DatabaseSettings()
    s3_files: S3FilesSettings = S3FilesSettings()
    auth: AuthSettings = AuthSettings()
    billing: BillingSettings = BillingSettings()
    pagination: PaginationSettings = PaginationSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from docchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
