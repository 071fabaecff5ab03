"""
Pagination configuration settings.

Dependencies: pydantic_settings
System role: Defaults for cursor-paginated listings
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Infinite-scroll pagination defaults."""

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    infinite_query_limit: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Messages per page when the caller sends no limit",
    )
