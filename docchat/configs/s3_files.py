"""
S3 files bucket configuration.

Settings for the bucket holding uploaded user files.

Dependencies: pydantic_settings
System role: S3 file storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3FilesSettings(BaseSettings):
    """Settings for S3 file bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_FILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="docchat-dev-files",
        description="S3 bucket for uploaded files",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
