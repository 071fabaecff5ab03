"""
S3 client for the uploaded-files bucket.

Releases storage objects when their file rows are deleted. Uploads are
handled elsewhere.

Dependencies: boto3
System role: File storage collaborator
"""

import asyncio
import logging
from abc import ABC, abstractmethod

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from docchat.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class FileStorage(ABC):
    """Abstract file storage interface."""

    @abstractmethod
    async def delete_file(self, key: str) -> None:
        """Release the stored object for a deleted file.

        Args:
            key: Storage key of the object

        Raises:
            StorageError: If the object cannot be released
        """
        pass


class S3FileStorage(FileStorage):
    """S3 implementation of file storage (object deletion)."""

    def __init__(self, bucket: str, region: str = "us-east-1") -> None:
        """
        Initialize S3 client for file bucket.

        Args:
            bucket: S3 bucket name for file storage
            region: AWS region for S3 bucket
        """
        self._bucket = bucket
        self._region = region
        self._s3_client = boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        """Bucket this client operates on."""
        return self._bucket

    async def delete_file(self, key: str) -> None:
        """
        Delete the object stored under key.

        S3 treats deleting a missing key as success, so repeated calls are safe.

        Args:
            key: S3 object key

        Raises:
            StorageError: If S3 rejects or fails the request
        """
        try:
            await asyncio.to_thread(
                self._s3_client.delete_object,
                Bucket=self._bucket,
                Key=key,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to delete storage object: {e}",
                key=key,
                details={"bucket": self._bucket},
            ) from e

        logger.info(
            "Storage object deleted",
            extra={"bucket": self._bucket, "key": key},
        )
