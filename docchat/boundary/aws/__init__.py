"""
AWS boundary modules.

Exports: FileStorage, S3FileStorage
"""

from .s3_client import FileStorage, S3FileStorage

__all__ = ["FileStorage", "S3FileStorage"]
