"""
Database models package.

Exports:
  - UserModel: User ORM model
  - FileModel, UploadStatus: File ORM model and status enum
  - MessageModel: Chat message ORM model

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Database model definitions for domain entities
"""

from docchat.boundary.db.models.user_model import UserModel
from docchat.boundary.db.models.file_model import FileModel, UploadStatus
from docchat.boundary.db.models.message_model import MessageModel

__all__ = [
    "UserModel",
    "FileModel",
    "UploadStatus",
    "MessageModel",
]
