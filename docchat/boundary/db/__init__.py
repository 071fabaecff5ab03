"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, StringIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - UserModel, FileModel, MessageModel: Core domain entities
  - UploadStatus: File processing state enum
  - user_crud, file_crud, message_crud: CRUD operation singletons

Dependencies: sqlalchemy, docchat.configs
System role: Database adapter providing ownership-scoped persistent storage
for users, files, and chat messages.
"""

from docchat.boundary.db.base import Base, StringIDMixin, TimestampMixin
from docchat.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docchat.boundary.db.models.user_model import UserModel
from docchat.boundary.db.models.file_model import FileModel, UploadStatus
from docchat.boundary.db.models.message_model import MessageModel
from docchat.boundary.db.CRUD import (
    BaseCRUD,
    FileCRUD,
    MessageCRUD,
    UserCRUD,
    file_crud,
    message_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "StringIDMixin",
    "TimestampMixin",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "UserModel",
    "FileModel",
    "UploadStatus",
    "MessageModel",
    # CRUD classes
    "BaseCRUD",
    "UserCRUD",
    "FileCRUD",
    "MessageCRUD",
    # CRUD singletons
    "user_crud",
    "file_crud",
    "message_crud",
]
