"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from docchat.boundary.db.CRUD import file_crud, message_crud, user_crud

    # Use singleton instances
    file = await file_crud.get_owned_by_id(db, file_id, user_id)
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.CRUD.user_crud import UserCRUD, user_crud
from docchat.boundary.db.CRUD.file_crud import FileCRUD, file_crud
from docchat.boundary.db.CRUD.message_crud import MessageCRUD, message_crud

__all__ = [
    "BaseCRUD",
    "UserCRUD",
    "user_crud",
    "FileCRUD",
    "file_crud",
    "MessageCRUD",
    "message_crud",
]
