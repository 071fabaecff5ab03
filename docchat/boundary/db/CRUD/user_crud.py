"""
User CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models.user_model
System role: User persistence operations
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.user_model import UserModel


class UserCRUD(BaseCRUD[UserModel]):
    """CRUD operations for UserModel (lookup and lazy creation by id)."""

    def __init__(self) -> None:
        """Initialize UserCRUD with UserModel."""
        super().__init__(UserModel)


user_crud = UserCRUD()
