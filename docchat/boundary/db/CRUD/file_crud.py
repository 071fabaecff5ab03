"""
File CRUD operations.

Every query takes the caller's user id so that files owned by someone
else behave exactly like missing files.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Ownership-scoped file persistence operations
"""

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.file_model import FileModel
from docchat.boundary.db.models.message_model import MessageModel


class FileCRUD(BaseCRUD[FileModel]):
    """
    CRUD operations for FileModel.

    Extends BaseCRUD with owner-scoped lookups by id and storage key,
    listing with derived message counts, and scoped deletion.
    """

    def __init__(self) -> None:
        """Initialize FileCRUD with FileModel."""
        super().__init__(FileModel)

    async def get_owned_by_id(
        self,
        session: AsyncSession,
        id: str,
        user_id: str,
    ) -> FileModel | None:
        """
        Retrieve a file by id if it belongs to the user.

        Args:
            session: Async database session
            id: File id
            user_id: Caller's user id

        Returns:
            FileModel if found and owned, None otherwise
        """
        stmt = select(FileModel).where(
            FileModel.id == id,
            FileModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned_by_key(
        self,
        session: AsyncSession,
        key: str,
        user_id: str,
    ) -> FileModel | None:
        """
        Retrieve a file by storage key if it belongs to the user.

        Args:
            session: Async database session
            key: Storage object key
            user_id: Caller's user id

        Returns:
            FileModel if found and owned, None otherwise
        """
        stmt = select(FileModel).where(
            FileModel.key == key,
            FileModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_with_message_counts(
        self,
        session: AsyncSession,
        user_id: str,
    ) -> list[tuple[FileModel, int]]:
        """
        List all files of a user with the number of messages on each.

        Counts come from a LEFT JOIN so files without messages report 0.

        Args:
            session: Async database session
            user_id: Caller's user id

        Returns:
            list of (FileModel, message_count), newest file first
        """
        message_count = func.count(MessageModel.id).label("message_count")
        stmt = (
            select(FileModel, message_count)
            .outerjoin(MessageModel, MessageModel.file_id == FileModel.id)
            .where(FileModel.user_id == user_id)
            .group_by(FileModel.id)
            .order_by(FileModel.created_at.desc(), FileModel.id.desc())
        )
        result = await session.execute(stmt)
        return [(file, count) for file, count in result.all()]

    async def delete_owned(
        self,
        session: AsyncSession,
        id: str,
        user_id: str,
    ) -> bool:
        """
        Delete a file row if it belongs to the user.

        Args:
            session: Async database session
            id: File id
            user_id: Caller's user id

        Returns:
            True if a row was deleted, False otherwise
        """
        stmt = delete(FileModel).where(
            FileModel.id == id,
            FileModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


file_crud = FileCRUD()
