"""
Message CRUD operations.

Implements keyset pagination over a file's messages. Rows are ordered by
(created_at DESC, id DESC); the id makes the order total so a cursor
always resumes at one unambiguous position.

Dependencies: sqlalchemy, docchat.boundary.db.models.message_model
System role: Ownership-scoped message reads
"""

from typing import Sequence

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.message_model import MessageModel


class MessageCRUD(BaseCRUD[MessageModel]):
    """
    CRUD operations for MessageModel.

    Extends BaseCRUD with owner- and file-scoped lookups and page fetches.
    """

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def get_owned_in_file(
        self,
        session: AsyncSession,
        id: str,
        file_id: str,
        user_id: str,
    ) -> MessageModel | None:
        """
        Retrieve a message by id within a file owned by the user.

        Args:
            session: Async database session
            id: Message id
            file_id: File the message must belong to
            user_id: Caller's user id

        Returns:
            MessageModel if it matches all three filters, None otherwise
        """
        stmt = select(MessageModel).where(
            MessageModel.id == id,
            MessageModel.file_id == file_id,
            MessageModel.user_id == user_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_page(
        self,
        session: AsyncSession,
        file_id: str,
        user_id: str,
        take: int,
        after: MessageModel | None = None,
    ) -> Sequence[MessageModel]:
        """
        Fetch up to `take` messages, newest first.

        Args:
            session: Async database session
            file_id: File whose messages to read
            user_id: Caller's user id
            take: Maximum number of rows
            after: Exclusive cursor row; results start strictly after it

        Returns:
            Sequence of MessageModels ordered by (created_at, id) descending
        """
        stmt = select(MessageModel).where(
            MessageModel.file_id == file_id,
            MessageModel.user_id == user_id,
        )
        if after is not None:
            stmt = stmt.where(
                or_(
                    MessageModel.created_at < after.created_at,
                    and_(
                        MessageModel.created_at == after.created_at,
                        MessageModel.id < after.id,
                    ),
                )
            )
        stmt = stmt.order_by(
            MessageModel.created_at.desc(),
            MessageModel.id.desc(),
        ).limit(take)
        result = await session.execute(stmt)
        return result.scalars().all()


message_crud = MessageCRUD()
