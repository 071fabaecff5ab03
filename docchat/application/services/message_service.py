"""
Message service orchestrator.

Cursor-paginated chat history for a file.

Dependencies: docchat.boundary.db.CRUD
System role: Chat history reads
"""

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.file_crud import file_crud
from docchat.boundary.db.CRUD.message_crud import message_crud
from docchat.core.exceptions import ErrorCode, RPCError
from docchat.models.message import FileMessagesResponse, MessageResponse


class MessageService:
    """Message service orchestrator."""

    def __init__(self, db: AsyncSession, default_limit: int) -> None:
        """
        Initialize message service.

        Args:
            db: Async SQLAlchemy session
            default_limit: Page size used when the caller sends none
        """
        self.db = db
        self.default_limit = default_limit

    async def get_file_messages(
        self,
        user_id: str,
        file_id: str,
        limit: int | None = None,
        cursor: str | None = None,
    ) -> FileMessagesResponse:
        """
        Get one page of a file's messages, newest first.

        Fetches limit + 1 rows; the extra row only signals that another page
        exists and is not returned. next_cursor is the id of the last message
        returned, and the cursor is exclusive, so feeding it back yields the
        following page without overlap. An unknown cursor starts from the top.

        Args:
            user_id: Caller's user id
            file_id: File id
            limit: Page size (1-100); default_limit when None
            cursor: Id of the last message already seen

        Returns:
            FileMessagesResponse: Messages and next_cursor (None on last page)

        Raises:
            RPCError(NOT_FOUND): If the user owns no file with that id
        """
        file = await file_crud.get_owned_by_id(self.db, file_id, user_id)
        if file is None:
            raise RPCError(ErrorCode.NOT_FOUND)

        page_size = limit if limit is not None else self.default_limit

        after = None
        if cursor:
            after = await message_crud.get_owned_in_file(self.db, cursor, file_id, user_id)

        rows = list(
            await message_crud.get_page(
                self.db,
                file_id=file_id,
                user_id=user_id,
                take=page_size + 1,
                after=after,
            )
        )

        next_cursor = None
        if len(rows) > page_size:
            rows = rows[:page_size]
            next_cursor = rows[-1].id

        return FileMessagesResponse(
            messages=[
                MessageResponse(
                    id=message.id,
                    text=message.text,
                    is_user_message=message.is_user_message,
                    created_at=message.created_at,
                )
                for message in rows
            ],
            next_cursor=next_cursor,
        )
