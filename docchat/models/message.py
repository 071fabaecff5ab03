"""
Message domain models and schemas.

Request/response schemas for cursor-paginated chat history.

Dependencies: pydantic
System role: Message API contracts
"""

from datetime import datetime

from pydantic import Field

from docchat.models.common import RPCModel

MAX_PAGE_LIMIT = 100


class FileMessagesInput(RPCModel):
    """Input for getFileMessages."""

    file_id: str
    limit: int | None = Field(
        default=None,
        ge=1,
        le=MAX_PAGE_LIMIT,
        strict=True,
        description="Page size; server default when null",
    )
    cursor: str | None = Field(
        default=None,
        description="Id of the last message of the previous page",
    )


class MessageResponse(RPCModel):
    """Single chat message."""

    id: str
    text: str
    is_user_message: bool
    created_at: datetime


class FileMessagesResponse(RPCModel):
    """One page of messages, newest first."""

    messages: list[MessageResponse]
    next_cursor: str | None = Field(
        default=None,
        description="Pass as cursor to fetch the next page; null on the last page",
    )
