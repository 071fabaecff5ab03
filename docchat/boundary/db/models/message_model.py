"""
Message ORM model.

Chat messages exchanged about a file. Written by the chat collaborator,
read here through cursor pagination.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Chat message persistence
"""

from sqlalchemy import Boolean, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, StringIDMixin, TimestampMixin


class MessageModel(Base, StringIDMixin, TimestampMixin):
    """
    Message ORM model.

    Attributes:
        id: String primary key (auto-generated)
        text: Message body
        is_user_message: True for user questions, False for assistant replies
        user_id: Owner (always the owner of the file)
        file_id: File the conversation is about

    Constraints:
        file_id: ON DELETE CASCADE to files.id
        ix_messages_file_created: (file_id, created_at, id) for page scans
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_file_created", "file_id", "created_at", "id"),
    )

    text: Mapped[str] = mapped_column(Text, nullable=False)

    is_user_message: Mapped[bool] = mapped_column(Boolean, nullable=False)

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    file_id: Mapped[str] = mapped_column(
        ForeignKey("files.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Relationships
    user = relationship("UserModel", back_populates="messages")
    file = relationship("FileModel", back_populates="messages")
