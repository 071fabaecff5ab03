"""
File ORM model.

Represents an uploaded file and its processing state. Rows are written by
the upload-completion collaborator; this service reads and deletes them.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: File persistence for ownership-scoped access
"""

import enum

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, StringIDMixin, TimestampMixin


class UploadStatus(str, enum.Enum):
    """
    File processing lifecycle states.

    PENDING: Upload registered, processing not started
    PROCESSING: Content extraction and indexing in progress
    SUCCESS: Ready for chat
    FAILED: Processing failed
    """

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class FileModel(Base, StringIDMixin, TimestampMixin):
    """
    File ORM model.

    Attributes:
        id: String primary key (auto-generated)
        name: Original filename
        url: Public URL of the stored object
        key: Storage object key (unique)
        upload_status: Current processing state
        user_id: Owning user

    Relationships:
        user: Owning UserModel
        messages: Chat messages about this file (cascade delete)
    """

    __tablename__ = "files"

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    url: Mapped[str] = mapped_column(Text, nullable=False)

    key: Mapped[str] = mapped_column(
        String(1024),
        unique=True,
        nullable=False,
        doc="Storage object key",
    )

    upload_status: Mapped[UploadStatus] = mapped_column(
        Enum(UploadStatus, native_enum=False),
        nullable=False,
        default=UploadStatus.PENDING,
    )

    user_id: Mapped[str] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Relationships
    user = relationship("UserModel", back_populates="files")
    messages = relationship(
        "MessageModel",
        back_populates="file",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
