"""
User ORM model.

Represents an identity-provider user known to the application, plus the
Stripe billing state written by the payment webhook collaborator.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: User persistence and billing state
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from docchat.boundary.db.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """
    User ORM model keyed by the identity provider's subject id.

    Rows are created lazily on the first auth callback. The primary key
    uniqueness makes concurrent first-time callbacks converge on one row.

    Attributes:
        id: Identity-provider subject id (primary key, not generated)
        email: Unique email address
        stripe_customer_id: Stripe customer id once checkout completed
        stripe_subscription_id: Active Stripe subscription id
        stripe_price_id: Price id of the active subscription
        stripe_current_period_end: End of the paid period

    Relationships:
        files: One-to-many with FileModel (cascade delete)
        messages: One-to-many with MessageModel (cascade delete)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    email: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
    )

    stripe_customer_id: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    stripe_subscription_id: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    stripe_price_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    stripe_current_period_end: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    files = relationship(
        "FileModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    messages = relationship(
        "MessageModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
