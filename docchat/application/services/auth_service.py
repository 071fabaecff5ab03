"""
Auth service orchestrator.

Registers identity-provider users in the local database on first login.

Dependencies: sqlalchemy, docchat.boundary.db.CRUD
System role: Lazy user provisioning
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.user_crud import user_crud

logger = logging.getLogger(__name__)


class AuthService:
    """Auth service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def ensure_user(self, user_id: str, email: str) -> bool:
        """
        Create the user row if it does not exist yet.

        Lookup and insert are not atomic; two first-time callbacks for the
        same identity can both miss the lookup. The primary key rejects the
        second insert and that rejection is treated as success.

        Args:
            user_id: Identity-provider subject id
            email: User email

        Returns:
            bool: True if this call created the row

        Raises:
            IntegrityError: If the insert conflicts for another reason
                (e.g. the email belongs to a different user id)
        """
        if await user_crud.get_by_id(self.db, user_id) is not None:
            return False

        try:
            await user_crud.create(self.db, id=user_id, email=email)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if await user_crud.get_by_id(self.db, user_id) is None:
                raise
            logger.info(
                "User created by a concurrent callback",
                extra={"user_id": user_id},
            )
            return False

        logger.info("User registered", extra={"user_id": user_id})
        return True
