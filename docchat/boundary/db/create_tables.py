"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, docchat.configs
System role: Database schema initialization

Usage:
    python -m docchat.boundary.db.create_tables
"""

import asyncio
import logging

from docchat.boundary.db.base import Base
from docchat.boundary.db.connection import dispose_engine, get_async_engine

# Import all models to register them with Base.metadata
from docchat.boundary.db.models.user_model import UserModel  # noqa: F401
from docchat.boundary.db.models.file_model import FileModel  # noqa: F401
from docchat.boundary.db.models.message_model import MessageModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables created: %s", ", ".join(Base.metadata.tables))


async def _main() -> None:
    try:
        await create_all_tables()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    from docchat.observability.logger import configure_logging

    configure_logging()
    asyncio.run(_main())
