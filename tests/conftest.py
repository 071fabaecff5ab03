"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, seeded users/files/messages,
collaborator mocks, settings
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from docchat.boundary.auth.identity_resolver import Identity, IdentityResolver
from docchat.boundary.aws.s3_client import FileStorage
from docchat.boundary.billing.payment_provider import PaymentProvider, ProviderSubscription
from docchat.configs.auth import AuthSettings
from docchat.configs.billing import BillingSettings
from docchat.configs.pagination import PaginationSettings
from docchat.configs.settings import Settings

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool
    from docchat.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_settings() -> Settings:
    """Provide settings with billing and pagination values fixed for tests."""
    return Settings(
        environment="development",
        app_url="https://docchat.test",
        auth=AuthSettings(jwt_secret="test-secret"),
        billing=BillingSettings(
            stripe_secret_key="sk_test_123",
            pro_price_id_test="price_pro_test",
            pro_price_id_production="price_pro_live",
        ),
        pagination=PaginationSettings(infinite_query_limit=10),
    )


@pytest.fixture
def create_user(test_async_db):
    """Factory inserting a user row."""
    from docchat.boundary.db.models.user_model import UserModel

    async def _create(user_id: str = "user-1", email: str | None = None, **fields) -> UserModel:
        user = UserModel(id=user_id, email=email or f"{user_id}@example.com", **fields)
        test_async_db.add(user)
        await test_async_db.commit()
        return user

    return _create


@pytest.fixture
def create_file(test_async_db):
    """Factory inserting a file row."""
    from docchat.boundary.db.models.file_model import FileModel, UploadStatus

    async def _create(
        user_id: str,
        key: str,
        created_at: datetime = BASE_TIME,
        upload_status: UploadStatus = UploadStatus.SUCCESS,
        **fields,
    ) -> FileModel:
        file = FileModel(
            name=fields.pop("name", f"{key}.pdf"),
            url=fields.pop("url", f"https://files.example.com/{key}"),
            key=key,
            upload_status=upload_status,
            user_id=user_id,
            created_at=created_at,
            updated_at=created_at,
            **fields,
        )
        test_async_db.add(file)
        await test_async_db.commit()
        return file

    return _create


@pytest.fixture
def create_message(test_async_db):
    """Factory inserting a message row."""
    from docchat.boundary.db.models.message_model import MessageModel

    async def _create(
        file_id: str,
        user_id: str,
        created_at: datetime,
        message_id: str | None = None,
        text: str = "hello",
        is_user_message: bool = True,
    ) -> MessageModel:
        kwargs = {"id": message_id} if message_id else {}
        message = MessageModel(
            text=text,
            is_user_message=is_user_message,
            user_id=user_id,
            file_id=file_id,
            created_at=created_at,
            updated_at=created_at,
            **kwargs,
        )
        test_async_db.add(message)
        await test_async_db.commit()
        return message

    return _create


@pytest.fixture
def minutes():
    """Timestamp helper: BASE_TIME shifted by n minutes."""

    def _at(n: int) -> datetime:
        return BASE_TIME + timedelta(minutes=n)

    return _at


@pytest.fixture
def mock_storage() -> AsyncMock:
    """Provide mock FileStorage."""
    storage = AsyncMock(spec=FileStorage)
    storage.delete_file = AsyncMock(return_value=None)
    return storage


@pytest.fixture
def mock_payments() -> AsyncMock:
    """Provide mock PaymentProvider returning fixed URLs."""
    payments = AsyncMock(spec=PaymentProvider)
    payments.create_billing_portal_session = AsyncMock(
        return_value="https://billing.stripe.test/portal"
    )
    payments.create_checkout_session = AsyncMock(
        return_value="https://checkout.stripe.test/session"
    )
    payments.retrieve_subscription = AsyncMock(
        return_value=ProviderSubscription(
            id="sub_123", status="active", cancel_at_period_end=False
        )
    )
    return payments


@pytest.fixture
def mock_resolver() -> MagicMock:
    """Provide identity resolver mock resolving to user-1."""
    resolver = MagicMock(spec=IdentityResolver)
    resolver.resolve_identity = AsyncMock(
        return_value=Identity(id="user-1", email="user-1@example.com")
    )
    return resolver
