"""
Test suite for AuthService.

Tests lazy user provisioning, idempotency, and the duplicate-key race.

System role: Verification of auth callback orchestration
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from docchat.application.services.auth_service import AuthService
from docchat.boundary.db.CRUD.user_crud import user_crud
from docchat.boundary.db.models.user_model import UserModel


async def count_users(session) -> int:
    result = await session.execute(select(func.count()).select_from(UserModel))
    return result.scalar_one()


class TestEnsureUser:
    """Test suite for AuthService.ensure_user()."""

    @pytest.mark.asyncio
    async def test_creates_user_on_first_call(self, test_async_db) -> None:
        """Test first callback inserts the user."""
        service = AuthService(db=test_async_db)

        created = await service.ensure_user("kp_1", "a@example.com")

        assert created is True
        user = await user_crud.get_by_id(test_async_db, "kp_1")
        assert user.email == "a@example.com"

    @pytest.mark.asyncio
    async def test_repeated_calls_keep_single_row(self, test_async_db) -> None:
        """Test N callbacks leave exactly one row."""
        service = AuthService(db=test_async_db)

        results = [await service.ensure_user("kp_1", "a@example.com") for _ in range(3)]

        assert results == [True, False, False]
        assert await count_users(test_async_db) == 1

    @pytest.mark.asyncio
    async def test_duplicate_key_race_is_success(self, test_async_db, create_user) -> None:
        """Test a concurrent insert that wins the race is treated as success."""
        # Arrange: row exists, but this call's lookup ran before it was committed
        existing = await create_user("kp_1", email="a@example.com")
        test_async_db.expunge_all()
        lookup = AsyncMock(side_effect=[None, existing])

        # Act
        with patch.object(user_crud, "get_by_id", lookup):
            created = await AuthService(db=test_async_db).ensure_user("kp_1", "a@example.com")

        # Assert
        assert created is False
        assert lookup.await_count == 2
        assert await count_users(test_async_db) == 1

    @pytest.mark.asyncio
    async def test_conflict_for_other_user_propagates(self, test_async_db, create_user) -> None:
        """Test an email conflict with a different id is not swallowed."""
        # Arrange
        await create_user("kp_other", email="a@example.com")
        test_async_db.expunge_all()

        # Act / Assert
        with pytest.raises(IntegrityError):
            await AuthService(db=test_async_db).ensure_user("kp_1", "a@example.com")
