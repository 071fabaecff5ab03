"""
Test suite for MessageCRUD keyset pagination.

Verifies (created_at DESC, id DESC) ordering, exclusive cursors, and
ownership filters against in-memory SQLite.

System role: Verification of message persistence layer
"""

import pytest

from docchat.boundary.db.CRUD.message_crud import message_crud


@pytest.fixture
async def chat(test_async_db, create_user, create_file):
    """Seed user-1 with one file and user-2 with another."""
    await create_user("user-1")
    await create_user("user-2")
    own = await create_file("user-1", key="own")
    foreign = await create_file("user-2", key="foreign")
    return own, foreign


class TestMessageCRUDGetPage:
    """Test suite for MessageCRUD.get_page()."""

    @pytest.mark.asyncio
    async def test_get_page_orders_newest_first(
        self, test_async_db, chat, create_message, minutes
    ) -> None:
        """Test messages come back newest first and limited to take."""
        # Arrange
        own, _ = chat
        for n in range(4):
            await create_message(own.id, "user-1", minutes(n), message_id=f"m{n}")

        # Act
        page = await message_crud.get_page(test_async_db, own.id, "user-1", take=3)

        # Assert
        assert [m.id for m in page] == ["m3", "m2", "m1"]

    @pytest.mark.asyncio
    async def test_get_page_breaks_timestamp_ties_by_id(
        self, test_async_db, chat, create_message, minutes
    ) -> None:
        """Test equal created_at values are ordered by id descending."""
        # Arrange
        own, _ = chat
        for message_id in ("a", "c", "b"):
            await create_message(own.id, "user-1", minutes(0), message_id=message_id)

        # Act
        page = await message_crud.get_page(test_async_db, own.id, "user-1", take=10)

        # Assert
        assert [m.id for m in page] == ["c", "b", "a"]

    @pytest.mark.asyncio
    async def test_get_page_after_cursor_is_exclusive(
        self, test_async_db, chat, create_message, minutes
    ) -> None:
        """Test the cursor row itself is not repeated, including on ties."""
        # Arrange
        own, _ = chat
        await create_message(own.id, "user-1", minutes(1), message_id="x")
        await create_message(own.id, "user-1", minutes(0), message_id="b")
        await create_message(own.id, "user-1", minutes(0), message_id="a")
        cursor = await message_crud.get_owned_in_file(test_async_db, "b", own.id, "user-1")

        # Act
        page = await message_crud.get_page(
            test_async_db, own.id, "user-1", take=10, after=cursor
        )

        # Assert
        assert [m.id for m in page] == ["a"]

    @pytest.mark.asyncio
    async def test_get_page_excludes_other_files(
        self, test_async_db, chat, create_message, minutes
    ) -> None:
        """Test messages of other files never leak into a page."""
        # Arrange
        own, foreign = chat
        await create_message(own.id, "user-1", minutes(0), message_id="mine")
        await create_message(foreign.id, "user-2", minutes(1), message_id="theirs")

        # Act
        page = await message_crud.get_page(test_async_db, own.id, "user-1", take=10)

        # Assert
        assert [m.id for m in page] == ["mine"]


class TestMessageCRUDGetOwnedInFile:
    """Test suite for MessageCRUD.get_owned_in_file()."""

    @pytest.mark.asyncio
    async def test_cursor_lookup_requires_matching_file_and_owner(
        self, test_async_db, chat, create_message, minutes
    ) -> None:
        """Test cursor rows are scoped to both file and owner."""
        # Arrange
        own, foreign = chat
        await create_message(foreign.id, "user-2", minutes(0), message_id="theirs")

        # Act / Assert
        assert await message_crud.get_owned_in_file(test_async_db, "theirs", own.id, "user-1") is None
        assert await message_crud.get_owned_in_file(test_async_db, "theirs", foreign.id, "user-1") is None
        assert await message_crud.get_owned_in_file(test_async_db, "theirs", foreign.id, "user-2") is not None
