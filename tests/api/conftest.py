"""
API test fixtures.

Builds the app with collaborators replaced through dependency_overrides.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from docchat.api.deps.dependencies import (
    get_file_storage,
    get_identity_resolver,
    get_payment_provider,
    get_settings_dependency,
)
from docchat.api.main import create_app
from docchat.boundary.db import get_async_db


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """Provide mock async database session."""
    return AsyncMock()


@pytest.fixture
def client(mock_db_session, mock_resolver, mock_storage, mock_payments, test_settings):
    app = create_app()

    async def override_db():
        yield mock_db_session

    app.dependency_overrides[get_async_db] = override_db
    app.dependency_overrides[get_identity_resolver] = lambda: mock_resolver
    app.dependency_overrides[get_file_storage] = lambda: mock_storage
    app.dependency_overrides[get_payment_provider] = lambda: mock_payments
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    return TestClient(app)
