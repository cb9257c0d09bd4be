"""
Task Board Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   The pymongo collections are replaced by MagicMock objects whose
       coroutine methods are AsyncMocks, so no database is needed.

Fixture Hierarchy (all function-scoped):
    ├── mock_store: MongoStore stand-in with `users` and `tasks` collections
    ├── test_app: fresh FastAPI app with get_store overridden to mock_store
    └── test_client: HTTPX AsyncClient routed into test_app
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017/?serverSelectionTimeoutMS=100"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from app.database import get_store


def make_collection() -> MagicMock:
    """A collection whose awaitable methods are AsyncMocks."""
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    return collection


def make_cursor(docs) -> MagicMock:
    """A find() cursor supporting .sort().limit().to_list()."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(docs))
    return cursor


@pytest.fixture
def mock_store():
    """
    Provides a connected-looking MongoStore stand-in.

    Usage:
        async def test_get_task(mock_store):
            mock_store.tasks.find_one.return_value = {...}
    """
    store = MagicMock()
    store.is_connected = True
    store.users = make_collection()
    store.tasks = make_collection()
    store.ping = AsyncMock(return_value=True)
    return store


@pytest.fixture
def sample_task():
    """A stored task document as the driver would return it."""
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    return {
        "_id": ObjectId("65f1c0ffee0ddba11ad0beef"),
        "title": "Design a logo",
        "category": "design",
        "description": "Vector logo for a bakery",
        "deadline": datetime(2025, 1, 1, tzinfo=timezone.utc),
        "budget": 150.5,
        "status": "open",
        "bidsCount": 0,
        "author": {"email": "owner@x.com", "name": "Owner"},
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def test_app(mock_store):
    """Fresh app instance with the store dependency pointed at mock_store."""
    from app.main import create_app

    app = create_app()
    app.dependency_overrides[get_store] = lambda: mock_store
    app.state.store = mock_store
    return app


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    raise_app_exceptions=False lets the catch-all 500 handler's response
    reach the test instead of re-raising the original exception.
    """
    transport = ASGITransport(app=test_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
