"""
Task Board Backend — Document Store Connection Management
===========================================================

What:  MongoDB client wrapper, collection handles and the FastAPI dependency.
How:   MongoStore owns one pooled AsyncMongoClient. The lifespan handler in
       main.py connects it once, parks it on `app.state.store`, and closes it
       on shutdown. Routes receive it through `Depends(get_store)`; nothing
       reads collections from module globals.
Who:   Used by services (constructor injection) and the health probe.

Connection Pooling:
    AsyncMongoClient keeps its own connection pool (maxPoolSize=100 by
    default) and is safe to share between concurrent requests, so a single
    instance serves the whole process.
"""

import logging
from typing import Any, Optional

from fastapi import Request
from pymongo import ASCENDING, AsyncMongoClient
from pymongo.server_api import ServerApi

from app.config import settings
from app.exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
TASKS_COLLECTION = "tasks"


class MongoStore:
    """
    Process-scoped handle on the document database.

    Attributes:
        client: The pooled AsyncMongoClient (None until connect()).
        users:  The `users` collection.
        tasks:  The `tasks` collection.
    """

    def __init__(
        self,
        url: str,
        database_name: str,
        timeout_ms: int = 5000,
    ):
        self.url = url
        self.database_name = database_name
        self.timeout_ms = timeout_ms
        self.client: Optional[AsyncMongoClient] = None
        self.db: Any = None
        self.users: Any = None
        self.tasks: Any = None

    @property
    def is_connected(self) -> bool:
        return self.client is not None

    async def connect(self) -> None:
        """
        Open the client, verify the deployment answers a ping, and make sure
        the unique index on users.email exists.

        Raises:
            pymongo.errors.PyMongoError: the cluster is unreachable or rejects
            the credentials. The client is closed again before re-raising.
        """
        # Stable API v1, strict, matches the Atlas driver defaults
        client: AsyncMongoClient = AsyncMongoClient(
            self.url,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            serverSelectionTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
            db = client[self.database_name]
            await db[USERS_COLLECTION].create_index(
                [("email", ASCENDING)], unique=True, name="email_unique"
            )
            await db[TASKS_COLLECTION].create_index(
                [("createdAt", -1)], name="created_at_desc"
            )
        except Exception:
            await client.close()
            raise

        self.client = client
        self.db = db
        self.users = db[USERS_COLLECTION]
        self.tasks = db[TASKS_COLLECTION]
        logger.info("Connected to MongoDB database '%s'", self.database_name)

    async def ping(self) -> bool:
        """Lightweight liveness check used by GET /health."""
        if self.client is None:
            return False
        try:
            await self.client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False

    async def close(self) -> None:
        """Close all pooled connections. Safe to call when never connected."""
        if self.client is not None:
            await self.client.close()
            logger.info("MongoDB connection closed")
        self.client = None
        self.db = None
        self.users = None
        self.tasks = None


def create_store() -> MongoStore:
    """Build an unconnected store from application settings."""
    return MongoStore(
        url=settings.mongodb_url,
        database_name=settings.database_name,
        timeout_ms=settings.mongodb_timeout_ms,
    )


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> MongoStore:
    """
    FastAPI dependency returning the connected store for this process.

    Raises:
        ServiceUnavailableError: startup could not connect (→ 503).
    """
    store: Optional[MongoStore] = getattr(request.app.state, "store", None)
    if store is None or not store.is_connected:
        raise ServiceUnavailableError()
    return store
