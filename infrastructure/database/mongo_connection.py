"""Process-wide MongoDB handle with connect-once semantics."""
from __future__ import annotations

import asyncio
from typing import Any, Callable, Optional

from pymongo import AsyncMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from core.logging.logger import get_logger
from domain.exceptions import RepositoryUnavailableError

logger = get_logger(__name__, service="database")

ClientFactory = Callable[[], Any]


class MongoConnection:
    """Lazily opens a single ``AsyncMongoClient`` and hands out its database.

    The first caller connects and pings; callers arriving while that attempt
    is in flight wait on the lock and then reuse its result instead of
    opening clients of their own. A failed attempt is not cached, so the
    next call tries again.
    """

    def __init__(
        self,
        uri: str,
        database: str,
        *,
        connect_timeout_ms: int = 3000,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.uri = uri
        self.database_name = database
        self.connect_timeout_ms = connect_timeout_ms
        self._client_factory = client_factory or self._default_client
        self._client: Any = None
        self._db: Any = None
        self._lock = asyncio.Lock()

    def _default_client(self) -> AsyncMongoClient:
        return AsyncMongoClient(
            self.uri,
            serverSelectionTimeoutMS=self.connect_timeout_ms,
            connectTimeoutMS=self.connect_timeout_ms,
            appname="lol-tracker-stats",
        )

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def get_database(self) -> Any:
        if self._db is not None:
            return self._db
        async with self._lock:
            if self._db is not None:
                return self._db
            client = self._client_factory()
            try:
                await asyncio.wait_for(
                    client.admin.command("ping"),
                    timeout=self.connect_timeout_ms / 1000.0,
                )
            except (ConnectionFailure, OperationFailure, asyncio.TimeoutError) as e:
                logger.error(lambda: f"mongo-connect-failed {type(e).__name__}", extra={"database": self.database_name})
                await client.close()
                raise RepositoryUnavailableError(f"Could not connect to MongoDB: {e}") from e
            self._client = client
            self._db = client[self.database_name]
            logger.success(lambda: "mongo-connected", extra={"database": self.database_name})
            return self._db

    async def close(self) -> None:
        async with self._lock:
            if self._client is not None:
                await self._client.close()
                logger.info(lambda: "mongo-disconnected", extra={"database": self.database_name})
            self._client = None
            self._db = None
