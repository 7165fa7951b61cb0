"""
MongoDB connection management.

Owns the process-wide AsyncMongoClient. The client is created lazily on
first use and closed on application shutdown.
"""

from typing import Any, Optional

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from .config import Settings

logger = structlog.get_logger(__name__)


class MongoConnectionManager:
    """
    Manages the MongoDB client and database handle.

    Examples:
        >>> manager = MongoConnectionManager(settings)
        >>> db = manager.database
        >>> await db["customer"].find_one({"_id": "..."})
        >>> await manager.close()
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[AsyncMongoClient] = None

    @property
    def client(self) -> AsyncMongoClient:
        """Get or create the MongoDB async client."""
        if self._client is None:
            logger.info(
                "Creating MongoDB client",
                database=self.settings.MONGO_DATABASE,
                max_pool_size=self.settings.MONGO_MAX_POOL_SIZE,
            )
            self._client = AsyncMongoClient(
                self.settings.MONGO_URI,
                maxPoolSize=self.settings.MONGO_MAX_POOL_SIZE,
                minPoolSize=self.settings.MONGO_MIN_POOL_SIZE,
                serverSelectionTimeoutMS=self.settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
                connectTimeoutMS=self.settings.MONGO_CONNECT_TIMEOUT_MS,
                uuidRepresentation="standard",
            )
        return self._client

    @property
    def database(self) -> AsyncDatabase[dict[str, Any]]:
        """Get the configured database."""
        return self.client[self.settings.MONGO_DATABASE]

    async def close(self) -> None:
        """Close the client and all pooled connections."""
        if self._client is not None:
            logger.info("Closing MongoDB client")
            await self._client.close()
            self._client = None
            logger.info("MongoDB client closed")
