"""
MongoDB implementation of the document store.

Uses PyMongo's native async API (AsyncDatabase / AsyncCollection).
"""

from typing import Any, List, Optional

import structlog
from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..domain.exceptions import DuplicateKeyException
from .document_store import Document, IDocumentStore

logger = structlog.get_logger(__name__)


class MongoDocumentStore(IDocumentStore):
    """
    MongoDB-backed document store.

    Saves are ``replace_one`` with upsert on ``_id``, so an existing document
    is overwritten wholesale and a missing one is inserted.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]):
        """
        Initialize store.

        Args:
            database: PyMongo async database handle
        """
        self.database = database

    async def save(self, collection: str, document: Document) -> Document:
        try:
            await self.database[collection].replace_one(
                {"_id": document["_id"]}, document, upsert=True
            )
        except DuplicateKeyError as e:
            key, value = self._extract_duplicate_key(e)
            logger.warning(
                "Duplicate key on save",
                collection=collection,
                key=key,
                document_id=document["_id"],
            )
            raise DuplicateKeyException(collection, key, value) from e

        return document

    async def find_all(self, collection: str) -> List[Document]:
        cursor = self.database[collection].find({})
        return await cursor.to_list()

    async def find_by_id(self, collection: str, document_id: str) -> Optional[Document]:
        return await self.database[collection].find_one({"_id": document_id})

    async def aggregate(
        self, collection: str, pipeline: List[Document]
    ) -> List[Document]:
        cursor = await self.database[collection].aggregate(pipeline)
        return await cursor.to_list()

    async def ensure_unique_index(self, collection: str, field: str) -> None:
        await self.database[collection].create_index([(field, ASCENDING)], unique=True)
        logger.info("Unique index ensured", collection=collection, field=field)

    async def ping(self) -> bool:
        try:
            await self.database.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB ping failed", error=str(e))
            return False

    @staticmethod
    def _extract_duplicate_key(error: DuplicateKeyError) -> tuple[str, Any]:
        """
        Pull the offending field and value out of a DuplicateKeyError.

        Returns:
            (field, value) tuple; field is "unknown" if the server did not report it
        """
        details = error.details or {}
        key_value = details.get("keyValue") or {}
        if key_value:
            field, value = next(iter(key_value.items()))
            return field, value

        key_pattern = details.get("keyPattern") or {}
        if key_pattern:
            return next(iter(key_pattern)), None

        return "unknown", None
