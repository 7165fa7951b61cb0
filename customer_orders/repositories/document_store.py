"""
Document store interface (Abstract Base Class).

Defines the contract for document persistence independent of the
underlying database. Documents are plain dicts keyed by ``_id``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Document = Dict[str, Any]


class IDocumentStore(ABC):
    """
    Abstract document store.

    Implementations must raise
    :class:`~customer_orders.domain.exceptions.DuplicateKeyException`
    when a write violates a unique index. Other failures propagate unchanged.
    """

    @abstractmethod
    async def save(self, collection: str, document: Document) -> Document:
        """
        Insert a document or fully replace the one with the same ``_id``.

        Args:
            collection: Collection name
            document: Document to persist, must carry ``_id``

        Returns:
            The saved document

        Raises:
            DuplicateKeyException: If a unique index is violated
        """
        pass

    @abstractmethod
    async def find_all(self, collection: str) -> List[Document]:
        """Return every document in a collection, in no particular order."""
        pass

    @abstractmethod
    async def find_by_id(self, collection: str, document_id: str) -> Optional[Document]:
        """Return the document with the given ``_id``, or None."""
        pass

    @abstractmethod
    async def aggregate(
        self, collection: str, pipeline: List[Document]
    ) -> List[Document]:
        """
        Run an aggregation pipeline on a collection.

        Args:
            collection: Collection the pipeline starts from
            pipeline: Pipeline stages

        Returns:
            Result documents
        """
        pass

    @abstractmethod
    async def ensure_unique_index(self, collection: str, field: str) -> None:
        """Create a unique index on ``field`` if it does not exist yet."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Check that the store is reachable."""
        pass
