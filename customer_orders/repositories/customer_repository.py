"""
Typed repositories for customers and orders.

Each repository maps between a domain record and its persisted document
shape and delegates storage to an :class:`IDocumentStore`.

Persisted layout:
    customer: {"_id", "name", "email"}
    orders:   {"_id", "customerId", "amount"}
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from ..domain.entities import CUSTOMER_COLLECTION, ORDERS_COLLECTION, Customer, Order
from .document_store import Document, IDocumentStore

T = TypeVar("T")


class DocumentRepository(ABC, Generic[T]):
    """Save / find-all / find-by-id over one collection."""

    collection: str

    def __init__(self, store: IDocumentStore):
        self.store = store

    async def save(self, record: T) -> T:
        """
        Insert or fully overwrite a record by id.

        Raises:
            DuplicateKeyException: If a unique index is violated
        """
        saved = await self.store.save(self.collection, self.to_document(record))
        return self.from_document(saved)

    async def find_all(self) -> List[T]:
        documents = await self.store.find_all(self.collection)
        return [self.from_document(doc) for doc in documents]

    async def find_by_id(self, record_id: str) -> Optional[T]:
        document = await self.store.find_by_id(self.collection, record_id)
        if document is None:
            return None
        return self.from_document(document)

    @staticmethod
    @abstractmethod
    def to_document(record: T) -> Document:
        pass

    @staticmethod
    @abstractmethod
    def from_document(document: Document) -> T:
        pass


class CustomerRepository(DocumentRepository[Customer]):
    """Customers, with a unique index on email."""

    collection = CUSTOMER_COLLECTION

    async def ensure_indexes(self) -> None:
        await self.store.ensure_unique_index(self.collection, "email")

    @staticmethod
    def to_document(record: Customer) -> Document:
        return {"_id": record.id, "name": record.name, "email": record.email}

    @staticmethod
    def from_document(document: Document) -> Customer:
        return Customer(
            id=str(document["_id"]),
            name=document["name"],
            email=document["email"],
        )


class OrderRepository(DocumentRepository[Order]):
    collection = ORDERS_COLLECTION

    @staticmethod
    def to_document(record: Order) -> Document:
        return {
            "_id": record.id,
            "customerId": record.customer_id,
            "amount": record.amount,
        }

    @staticmethod
    def from_document(document: Document) -> Order:
        return Order(
            id=str(document["_id"]),
            customer_id=document["customerId"],
            amount=document["amount"],
        )
