"""
Shared dependencies for the application.

Provides dependency injection functions used across routers. The document
store is set once by the application lifespan.
"""

from typing import Optional

from fastapi import Depends

from .domain.exceptions import StoreNotInitializedException
from .repositories.customer_repository import CustomerRepository, OrderRepository
from .repositories.document_store import IDocumentStore
from .services.customer_order_service import CustomerOrderService

# Global store instance (set by main app)
_document_store: Optional[IDocumentStore] = None


def set_document_store(store: Optional[IDocumentStore]) -> None:
    """
    Set the global document store instance.

    Called by main app during startup and cleared on shutdown.
    """
    global _document_store
    _document_store = store


def get_document_store() -> IDocumentStore:
    """Get the document store for dependency injection."""
    if _document_store is None:
        raise StoreNotInitializedException()
    return _document_store


def get_optional_document_store() -> Optional[IDocumentStore]:
    """Get the document store, or None before startup has wired it."""
    return _document_store


def get_customer_repository(
    store: IDocumentStore = Depends(get_document_store),
) -> CustomerRepository:
    return CustomerRepository(store)


def get_order_repository(
    store: IDocumentStore = Depends(get_document_store),
) -> OrderRepository:
    return OrderRepository(store)


def get_customer_order_service(
    store: IDocumentStore = Depends(get_document_store),
) -> CustomerOrderService:
    return CustomerOrderService(store)
