"""
Custom exceptions for the customer order service domain.

These exceptions represent domain-level errors and are independent
of infrastructure concerns (HTTP, database driver, etc.).
"""

from typing import Any, Optional


class CustomerOrderServiceException(Exception):
    """Base exception for all customer order service errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DuplicateKeyException(CustomerOrderServiceException):
    """Raised when a write violates a unique index in the document store."""

    def __init__(self, collection: str, key: str, value: Optional[Any] = None):
        self.collection = collection
        self.key = key
        self.value = value
        message = f"Duplicate key in '{collection}' for field '{key}'"
        super().__init__(
            message=message,
            details={"collection": collection, "key": key, "value": value},
        )


class StoreNotInitializedException(CustomerOrderServiceException):
    """Raised when the document store is requested before application startup."""

    def __init__(self):
        super().__init__("Document store not initialized")
