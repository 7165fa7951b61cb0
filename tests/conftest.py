"""
Test configuration and fixtures.

Selects the in-memory storage backend before the application module is
imported, so no MongoDB server is needed for unit and API tests.
"""

import os

os.environ["STORAGE_BACKEND"] = "memory"
os.environ.setdefault("LOG_JSON", "false")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from customer_orders.app import app  # noqa: E402
from customer_orders.dependencies import (  # noqa: E402
    get_document_store,
    get_optional_document_store,
)
from customer_orders.repositories.memory_store import MemoryDocumentStore  # noqa: E402


@pytest.fixture
def memory_store():
    """Fresh in-memory store with the customer email index in place."""
    store = MemoryDocumentStore()
    store.unique_indexes["customer"].add("email")
    return store


@pytest.fixture
def client(memory_store):
    """Test client whose routes use the ``memory_store`` fixture."""
    app.dependency_overrides[get_document_store] = lambda: memory_store
    app.dependency_overrides[get_optional_document_store] = lambda: memory_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_customer():
    """Sample customer request body."""
    return {"name": "Alice Smith", "email": "alice@example.com"}
