"""
Fixtures for MongoDB integration tests.

Assumes a MongoDB server on MONGO_URI (default mongodb://localhost:27017).
Tests are skipped when no server answers a ping.
"""

import os

import pytest
import pytest_asyncio

from customer_orders.config import Settings
from customer_orders.database import MongoConnectionManager
from customer_orders.repositories.mongo_store import MongoDocumentStore

LOCAL_MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017")


@pytest_asyncio.fixture
async def mongo_store(request: pytest.FixtureRequest):
    """MongoDocumentStore on a fresh per-test database, dropped afterwards."""
    config = Settings(
        _env_file=None,
        STORAGE_BACKEND="mongodb",
        MONGO_URI=LOCAL_MONGO_URI,
        MONGO_DATABASE=f"test_{request.node.name}"[:63],
        MONGO_SERVER_SELECTION_TIMEOUT_MS=1000,
    )
    manager = MongoConnectionManager(config)
    store = MongoDocumentStore(manager.database)

    if not await store.ping():
        await manager.close()
        pytest.skip(f"MongoDB not reachable at {LOCAL_MONGO_URI}")

    await manager.client.drop_database(config.MONGO_DATABASE)
    try:
        yield store
    finally:
        await manager.client.drop_database(config.MONGO_DATABASE)
        await manager.close()
