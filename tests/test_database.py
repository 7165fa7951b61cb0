"""Unit tests for MongoConnectionManager using mocks."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from customer_orders.config import Settings
from customer_orders.database import MongoConnectionManager


@pytest.fixture
def config():
    return Settings(
        _env_file=None,
        MONGO_URI="mongodb://db.test:27017",
        MONGO_DATABASE="test_db",
        MONGO_MAX_POOL_SIZE=10,
    )


def test_initialization(config):
    manager = MongoConnectionManager(config)

    assert manager.settings == config
    assert manager._client is None


@patch("customer_orders.database.AsyncMongoClient")
def test_client_created_with_settings(mock_client_class, config):
    manager = MongoConnectionManager(config)

    client = manager.client

    assert client is mock_client_class.return_value
    mock_client_class.assert_called_once_with(
        "mongodb://db.test:27017",
        maxPoolSize=10,
        minPoolSize=config.MONGO_MIN_POOL_SIZE,
        serverSelectionTimeoutMS=config.MONGO_SERVER_SELECTION_TIMEOUT_MS,
        connectTimeoutMS=config.MONGO_CONNECT_TIMEOUT_MS,
        uuidRepresentation="standard",
    )


@patch("customer_orders.database.AsyncMongoClient")
def test_client_is_reused(mock_client_class, config):
    manager = MongoConnectionManager(config)

    assert manager.client is manager.client
    mock_client_class.assert_called_once()


@patch("customer_orders.database.AsyncMongoClient")
def test_database_property(mock_client_class, config):
    mock_client = MagicMock()
    mock_client_class.return_value = mock_client

    database = MongoConnectionManager(config).database

    mock_client.__getitem__.assert_called_once_with("test_db")
    assert database is mock_client.__getitem__.return_value


@pytest.mark.asyncio
@patch("customer_orders.database.AsyncMongoClient")
async def test_close(mock_client_class, config):
    mock_client = MagicMock()
    mock_client.close = AsyncMock()
    mock_client_class.return_value = mock_client
    manager = MongoConnectionManager(config)
    _ = manager.client

    await manager.close()

    mock_client.close.assert_awaited_once()
    assert manager._client is None


@pytest.mark.asyncio
async def test_close_without_client(config):
    manager = MongoConnectionManager(config)

    await manager.close()

    assert manager._client is None
