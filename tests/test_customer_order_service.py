"""
Tests for the customer-order aggregation service.
"""

from unittest.mock import AsyncMock

import pytest

from customer_orders.domain.entities import CustomerOrderDTO
from customer_orders.repositories.document_store import IDocumentStore
from customer_orders.services.customer_order_service import (
    CustomerOrderService,
    build_customer_orders_pipeline,
)


def test_pipeline_stages():
    pipeline = build_customer_orders_pipeline()

    assert [next(iter(stage)) for stage in pipeline] == ["$lookup", "$unwind", "$project"]
    assert pipeline[0]["$lookup"] == {
        "from": "orders",
        "localField": "_id",
        "foreignField": "customerId",
        "as": "orders",
    }
    assert pipeline[1]["$unwind"] == "$orders"
    assert pipeline[2]["$project"] == {
        "_id": 0,
        "customerName": "$name",
        "orderId": "$orders._id",
        "orderAmount": "$orders.amount",
    }


def test_pipeline_is_fresh_each_call():
    first = build_customer_orders_pipeline()
    first.append({"$limit": 1})

    assert len(build_customer_orders_pipeline()) == 3


@pytest.mark.asyncio
async def test_find_customer_orders_maps_rows():
    store = AsyncMock(spec=IDocumentStore)
    store.aggregate.return_value = [
        {"customerName": "Alice", "orderId": "o1", "orderAmount": 10},
        {"customerName": "Alice", "orderId": "o2", "orderAmount": 2.5},
    ]

    results = await CustomerOrderService(store).find_customer_orders()

    assert results == [
        CustomerOrderDTO(customer_name="Alice", order_id="o1", order_amount=10.0),
        CustomerOrderDTO(customer_name="Alice", order_id="o2", order_amount=2.5),
    ]
    store.aggregate.assert_awaited_once_with("customer", build_customer_orders_pipeline())


@pytest.mark.asyncio
async def test_find_customer_orders_empty():
    store = AsyncMock(spec=IDocumentStore)
    store.aggregate.return_value = []

    assert await CustomerOrderService(store).find_customer_orders() == []


def test_dto_serializes_camel_case():
    dto = CustomerOrderDTO(customer_name="Alice", order_id="o1", order_amount=1.0)

    assert dto.model_dump(by_alias=True) == {
        "customerName": "Alice",
        "orderId": "o1",
        "orderAmount": 1.0,
    }
