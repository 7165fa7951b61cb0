"""
Customer-order aggregation service.

Joins every order to its owning customer and flattens the result into one
row per (customer, order) pair.
"""

from typing import List

import structlog

from ..domain.entities import CUSTOMER_COLLECTION, ORDERS_COLLECTION, CustomerOrderDTO
from ..repositories.document_store import Document, IDocumentStore

logger = structlog.get_logger(__name__)


def build_customer_orders_pipeline() -> List[Document]:
    """
    Build the fixed customer-order aggregation pipeline.

    Stages:
    1. $lookup orders whose customerId equals the customer _id
    2. $unwind the joined array; customers without orders drop out
    3. $project customerName, orderId and orderAmount
    """
    return [
        {
            "$lookup": {
                "from": ORDERS_COLLECTION,
                "localField": "_id",
                "foreignField": "customerId",
                "as": "orders",
            }
        },
        {"$unwind": "$orders"},
        {
            "$project": {
                "_id": 0,
                "customerName": "$name",
                "orderId": "$orders._id",
                "orderAmount": "$orders.amount",
            }
        },
    ]


class CustomerOrderService:
    """Runs the customer-order aggregation against a document store."""

    def __init__(self, store: IDocumentStore):
        self.store = store

    async def find_customer_orders(self) -> List[CustomerOrderDTO]:
        """
        Return one DTO per (customer, order) pair.

        Ordering depends on the store and is not stable.
        """
        rows = await self.store.aggregate(
            CUSTOMER_COLLECTION, build_customer_orders_pipeline()
        )
        results = [CustomerOrderDTO.model_validate(row) for row in rows]

        logger.info("Customer orders aggregated", rows_returned=len(results))

        return results
