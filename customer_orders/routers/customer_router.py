"""
Customer and order REST endpoints.

All routes live under ``/customers``:
- POST   /customers                    create customer (server-assigned id)
- GET    /customers                    list customers
- PUT    /customers/{id}               replace customer by id
- GET    /customers/customerAndOrders  customer-order aggregation
- POST   /customers/customerOrder      save order as given
- GET    /customers/orders             list orders
"""

from typing import List
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from ..dependencies import (
    get_customer_order_service,
    get_customer_repository,
    get_order_repository,
)
from ..domain.entities import Customer, CustomerOrderDTO, Order, new_id
from ..domain.exceptions import DuplicateKeyException
from ..metrics import customers_created_total, duplicate_email_total, orders_created_total
from ..repositories.customer_repository import CustomerRepository, OrderRepository
from ..services.customer_order_service import CustomerOrderService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])

DUPLICATE_EMAIL_ERROR = "Customer with this email already exists"


@router.post(
    "",
    response_model=Customer,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": DUPLICATE_EMAIL_ERROR}},
    summary="Create customer",
)
async def save_new_customer(
    customer: Customer,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """
    Create a customer.

    Any id in the request body is discarded in favour of a fresh UUID.
    """
    try:
        saved = await customers.save(customer.model_copy(update={"id": new_id()}))
    except DuplicateKeyException:
        duplicate_email_total.inc()
        logger.info("Customer email already exists")
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"error": DUPLICATE_EMAIL_ERROR},
        )

    customers_created_total.inc()
    logger.info("Customer created", customer_id=saved.id)
    return saved


@router.get("", response_model=List[Customer], summary="List customers")
async def get_all_customers(
    customers: CustomerRepository = Depends(get_customer_repository),
):
    return await customers.find_all()


@router.put(
    "/{customer_id}",
    response_model=Customer,
    responses={404: {"description": "Customer not found"}},
    summary="Replace customer",
)
async def update_customer(
    customer_id: UUID,
    customer: Customer,
    customers: CustomerRepository = Depends(get_customer_repository),
):
    """
    Replace an existing customer.

    The path id always wins over any id carried in the body.
    """
    record_id = str(customer_id)

    existing = await customers.find_by_id(record_id)
    if existing is None:
        logger.info("Customer not found for update", customer_id=record_id)
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    saved = await customers.save(customer.model_copy(update={"id": record_id}))
    logger.info("Customer updated", customer_id=record_id)
    return saved


@router.get(
    "/customerAndOrders",
    response_model=List[CustomerOrderDTO],
    summary="List customers joined with their orders",
)
async def get_customer_and_orders(
    service: CustomerOrderService = Depends(get_customer_order_service),
):
    return await service.find_customer_orders()


@router.post("/customerOrder", response_model=Order, summary="Save order")
async def save_customer_order(
    order: Order,
    orders: OrderRepository = Depends(get_order_repository),
):
    """Save an order as given; a client-supplied id is kept."""
    saved = await orders.save(order)
    orders_created_total.inc()
    logger.info("Order saved", order_id=saved.id, customer_id=saved.customer_id)
    return saved


@router.get("/orders", response_model=List[Order], summary="List orders")
async def get_all_orders(orders: OrderRepository = Depends(get_order_repository)):
    return await orders.find_all()
