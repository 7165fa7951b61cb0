"""
Domain entities for customers and orders.

Field names on the wire are camelCase (``customerId``, ``orderAmount``);
Python attributes are snake_case and mapped through aliases.
"""

from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

CUSTOMER_COLLECTION = "customer"
ORDERS_COLLECTION = "orders"


def new_id() -> str:
    """Generate a fresh record identifier."""
    return str(uuid4())


class Customer(BaseModel):
    """
    Customer record.

    The email is unique across all customers; the store enforces it.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Customer UUID")
    name: str = Field(..., description="Customer name")
    email: str = Field(..., description="Customer email, unique")


class Order(BaseModel):
    """Order record referencing its owning customer by id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, description="Order UUID")
    customer_id: str = Field(
        ..., alias="customerId", description="Id of the owning customer"
    )
    amount: float = Field(..., description="Order amount")


class CustomerOrderDTO(BaseModel):
    """Read-only row joining a customer to one of their orders."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    customer_name: str = Field(..., alias="customerName")
    order_id: str = Field(..., alias="orderId")
    order_amount: float = Field(..., alias="orderAmount")
