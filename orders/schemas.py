"""Pydantic schemas for the orders API boundary.

The request schemas only check the *shape* of the JSON body (field names and
primitive types) and map it onto the domain's unvalidated records; business
validation (postal codes, quantities, prices...) stays in the domain. The
response schema renders a stored order with the camelCase keys the API
exposes.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from returns.result import Failure, Result, Success

from .domain import (
    PersistedValidatedOrder,
    UnvalidatedCustomerInfo,
    UnvalidatedShippingAddress,
)
from .errors import DomainError
from .services import CreateOrderRequest, RequestedOrderItem


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemIn(_CamelModel):
    """Input schema for a requested order line.

    Attributes:
        product_id: Catalog product id (``productId`` in JSON).
        quantity: Units requested. Range checks happen in the domain.
    """

    product_id: int = Field(alias="productId")
    quantity: int

    @field_validator("product_id", "quantity", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        """Refuse JSON booleans, which pydantic would otherwise read as 0/1.

        Raises:
            ValueError: When the value is a boolean.
        """
        if isinstance(v, bool):
            raise ValueError("Expected a number")
        return v


class ShippingAddressIn(_CamelModel):
    postal_code: str = Field(alias="postalCode")
    prefecture: str
    city: str
    address_line: str = Field(alias="addressLine")


class CustomerInfoIn(_CamelModel):
    name: str
    email: str
    phone: str


class CreateOrderIn(_CamelModel):
    """Schema for the create-order request body."""

    order_items: list[OrderItemIn] = Field(alias="orderItems")
    shipping_address: ShippingAddressIn = Field(alias="shippingAddress")
    customer_info: CustomerInfoIn = Field(alias="customerInfo")

    def to_request(self) -> CreateOrderRequest:
        """Map the DTO to the domain request, leaving values untouched."""
        return CreateOrderRequest(
            order_items=[
                RequestedOrderItem(product_id=i.product_id, quantity=i.quantity)
                for i in self.order_items
            ],
            shipping_address=UnvalidatedShippingAddress(
                postal_code=self.shipping_address.postal_code,
                prefecture=self.shipping_address.prefecture,
                city=self.shipping_address.city,
                address_line=self.shipping_address.address_line,
            ),
            customer_info=UnvalidatedCustomerInfo(
                name=self.customer_info.name,
                email=self.customer_info.email,
                phone=self.customer_info.phone,
            ),
        )


def parse_create_order(body) -> Result[CreateOrderRequest, DomainError]:
    """Parse a decoded JSON body into a ``CreateOrderRequest``.

    Returns:
        Success(CreateOrderRequest), or Failure with ``INVALID_REQUEST`` when
        the body does not have the expected shape.
    """
    try:
        dto = CreateOrderIn.model_validate(body)
    except ValidationError as e:
        return Failure(DomainError("INVALID_REQUEST", str(e)))
    return Success(dto.to_request())


class OrderItemOut(_CamelModel):
    product_id: int = Field(alias="productId")
    quantity: int


class OrderOut(_CamelModel):
    """Response schema for a stored order."""

    id: int
    order_items: list[OrderItemOut] = Field(alias="orderItems")
    shipping_address: ShippingAddressIn = Field(alias="shippingAddress")
    customer_info: CustomerInfoIn = Field(alias="customerInfo")
    shipping_status: str = Field(alias="shippingStatus")
    total_amount: int = Field(alias="totalAmount")
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_order(cls, order: PersistedValidatedOrder) -> "OrderOut":
        address = order.shipping_address
        customer = order.customer_info
        return cls(
            id=order.id,
            order_items=[
                OrderItemOut(product_id=item.product_id, quantity=item.quantity)
                for item in order.order_items
            ],
            shipping_address=ShippingAddressIn(
                postal_code=address.postal_code,
                prefecture=address.prefecture,
                city=address.city,
                address_line=address.address_line,
            ),
            customer_info=CustomerInfoIn(
                name=customer.name, email=customer.email, phone=customer.phone
            ),
            shipping_status=order.shipping_status.value,
            total_amount=order.total_amount.value,
            created_at=order.created_at,
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
