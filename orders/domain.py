"""Order domain: shipping status, validated inputs, line items and the order aggregate.

The module keeps unvalidated input records (plain mutable dataclasses filled
in by the API layer) apart from their validated counterparts (frozen
dataclasses only produced by the ``validate_*`` functions). Code downstream of
validation accepts the ``Validated*`` types only, so unchecked data cannot leak
into an order by accident.

Every fallible operation returns ``returns.result.Result``; nothing here does
I/O.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Sequence

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from .errors import DomainError
from .value_objects import (
    ZERO,
    Money,
    MoneyError,
    add_money,
    create_address_line,
    create_city,
    create_email,
    create_person_name,
    create_phone_number,
    create_postal_code,
    create_prefecture,
    is_integral,
    multiply_money,
)

MAX_QUANTITY = 999


# ---- Shipping status ----
class ShippingStatus(str, Enum):
    """Delivery progress of an order. Only moves forward."""

    PENDING = "PENDING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


@dataclass(frozen=True)
class ShippingStatusError(DomainError):
    """INVALID_TRANSITION"""


_ALLOWED_TRANSITIONS = {
    ShippingStatus.PENDING: {ShippingStatus.SHIPPED, ShippingStatus.DELIVERED},
    ShippingStatus.SHIPPED: {ShippingStatus.DELIVERED},
    ShippingStatus.DELIVERED: set(),
}


def is_pending(status: ShippingStatus) -> bool:
    return status == ShippingStatus.PENDING


def is_shipped(status: ShippingStatus) -> bool:
    return status == ShippingStatus.SHIPPED


def is_delivered(status: ShippingStatus) -> bool:
    return status == ShippingStatus.DELIVERED


def can_transition_to(current: ShippingStatus, target: ShippingStatus) -> bool:
    """Return True when ``current`` may move to ``target``.

    Staying in the same status is always allowed; otherwise the move must be
    one of PENDING->SHIPPED, PENDING->DELIVERED or SHIPPED->DELIVERED.
    """
    if current == target:
        return True
    return target in _ALLOWED_TRANSITIONS[current]


def transition_to(
    current: ShippingStatus, target: ShippingStatus
) -> Result[ShippingStatus, ShippingStatusError]:
    if can_transition_to(current, target):
        return Success(target)
    return Failure(ShippingStatusError(
        "INVALID_TRANSITION",
        f"Cannot change shipping status from {ShippingStatus(current).value} "
        f"to {ShippingStatus(target).value}",
    ))


# ---- Field error mapping ----
def as_field_error(error: DomainError, error_cls):
    """Fold a value-object error kind into the coarser order-level kinds."""
    if error.type.startswith("EMPTY"):
        kind = "EMPTY_FIELD"
    elif error.type.endswith("_TOO_LONG"):
        kind = "FIELD_TOO_LONG"
    else:
        kind = error.type
    return error_cls(kind, error.message)


# ---- Shipping address ----
@dataclass
class UnvalidatedShippingAddress:
    postal_code: str
    prefecture: str
    city: str
    address_line: str


@dataclass(frozen=True)
class ValidatedShippingAddress:
    postal_code: str  # normalized, "xxx-xxxx"
    prefecture: str
    city: str
    address_line: str


@dataclass(frozen=True)
class ShippingAddressValidationError(DomainError):
    """INVALID_POSTAL_CODE | EMPTY_FIELD | FIELD_TOO_LONG"""


def validate_shipping_address(
    unvalidated: UnvalidatedShippingAddress,
) -> Result[ValidatedShippingAddress, ShippingAddressValidationError]:
    """Validate a shipping address field by field.

    Fields are checked in the order postal code, prefecture, city, address
    line, and the first failure is returned; later fields are not looked at.

    Args:
        unvalidated: Raw address as received from the client.

    Returns:
        Success(ValidatedShippingAddress) with trimmed values and the postal
        code normalized to ``xxx-xxxx``, or Failure with
        ``INVALID_POSTAL_CODE``, ``EMPTY_FIELD`` or ``FIELD_TOO_LONG``.
    """
    postal_code = create_postal_code(unvalidated.postal_code)
    if not is_successful(postal_code):
        return Failure(as_field_error(postal_code.failure(), ShippingAddressValidationError))
    prefecture = create_prefecture(unvalidated.prefecture)
    if not is_successful(prefecture):
        return Failure(as_field_error(prefecture.failure(), ShippingAddressValidationError))
    city = create_city(unvalidated.city)
    if not is_successful(city):
        return Failure(as_field_error(city.failure(), ShippingAddressValidationError))
    address_line = create_address_line(unvalidated.address_line)
    if not is_successful(address_line):
        return Failure(as_field_error(address_line.failure(), ShippingAddressValidationError))

    return Success(ValidatedShippingAddress(
        postal_code=postal_code.unwrap().value,
        prefecture=prefecture.unwrap().value,
        city=city.unwrap().value,
        address_line=address_line.unwrap().value,
    ))


# ---- Customer info ----
@dataclass
class UnvalidatedCustomerInfo:
    name: str
    email: str
    phone: str


@dataclass(frozen=True)
class ValidatedCustomerInfo:
    name: str
    email: str
    phone: str  # normalized, "xxx-xxxx-xxxx" / "xx-xxxx-xxxx"


@dataclass(frozen=True)
class CustomerInfoValidationError(DomainError):
    """EMPTY_FIELD | FIELD_TOO_LONG | INVALID_EMAIL | INVALID_PHONE"""


def validate_customer_info(
    unvalidated: UnvalidatedCustomerInfo,
) -> Result[ValidatedCustomerInfo, CustomerInfoValidationError]:
    """Validate name, then email, then phone; the first failure wins."""
    name = create_person_name(unvalidated.name)
    if not is_successful(name):
        return Failure(as_field_error(name.failure(), CustomerInfoValidationError))
    email = create_email(unvalidated.email)
    if not is_successful(email):
        # an empty address is reported as a malformed one
        return Failure(CustomerInfoValidationError("INVALID_EMAIL", email.failure().message))
    phone = create_phone_number(unvalidated.phone)
    if not is_successful(phone):
        return Failure(CustomerInfoValidationError("INVALID_PHONE", phone.failure().message))

    return Success(ValidatedCustomerInfo(
        name=name.unwrap().value,
        email=email.unwrap().value,
        phone=phone.unwrap().value,
    ))


# ---- Order item ----
@dataclass(frozen=True)
class OrderItem:
    """A single line of an order.

    Attributes:
        product_id: Catalog id, 1 or greater.
        quantity: Units ordered, between 1 and 999.
        unit_price: Price per unit; zero is a valid (free) item.
    """

    product_id: int
    quantity: int
    unit_price: Money


@dataclass(frozen=True)
class OrderItemValidationError(DomainError):
    """INVALID_PRODUCT_ID | INVALID_QUANTITY | INVALID_PRICE"""


def create_order_item(product_id, quantity, unit_price: Money) -> Result[OrderItem, OrderItemValidationError]:
    """Validate and build an order line.

    Checks run in order: product id, quantity (integral and at least 1, then
    at most 999), unit price.
    """
    if not is_integral(product_id) or product_id < 1:
        return Failure(OrderItemValidationError(
            "INVALID_PRODUCT_ID", "Product id must be an integer of 1 or greater"
        ))
    if not is_integral(quantity) or quantity < 1:
        return Failure(OrderItemValidationError(
            "INVALID_QUANTITY", "Quantity must be an integer of 1 or greater"
        ))
    if quantity > MAX_QUANTITY:
        return Failure(OrderItemValidationError(
            "INVALID_QUANTITY", f"Quantity must be {MAX_QUANTITY} or less"
        ))
    if not isinstance(unit_price, Money):
        return Failure(OrderItemValidationError(
            "INVALID_PRICE", "Unit price must be a validated Money amount"
        ))
    return Success(OrderItem(product_id=int(product_id), quantity=int(quantity), unit_price=unit_price))


def calculate_subtotal(item: OrderItem) -> Result[Money, MoneyError]:
    return multiply_money(item.unit_price, item.quantity)


# ---- Order aggregate ----
@dataclass(frozen=True)
class ValidatedOrder:
    """An order whose every part has passed validation.

    Build it with ``create_validated_order`` so that ``total_amount`` is
    always the sum of the item subtotals.
    """

    order_items: tuple[OrderItem, ...]
    shipping_address: ValidatedShippingAddress
    customer_info: ValidatedCustomerInfo
    shipping_status: ShippingStatus
    total_amount: Money


@dataclass(frozen=True)
class PersistedValidatedOrder(ValidatedOrder):
    """A ValidatedOrder after a repository stored it.

    ``id`` and ``created_at`` are assigned by the repository, never by callers.
    """

    id: int
    created_at: datetime


@dataclass(frozen=True)
class ValidatedOrderCreationError(DomainError):
    """EMPTY_ORDER_ITEMS | CALCULATION_ERROR"""


def create_validated_order(
    order_items: Sequence[OrderItem],
    shipping_address: ValidatedShippingAddress,
    customer_info: ValidatedCustomerInfo,
) -> Result[ValidatedOrder, ValidatedOrderCreationError]:
    """Assemble the order aggregate in PENDING status.

    The total is accumulated from ``ZERO`` one subtotal at a time; the first
    subtotal that fails aborts the whole operation.

    Returns:
        Success(ValidatedOrder), or Failure with ``EMPTY_ORDER_ITEMS`` when no
        items were given or ``CALCULATION_ERROR`` when a subtotal fails.
    """
    items = tuple(order_items)
    if not items:
        return Failure(ValidatedOrderCreationError(
            "EMPTY_ORDER_ITEMS", "An order needs at least one item"
        ))

    total = ZERO
    for item in items:
        subtotal = calculate_subtotal(item)
        if not is_successful(subtotal):
            return Failure(ValidatedOrderCreationError(
                "CALCULATION_ERROR", subtotal.failure().message
            ))
        total = add_money(total, subtotal.unwrap())

    return Success(ValidatedOrder(
        order_items=items,
        shipping_address=shipping_address,
        customer_info=customer_info,
        shipping_status=ShippingStatus.PENDING,
        total_amount=total,
    ))


def calculate_total_amount(order: ValidatedOrder) -> Money:
    return order.total_amount


def with_status(order: ValidatedOrder, status: ShippingStatus) -> ValidatedOrder:
    """Copy of ``order`` in another status. Callers check the transition first."""
    return replace(order, shipping_status=status)
