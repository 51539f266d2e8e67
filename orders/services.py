"""Application services (use cases) for orders and products.

Use cases are small classes built with their ports and called with the
request, e.g. ``await CreateOrder(order_repo, product_repo, bus)(request)``.
They do no I/O of their own: all side effects go through the injected ports,
and every outcome is reported as a ``returns.result.Result``.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from .domain import (
    OrderItem,
    PersistedValidatedOrder,
    ShippingStatus,
    UnvalidatedCustomerInfo,
    UnvalidatedShippingAddress,
    create_order_item,
    create_validated_order,
    validate_customer_info,
    validate_shipping_address,
)
from .errors import DomainError
from .events import create_order_created_event
from .ports import (
    EventBus,
    OrderRepository,
    ProductRepository,
    ProductRepositoryError,
)
from .product import Product
from .value_objects import create_money

logger = logging.getLogger(__name__)


# ---- Create order ----
@dataclass
class RequestedOrderItem:
    product_id: int
    quantity: int


@dataclass
class CreateOrderRequest:
    """Raw create-order input; nothing in it has been validated yet."""

    order_items: Sequence[RequestedOrderItem]
    shipping_address: UnvalidatedShippingAddress
    customer_info: UnvalidatedCustomerInfo


@dataclass(frozen=True)
class CreateOrderError(DomainError):
    """VALIDATION_ERROR | PRODUCT_NOT_FOUND | REPOSITORY_ERROR"""


class CreateOrder:
    """Use case that validates, prices, stores and announces a new order.

    The steps run in a fixed order and stop at the first failure:

    1. validate the shipping address;
    2. validate the customer info;
    3. for every requested item, in request order, look the product up,
       convert its catalog price to Money and build the order line;
    4. assemble the ValidatedOrder;
    5. store it through the order repository;
    6. publish an ``ORDER_CREATED`` event.

    Storing and publishing are not atomic. A publish failure after the order
    has been stored is logged and the stored order is still returned: the
    order exists, so the caller gets it.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        event_bus: EventBus,
    ):
        """Initialize the use case with its ports.

        Args:
            order_repository: Port used to persist the new order.
            product_repository: Port used to look up catalog prices.
            event_bus: Port used to announce the created order.
        """
        self.order_repository = order_repository
        self.product_repository = product_repository
        self.event_bus = event_bus

    async def __call__(
        self, request: CreateOrderRequest
    ) -> Result[PersistedValidatedOrder, CreateOrderError]:
        """Run the use case.

        Args:
            request: Raw order request.

        Returns:
            Success(PersistedValidatedOrder) with the id assigned by the
            repository, or Failure(CreateOrderError) with:
                'VALIDATION_ERROR' for any address, customer, price, item or
                    aggregate validation failure (original message kept);
                'PRODUCT_NOT_FOUND' for the first requested product, in request
                    order, the catalog cannot return;
                'REPOSITORY_ERROR' when the order could not be stored.
        """
        # 1) Shipping address
        address = validate_shipping_address(request.shipping_address)
        if not is_successful(address):
            return self._reject("VALIDATION_ERROR", address.failure().message)

        # 2) Customer info
        customer = validate_customer_info(request.customer_info)
        if not is_successful(customer):
            return self._reject("VALIDATION_ERROR", customer.failure().message)

        # 3) Products and order lines, one lookup at a time
        order_items: list[OrderItem] = []
        for requested in request.order_items:
            product = await self.product_repository.find_by_id(requested.product_id)
            if not is_successful(product):
                return self._reject(
                    "PRODUCT_NOT_FOUND", f"Product {requested.product_id} was not found"
                )

            unit_price = create_money(product.unwrap().price.value)
            if not is_successful(unit_price):
                return self._reject(
                    "VALIDATION_ERROR",
                    f"Could not convert the product price: {unit_price.failure().message}",
                )

            item = create_order_item(requested.product_id, requested.quantity, unit_price.unwrap())
            if not is_successful(item):
                return self._reject("VALIDATION_ERROR", item.failure().message)
            order_items.append(item.unwrap())

        # 4) Aggregate
        order = create_validated_order(
            order_items=order_items,
            shipping_address=address.unwrap(),
            customer_info=customer.unwrap(),
        )
        if not is_successful(order):
            return self._reject("VALIDATION_ERROR", order.failure().message)

        # 5) Persist
        saved = await self.order_repository.create(order.unwrap())
        if not is_successful(saved):
            return self._reject("REPOSITORY_ERROR", saved.failure().message)
        persisted = saved.unwrap()

        # 6) Announce; only reached once the order is stored
        try:
            await self.event_bus.publish(create_order_created_event(persisted))
        except Exception:
            logger.exception("ORDER_CREATED publication failed for order %s", persisted.id)

        logger.info("Order %s created (total=%d)", persisted.id, persisted.total_amount.value)
        return Success(persisted)

    @staticmethod
    def _reject(kind: str, message: str) -> Failure:
        logger.warning("Order rejected: %s: %s", kind, message)
        return Failure(CreateOrderError(kind, message))


# ---- Products ----
class GetProducts:
    """List the whole product catalog."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self) -> Result[Sequence[Product], ProductRepositoryError]:
        """Return the repository result unchanged."""
        return await self.repository.find_all()


class GetProductById:
    """Fetch one catalog product."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def __call__(self, product_id: int) -> Result[Product, ProductRepositoryError]:
        """Look up ``product_id``.

        Returns:
            Success(Product), or the repository failure (``NOT_FOUND`` for an
            unknown id).
        """
        return await self.repository.find_by_id(product_id)


# ---- Order queries and commands ----
@dataclass(frozen=True)
class OrderQueryError(DomainError):
    """INVALID_PARAMETER | NOT_FOUND | CONFLICT | NETWORK_ERROR | UNKNOWN_ERROR"""


def parse_order_id(raw) -> Result[int, OrderQueryError]:
    """Parse a path parameter into a positive integer order id."""
    try:
        order_id = int(str(raw).strip())
    except ValueError:
        return Failure(OrderQueryError("INVALID_PARAMETER", f"Invalid order id: {raw!r}"))
    if order_id < 1:
        return Failure(OrderQueryError("INVALID_PARAMETER", f"Invalid order id: {raw!r}"))
    return Success(order_id)


def parse_shipping_status(raw) -> Result[ShippingStatus, OrderQueryError]:
    try:
        return Success(ShippingStatus(str(raw).strip().upper()))
    except ValueError:
        return Failure(OrderQueryError(
            "INVALID_PARAMETER", f"Unknown shipping status: {raw!r}"
        ))


def _from_repository(error: DomainError) -> OrderQueryError:
    return OrderQueryError(error.type, error.message)


class ListOrders:
    """List every stored order."""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def __call__(self) -> Result[Sequence[PersistedValidatedOrder], OrderQueryError]:
        """Return all orders, with repository errors as ``OrderQueryError``."""
        return (await self.repository.find_all()).alt(_from_repository)


class GetOrder:
    """Fetch one stored order."""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def __call__(self, order_id: int) -> Result[PersistedValidatedOrder, OrderQueryError]:
        """Look up ``order_id``.

        Returns:
            Success(PersistedValidatedOrder), or Failure(OrderQueryError) with
            ``NOT_FOUND`` for an unknown id.
        """
        return (await self.repository.find_by_id(order_id)).alt(_from_repository)


class UpdateOrderStatus:
    """Move an order forward in its shipping lifecycle.

    The status string is parsed here; whether the move is legal is decided by
    the repository, which answers ``CONFLICT`` for a backwards move.
    """

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def __call__(self, order_id: int, status) -> Result[PersistedValidatedOrder, OrderQueryError]:
        target = parse_shipping_status(status)
        if not is_successful(target):
            return target
        updated = (await self.repository.update_status(order_id, target.unwrap())).alt(_from_repository)
        if is_successful(updated):
            logger.info("Order %s is now %s", order_id, target.unwrap().value)
        return updated


class CancelOrder:
    """Cancel (delete) an order that has not been delivered yet."""

    def __init__(self, repository: OrderRepository):
        self.repository = repository

    async def __call__(self, order_id: int) -> Result[None, OrderQueryError]:
        """Delete ``order_id``.

        Returns:
            Success(None), or Failure(OrderQueryError) with ``NOT_FOUND`` or
            ``CONFLICT`` when the order was already delivered.
        """
        deleted = (await self.repository.delete(order_id)).alt(_from_repository)
        if is_successful(deleted):
            logger.info("Order %s cancelled", order_id)
        return deleted
