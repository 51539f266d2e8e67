"""In-process adapters for the orders ports.

These implement ``EventBus``, ``ProductRepository``, ``InventoryService``
and ``EmailService`` without any network calls. They are used by the tests
and by the default wiring in ``providers`` where deterministic behavior is
useful and no external services are required.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Iterable, Mapping, Sequence

from returns.result import Failure, Result, Success

from .ports import (
    EmailMessage,
    EmailService,
    EventBus,
    EventHandler,
    InventoryError,
    InventoryService,
    InventoryStock,
    ProductRepository,
    ProductRepositoryError,
    SendEmailError,
)
from .product import Product

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Event bus dispatching to handlers registered per ``event.type``.

    All handlers of a type run concurrently on each publish and ``publish``
    returns once every one of them has finished. Handlers get no mutual
    exclusion from the bus. Publishing a type nobody subscribed to is a no-op.
    If a handler raises, the remaining handlers still run to completion and
    the first exception, in subscription order, is then re-raised from
    ``publish``.
    """

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register ``handler`` for events whose ``type`` is ``event_type``.

        Args:
            event_type: Routing key, e.g. ``ORDER_CREATED``.
            handler: Async callable receiving the event.
        """
        self._handlers[event_type].append(handler)

    async def publish(self, event) -> None:
        """Run every handler subscribed to ``event.type`` and wait for all of them.

        Args:
            event: Any object with a ``type`` attribute.

        Raises:
            Exception: The first exception raised by a handler, after all
                handlers have finished.
        """
        handlers = list(self._handlers.get(event.type, ()))
        logger.debug("Dispatching %s to %d handler(s)", event.type, len(handlers))
        if not handlers:
            return
        results = await asyncio.gather(
            *(handler(event) for handler in handlers), return_exceptions=True
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome


class InMemoryProductRepository(ProductRepository):
    """Product catalog held in a dict keyed by product id."""

    def __init__(self, products: Iterable[Product] = ()):
        """Initialize the catalog.

        Args:
            products: Products to seed the catalog with.
        """
        self._products = {p.id.value: p for p in products}

    def add(self, product: Product) -> None:
        """Add a product, replacing any product with the same id."""
        self._products[product.id.value] = product

    async def find_all(self) -> Result[Sequence[Product], ProductRepositoryError]:
        """Return every product in insertion order."""
        return Success(tuple(self._products.values()))

    async def find_by_id(self, product_id: int) -> Result[Product, ProductRepositoryError]:
        """Look up one product.

        Returns:
            Success(Product), or Failure with ``NOT_FOUND`` for an unknown id.
        """
        product = self._products.get(product_id)
        if product is None:
            return Failure(ProductRepositoryError("NOT_FOUND", f"Product {product_id} was not found"))
        return Success(product)


class InMemoryInventoryService(InventoryService):
    """Stock levels held in a dict keyed by product id.

    Products missing from the initial stock are unknown to the service and
    yield ``PRODUCT_NOT_FOUND``.
    """

    def __init__(self, initial_stock: Mapping[int, int] | None = None):
        """Initialize stock levels.

        Args:
            initial_stock: Units available per product id.
        """
        self._stock = {int(pid): qty for pid, qty in (initial_stock or {}).items()}

    def _not_found(self, product_id: int) -> Failure:
        return Failure(InventoryError("PRODUCT_NOT_FOUND", f"Product {product_id} was not found"))

    async def decrease(self, product_id: int, quantity: int) -> Result[None, InventoryError]:
        """Take ``quantity`` units out of stock.

        Args:
            product_id: Product whose stock is decreased.
            quantity: Units to remove.

        Returns:
            Success(None), or Failure with ``PRODUCT_NOT_FOUND`` or
            ``INSUFFICIENT_STOCK``. Stock is left unchanged on failure.
        """
        current = self._stock.get(product_id)
        if current is None:
            return self._not_found(product_id)
        if current < quantity:
            return Failure(InventoryError(
                "INSUFFICIENT_STOCK",
                f"Insufficient stock for product {product_id} (current: {current}, requested: {quantity})",
            ))
        self._stock[product_id] = current - quantity
        return Success(None)

    async def increase(self, product_id: int, quantity: int) -> Result[None, InventoryError]:
        """Put ``quantity`` units back into stock of a known product."""
        current = self._stock.get(product_id)
        if current is None:
            return self._not_found(product_id)
        self._stock[product_id] = current + quantity
        return Success(None)

    async def get_stock(self, product_id: int) -> Result[InventoryStock, InventoryError]:
        """Return the current stock, or ``PRODUCT_NOT_FOUND``."""
        quantity = self._stock.get(product_id)
        if quantity is None:
            return self._not_found(product_id)
        return Success(InventoryStock(product_id=product_id, quantity=quantity))


class LoggingEmailService(EmailService):
    """Email service that writes messages to the log instead of sending them.

    Sent messages are also kept in ``outbox`` so local runs and tests can
    inspect them.
    """

    def __init__(self, sender: str = "orders@example.com"):
        self.sender = sender
        self.outbox: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> Result[None, SendEmailError]:
        """Log ``message`` and append it to the outbox.

        Returns:
            Success(None): Logging a message cannot fail.
        """
        logger.info(
            "Email sent",
            extra={"email_from": self.sender, "email_to": message.to, "subject": message.subject},
        )
        logger.debug("Email body:\n%s", message.body)
        self.outbox.append(message)
        return Success(None)
