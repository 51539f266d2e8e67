"""Ports (DIP) consumed by the order use cases.

Each port is a ``Protocol`` with async methods returning
``returns.result.Result``. Each one declares its own closed error family so
use cases must translate port failures into their own error kinds instead of
passing adapter details upwards.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Protocol, Sequence

from returns.result import Result

from .domain import PersistedValidatedOrder, ShippingStatus, ValidatedOrder
from .errors import DomainError
from .product import Product


# ---- Errors ----
@dataclass(frozen=True)
class ProductRepositoryError(DomainError):
    """NETWORK_ERROR | NOT_FOUND | UNKNOWN_ERROR"""


@dataclass(frozen=True)
class OrderRepositoryError(DomainError):
    """NOT_FOUND | NETWORK_ERROR | UNKNOWN_ERROR | CONFLICT"""


@dataclass(frozen=True)
class InventoryError(DomainError):
    """INSUFFICIENT_STOCK | PRODUCT_NOT_FOUND | INVENTORY_UPDATE_ERROR"""


@dataclass(frozen=True)
class SendEmailError(DomainError):
    """EMAIL_SEND_ERROR"""


# ---- Port DTOs ----
@dataclass(frozen=True)
class InventoryStock:
    product_id: int
    quantity: int


@dataclass(frozen=True)
class EmailMessage:
    to: str
    subject: str
    body: str


EventHandler = Callable[[object], Awaitable[None]]


# ---- Ports ----
class ProductRepository(Protocol):
    """Read access to the product catalog."""

    async def find_all(self) -> Result[Sequence[Product], ProductRepositoryError]:
        raise NotImplementedError()

    async def find_by_id(self, product_id: int) -> Result[Product, ProductRepositoryError]:
        """Look up one product.

        Returns:
            Success(Product), or Failure with ``NOT_FOUND`` when the catalog has
            no such product, ``NETWORK_ERROR``/``UNKNOWN_ERROR`` otherwise.
        """
        raise NotImplementedError()


class OrderRepository(Protocol):
    """Persistence for orders.

    Implementers own id and timestamp assignment, must re-check status
    transitions themselves and must refuse to delete delivered orders.
    """

    async def create(self, order: ValidatedOrder) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        """Store a new order, assigning its ``id`` and ``created_at``."""
        raise NotImplementedError()

    async def find_all(self) -> Result[Sequence[PersistedValidatedOrder], OrderRepositoryError]:
        raise NotImplementedError()

    async def find_by_id(self, order_id: int) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        raise NotImplementedError()

    async def update_status(
        self, order_id: int, status: ShippingStatus
    ) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        """Move an order to ``status``.

        Returns:
            Success with the updated order, or Failure with ``NOT_FOUND``, or
            ``CONFLICT`` when the transition is not allowed.
        """
        raise NotImplementedError()

    async def delete(self, order_id: int) -> Result[None, OrderRepositoryError]:
        """Remove (cancel) an order. Delivered orders yield ``CONFLICT``."""
        raise NotImplementedError()


class EventBus(Protocol):
    """Publish/subscribe channel for domain events keyed by ``event.type``."""

    async def publish(self, event) -> None:
        raise NotImplementedError()

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        raise NotImplementedError()


class InventoryService(Protocol):
    """Stock bookkeeping per product."""

    async def decrease(self, product_id: int, quantity: int) -> Result[None, InventoryError]:
        raise NotImplementedError()

    async def increase(self, product_id: int, quantity: int) -> Result[None, InventoryError]:
        raise NotImplementedError()

    async def get_stock(self, product_id: int) -> Result[InventoryStock, InventoryError]:
        raise NotImplementedError()


class EmailService(Protocol):
    """Outgoing email."""

    async def send(self, message: EmailMessage) -> Result[None, SendEmailError]:
        raise NotImplementedError()
