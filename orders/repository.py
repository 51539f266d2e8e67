"""Repository layer for persisting orders.

The in-memory repository keeps ``PersistedValidatedOrder`` values in a dict.
It owns id and ``created_at`` assignment and enforces the persistence rules
of the ``OrderRepository`` port: status updates are re-checked against the
shipping lifecycle and delivered orders cannot be deleted.
"""

import itertools
from datetime import datetime, timezone
from typing import Sequence

from returns.pipeline import is_successful
from returns.result import Failure, Result, Success

from .domain import (
    PersistedValidatedOrder,
    ShippingStatus,
    ValidatedOrder,
    is_delivered,
    transition_to,
    with_status,
)
from .ports import OrderRepository, OrderRepositoryError


class InMemoryOrderRepository(OrderRepository):
    """Repository storing orders in process memory.

    Ids are sequential integers starting at 1 and are never reused, even
    after a delete.
    """

    def __init__(self, clock=None):
        """Initialize an empty repository.

        Args:
            clock: Optional zero-argument callable returning the timestamp to
                stamp on new orders. Defaults to the current UTC time.
        """
        self._orders: dict[int, PersistedValidatedOrder] = {}
        self._ids = itertools.count(1)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _not_found(self, order_id: int) -> Failure:
        return Failure(OrderRepositoryError("NOT_FOUND", f"Order {order_id} was not found"))

    async def create(self, order: ValidatedOrder) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        """Persist a new order record.

        Args:
            order: Validated order to store. Any id it may carry is ignored.

        Returns:
            Success with the stored copy carrying its new ``id`` and
            ``created_at``.
        """
        persisted = PersistedValidatedOrder(
            order_items=tuple(order.order_items),
            shipping_address=order.shipping_address,
            customer_info=order.customer_info,
            shipping_status=order.shipping_status,
            total_amount=order.total_amount,
            id=next(self._ids),
            created_at=self._clock(),
        )
        self._orders[persisted.id] = persisted
        return Success(persisted)

    async def find_all(self) -> Result[Sequence[PersistedValidatedOrder], OrderRepositoryError]:
        return Success(tuple(self._orders.values()))

    async def find_by_id(self, order_id: int) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        order = self._orders.get(order_id)
        if order is None:
            return self._not_found(order_id)
        return Success(order)

    async def update_status(
        self, order_id: int, status: ShippingStatus
    ) -> Result[PersistedValidatedOrder, OrderRepositoryError]:
        order = self._orders.get(order_id)
        if order is None:
            return self._not_found(order_id)
        moved = transition_to(order.shipping_status, status)
        if not is_successful(moved):
            return Failure(OrderRepositoryError("CONFLICT", moved.failure().message))
        updated = with_status(order, moved.unwrap())
        self._orders[order_id] = updated
        return Success(updated)

    async def delete(self, order_id: int) -> Result[None, OrderRepositoryError]:
        order = self._orders.get(order_id)
        if order is None:
            return self._not_found(order_id)
        if is_delivered(order.shipping_status):
            return Failure(OrderRepositoryError("CONFLICT", "Delivered orders cannot be cancelled"))
        del self._orders[order_id]
        return Success(None)
