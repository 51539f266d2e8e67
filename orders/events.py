"""Domain events raised by the order lifecycle."""

from dataclasses import dataclass, field
from datetime import datetime

from .domain import OrderItem, PersistedValidatedOrder, ValidatedCustomerInfo
from .value_objects import Money

ORDER_CREATED = "ORDER_CREATED"


@dataclass(frozen=True)
class OrderCreatedPayload:
    order_id: int
    customer_info: ValidatedCustomerInfo
    total_amount: Money
    order_items: tuple[OrderItem, ...]
    created_at: datetime


@dataclass(frozen=True)
class OrderCreatedEvent:
    """Published once an order has been stored.

    Attributes:
        payload: Snapshot of the stored order needed by downstream handlers.
        type: Routing key used by the event bus, always ``ORDER_CREATED``.
    """

    payload: OrderCreatedPayload
    type: str = field(default=ORDER_CREATED)


def create_order_created_event(order: PersistedValidatedOrder) -> OrderCreatedEvent:
    return OrderCreatedEvent(
        payload=OrderCreatedPayload(
            order_id=order.id,
            customer_info=order.customer_info,
            total_amount=order.total_amount,
            order_items=tuple(order.order_items),
            created_at=order.created_at,
        )
    )
