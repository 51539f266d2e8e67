"""Best-effort handlers subscribed to ``ORDER_CREATED``.

An order is confirmed as soon as it is stored. These handlers run afterwards
and must never fail the publication: every error, returned or raised by a
port, is logged and dropped. No compensation is attempted, so stock or email
can drift from the stored orders; that is accepted.
"""

import logging

from returns.pipeline import is_successful

from .events import OrderCreatedEvent
from .ports import EmailMessage, EmailService, InventoryService

logger = logging.getLogger(__name__)

CONFIRMATION_SUBJECT = "Order confirmation: thank you for your order"


class DecreaseInventory:
    """Decrease stock for every line of a newly created order.

    Lines are handled one after another and independently: a line that fails
    (unknown product, insufficient stock) does not stop the following ones.
    """

    def __init__(self, inventory_service: InventoryService):
        self.inventory_service = inventory_service

    async def __call__(self, event: OrderCreatedEvent) -> None:
        for item in event.payload.order_items:
            try:
                result = await self.inventory_service.decrease(item.product_id, item.quantity)
            except Exception:
                logger.exception(
                    "Inventory decrease raised for product %s (quantity %s)",
                    item.product_id, item.quantity,
                )
                continue
            if not is_successful(result):
                logger.error(
                    "Inventory decrease failed for product %s (quantity %s): %s",
                    item.product_id, item.quantity, result.failure().message,
                )
            else:
                logger.info("Inventory decreased for product %s by %s", item.product_id, item.quantity)


def build_confirmation_body(event: OrderCreatedEvent) -> str:
    payload = event.payload
    lines = "\n".join(
        f"  - Product {item.product_id}, quantity {item.quantity}, unit price ¥{item.unit_price.value}"
        for item in payload.order_items
    )
    return (
        f"Dear {payload.customer_info.name},\n"
        "\n"
        "Thank you for your order. We have received the following:\n"
        "\n"
        "[Items]\n"
        f"{lines}\n"
        "\n"
        "[Total]\n"
        f"¥{payload.total_amount.value}\n"
        "\n"
        "If you have any questions, please contact us."
    )


class SendOrderConfirmationEmail:
    """Email the customer a summary of the created order."""

    def __init__(self, email_service: EmailService):
        self.email_service = email_service

    async def __call__(self, event: OrderCreatedEvent) -> None:
        message = EmailMessage(
            to=event.payload.customer_info.email,
            subject=CONFIRMATION_SUBJECT,
            body=build_confirmation_body(event),
        )
        try:
            result = await self.email_service.send(message)
        except Exception:
            logger.exception("Confirmation email raised for order %s", event.payload.order_id)
            return
        if not is_successful(result):
            logger.error(
                "Confirmation email failed for order %s: %s",
                event.payload.order_id, result.failure().message,
            )
