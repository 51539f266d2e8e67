"""Service provider helpers for wiring use cases with ports.

``build_application`` returns an ``Application`` bundle whose use cases are
wired to the in-process adapters, with the ``ORDER_CREATED`` handlers
(inventory decrease and confirmation email) subscribed on the event bus.
An API layer builds one bundle at startup and calls its use cases; tests
build a fresh one per test.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping

from .adapters import (
    InMemoryEventBus,
    InMemoryInventoryService,
    InMemoryProductRepository,
    LoggingEmailService,
)
from .events import ORDER_CREATED
from .handlers import DecreaseInventory, SendOrderConfirmationEmail
from .product import Product
from .repository import InMemoryOrderRepository
from .services import (
    CancelOrder,
    CreateOrder,
    GetOrder,
    GetProductById,
    GetProducts,
    ListOrders,
    UpdateOrderStatus,
)
from .settings import Settings, load_settings


@dataclass
class Application:
    event_bus: InMemoryEventBus
    product_repository: InMemoryProductRepository
    order_repository: InMemoryOrderRepository
    inventory_service: InMemoryInventoryService
    email_service: LoggingEmailService
    create_order: CreateOrder
    get_products: GetProducts
    get_product_by_id: GetProductById
    list_orders: ListOrders
    get_order: GetOrder
    update_order_status: UpdateOrderStatus
    cancel_order: CancelOrder


def build_application(
    settings: Settings | None = None,
    products: Iterable[Product] = (),
    initial_stock: Mapping[int, int] | None = None,
) -> Application:
    """Return a fully wired Application.

    Args:
        settings: Configuration; read from the environment when omitted.
        products: Catalog to seed the product repository with.
        initial_stock: Stock per product id. Overrides
            ``settings.initial_stock`` when given.

    Returns:
        Application: Adapters and use cases sharing the same ports.
    """
    settings = settings or load_settings()
    stock = settings.initial_stock if initial_stock is None else initial_stock

    event_bus = InMemoryEventBus()
    product_repository = InMemoryProductRepository(products)
    order_repository = InMemoryOrderRepository()
    inventory_service = InMemoryInventoryService(stock)
    email_service = LoggingEmailService(sender=settings.email_sender)

    event_bus.subscribe(ORDER_CREATED, DecreaseInventory(inventory_service))
    event_bus.subscribe(ORDER_CREATED, SendOrderConfirmationEmail(email_service))

    return Application(
        event_bus=event_bus,
        product_repository=product_repository,
        order_repository=order_repository,
        inventory_service=inventory_service,
        email_service=email_service,
        create_order=CreateOrder(order_repository, product_repository, event_bus),
        get_products=GetProducts(product_repository),
        get_product_by_id=GetProductById(product_repository),
        list_orders=ListOrders(order_repository),
        get_order=GetOrder(order_repository),
        update_order_status=UpdateOrderStatus(order_repository),
        cancel_order=CancelOrder(order_repository),
    )
