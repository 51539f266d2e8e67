"""orders: order management core with validated value objects and ports.

Usage:
    from orders import build_application

    app = build_application(products=catalog, initial_stock={1: 10})
    result = await app.create_order(request)
"""

from .providers import Application, build_application
from .services import CreateOrder, CreateOrderError, CreateOrderRequest

__all__ = [
    "Application",
    "CreateOrder",
    "CreateOrderError",
    "CreateOrderRequest",
    "build_application",
]
