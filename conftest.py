# Shared fixtures for the orders test-suite
import pytest

from orders.domain import (
    UnvalidatedCustomerInfo,
    UnvalidatedShippingAddress,
    create_validated_order,
    create_order_item,
    validate_customer_info,
    validate_shipping_address,
)
from orders.product import ProductInput, create_product
from orders.services import CreateOrderRequest, RequestedOrderItem
from orders.value_objects import create_money


def make_product(product_id, price, title=None):
    return create_product(
        ProductInput(id=product_id, title=title or f"Product {product_id}", price=price)
    ).unwrap()


@pytest.fixture
def raw_address():
    return UnvalidatedShippingAddress(
        postal_code="1234567", prefecture="Tokyo", city="Shibuya", address_line="1-2-3 Jingumae"
    )


@pytest.fixture
def raw_customer():
    return UnvalidatedCustomerInfo(name="Taro Yamada", email="taro@example.com", phone="09012345678")


@pytest.fixture
def catalog():
    return [make_product(1, 1000), make_product(2, 500), make_product(3, 0, "Free sample")]


@pytest.fixture
def order_request(raw_address, raw_customer):
    return CreateOrderRequest(
        order_items=[RequestedOrderItem(1, 2), RequestedOrderItem(2, 3)],
        shipping_address=raw_address,
        customer_info=raw_customer,
    )


@pytest.fixture
def validated_order(raw_address, raw_customer):
    items = [
        create_order_item(1, 2, create_money(1000).unwrap()).unwrap(),
        create_order_item(2, 3, create_money(500).unwrap()).unwrap(),
    ]
    return create_validated_order(
        order_items=items,
        shipping_address=validate_shipping_address(raw_address).unwrap(),
        customer_info=validate_customer_info(raw_customer).unwrap(),
    ).unwrap()
