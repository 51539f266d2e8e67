"""Tests for order lines and the ValidatedOrder aggregate."""

import pytest

from orders.domain import (
    MAX_QUANTITY,
    OrderItem,
    ShippingStatus,
    calculate_subtotal,
    calculate_total_amount,
    create_order_item,
    create_validated_order,
    with_status,
)
from orders.value_objects import Money, create_money


def money(value):
    return create_money(value).unwrap()


# ---- Order item ----
def test_create_order_item_and_subtotal():
    item = create_order_item(1, 5, money(1000)).unwrap()
    assert item == OrderItem(product_id=1, quantity=5, unit_price=Money(1000))
    assert calculate_subtotal(item).unwrap() == Money(5000)


def test_free_item_has_zero_subtotal():
    item = create_order_item(3, 4, money(0)).unwrap()
    assert calculate_subtotal(item).unwrap() == Money(0)


@pytest.mark.parametrize("product_id", [0, -1, 1.5, True])
def test_invalid_product_id(product_id):
    assert create_order_item(product_id, 1, money(100)).failure().type == "INVALID_PRODUCT_ID"


@pytest.mark.parametrize("quantity", [0, -3, 2.5, MAX_QUANTITY + 1])
def test_invalid_quantity(quantity):
    assert create_order_item(1, quantity, money(100)).failure().type == "INVALID_QUANTITY"


def test_quantity_bounds_are_inclusive():
    assert create_order_item(1, 1, money(100)).unwrap().quantity == 1
    assert create_order_item(1, MAX_QUANTITY, money(100)).unwrap().quantity == MAX_QUANTITY


def test_unit_price_must_be_money():
    assert create_order_item(1, 1, 100).failure().type == "INVALID_PRICE"


def test_product_id_is_checked_before_quantity():
    assert create_order_item(0, 0, money(1)).failure().type == "INVALID_PRODUCT_ID"


# ---- Aggregate ----
def test_validated_order_total_is_sum_of_subtotals(validated_order):
    assert validated_order.total_amount == Money(3500)
    assert calculate_total_amount(validated_order) == Money(3500)
    assert validated_order.shipping_status is ShippingStatus.PENDING
    assert len(validated_order.order_items) == 2


def test_validated_order_requires_items(validated_order):
    result = create_validated_order(
        order_items=[],
        shipping_address=validated_order.shipping_address,
        customer_info=validated_order.customer_info,
    )
    assert result.failure().type == "EMPTY_ORDER_ITEMS"


def test_validated_order_is_immutable(validated_order):
    with pytest.raises(AttributeError):
        validated_order.total_amount = Money(0)


def test_with_status_returns_a_copy(validated_order):
    shipped = with_status(validated_order, ShippingStatus.SHIPPED)
    assert shipped.shipping_status is ShippingStatus.SHIPPED
    assert validated_order.shipping_status is ShippingStatus.PENDING
    assert shipped.total_amount == validated_order.total_amount


def test_failing_subtotal_aborts_the_total(validated_order):
    # built directly to bypass create_order_item's quantity check
    broken = OrderItem(product_id=1, quantity=-1, unit_price=Money(10))
    result = create_validated_order(
        order_items=[validated_order.order_items[0], broken],
        shipping_address=validated_order.shipping_address,
        customer_info=validated_order.customer_info,
    )
    error = result.failure()
    assert error.type == "CALCULATION_ERROR"
    assert error.message == "Multiplier must be 0 or greater"
