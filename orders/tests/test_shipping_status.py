"""Tests for the ShippingStatus lifecycle.

Statuses only move forward (PENDING -> SHIPPED -> DELIVERED, with the
PENDING -> DELIVERED shortcut) and staying put is always allowed.
"""

import pytest

from orders.domain import (
    ShippingStatus,
    can_transition_to,
    is_delivered,
    is_pending,
    is_shipped,
    transition_to,
)

PENDING, SHIPPED, DELIVERED = ShippingStatus.PENDING, ShippingStatus.SHIPPED, ShippingStatus.DELIVERED


@pytest.mark.parametrize("status", list(ShippingStatus))
def test_staying_in_the_same_status_is_allowed(status):
    assert can_transition_to(status, status)
    assert transition_to(status, status).unwrap() == status


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (PENDING, SHIPPED, True),
        (PENDING, DELIVERED, True),
        (SHIPPED, DELIVERED, True),
        (SHIPPED, PENDING, False),
        (DELIVERED, PENDING, False),
        (DELIVERED, SHIPPED, False),
    ],
)
def test_transition_table(current, target, allowed):
    assert can_transition_to(current, target) is allowed


def test_backwards_transition_names_both_statuses():
    error = transition_to(DELIVERED, PENDING).failure()
    assert error.type == "INVALID_TRANSITION"
    assert "DELIVERED" in error.message and "PENDING" in error.message


def test_status_predicates():
    assert is_pending(PENDING) and not is_pending(SHIPPED)
    assert is_shipped(SHIPPED) and not is_shipped(DELIVERED)
    assert is_delivered(DELIVERED) and not is_delivered(PENDING)


def test_status_serializes_as_its_name():
    assert ShippingStatus("SHIPPED") is SHIPPED
    assert SHIPPED.value == "SHIPPED"
