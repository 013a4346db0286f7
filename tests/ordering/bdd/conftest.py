"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.delivery.delivery import Delivery
from ordering.order.order import Order
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

PICKUP = {"address": "14 Market Road, Pune", "contact_name": "Asha"}
DROP = {"address": "7 Lake View, Pune", "contact_name": "Meera"}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured lifecycle errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a pending order", target_fixture="order")
def pending_order():
    order = Order.place(
        customer_id="buyer-001",
        seller_id="seller-001",
        items_data=[{"product_id": "prod-001", "title": "Steel Bottle", "quantity": 2, "unit_price": 12.5}],
    )
    order._events.clear()
    return order


@given(parsers.cfparse('the order is "{status}"'))
def order_in_status(order, status):
    order.status = status


@given("a delivery for the order", target_fixture="delivery")
def delivery_for_order(order):
    delivery = Delivery.create(order, PICKUP, DROP)
    delivery._events.clear()
    return delivery


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the order status is "{status}"'))
def order_status_is(order, status):
    assert order.status == status


@then(parsers.cfparse('the delivery status is "{status}"'))
def delivery_status_is(delivery, status):
    assert delivery.status == status


@then(parsers.cfparse('the action fails with "{code}"'))
def action_fails_with(error, code):
    assert error["exc"] is not None, f"Expected {code} but nothing was raised"
    assert isinstance(error["exc"], ValidationError)
    assert error["exc"].code.value == code
