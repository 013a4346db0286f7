"""BDD tests for delivery creation, assignment, and cancellation."""

from ordering.delivery.delivery import Delivery
from pytest_bdd import parsers, scenarios, then, when
from shared.errors import LifecycleError

PICKUP = {"address": "14 Market Road, Pune", "contact_name": "Asha"}
DROP = {"address": "7 Lake View, Pune", "contact_name": "Meera"}

scenarios("features/delivery_assignment.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("the seller accepts the order")
def seller_accepts(order):
    order.accept()


@when("the seller rejects the order")
def seller_rejects(order):
    order.reject()


@when("a delivery is requested for the order", target_fixture="delivery")
def request_delivery(order, error):
    try:
        return Delivery.create(order, PICKUP, DROP)
    except LifecycleError as exc:
        error["exc"] = exc
        return None


@when(parsers.cfparse('partner "{partner_id}" is assigned'))
def assign_partner(delivery, partner_id, error):
    try:
        delivery.assign_partner(partner_id)
    except LifecycleError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the delivery is reassigned to partner "{partner_id}"'))
def reassign_partner(delivery, partner_id, error):
    try:
        delivery.reassign_partner(partner_id)
    except LifecycleError as exc:
        error["exc"] = exc


@when("the partner completes the delivery")
def complete_delivery(delivery):
    delivery.start()
    delivery.pick_up()
    delivery.dispatch()
    delivery.complete()


@when("the delivery is cancelled")
def cancel_delivery(delivery, error):
    try:
        delivery.cancel(reason="No longer needed", cancelled_by="seller")
    except LifecycleError as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the delivery partner is "{partner_id}"'))
def delivery_partner_is(delivery, partner_id):
    assert str(delivery.delivery_partner_id) == partner_id
