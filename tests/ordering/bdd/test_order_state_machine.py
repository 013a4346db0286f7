"""BDD tests for the order state machine."""

from pytest_bdd import parsers, scenarios, when
from shared.errors import LifecycleError

scenarios("features/order_state_machine.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the "{role}" moves the order to "{status}"'))
def move_order(order, role, status, error):
    try:
        order.transition(status, role, reason=f"Moved by {role}")
    except LifecycleError as exc:
        error["exc"] = exc


@when("the seller rejects the order")
def seller_rejects(order, error):
    try:
        order.reject()
    except LifecycleError as exc:
        error["exc"] = exc
