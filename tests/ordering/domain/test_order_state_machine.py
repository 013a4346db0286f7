"""Tests for Order state machine transitions and who may take them."""

import pytest
from ordering.order.events import OrderCancelled, OrderConfirmed, OrderPlaced, OrderShipped
from ordering.order.order import Order, OrderStatus
from shared.errors import ErrorCode, LifecycleError


def _order(status=None):
    order = Order.place(
        customer_id="buyer-1",
        seller_id="seller-1",
        items_data=[{"product_id": "p-1", "title": "Lamp", "quantity": 2, "unit_price": 20.0}],
        discount=5.0,
        shipping_charges=3.0,
        tax_amount=2.0,
    )
    if status:
        order.status = status
    order._events.clear()
    return order


class TestPlacement:
    def test_starts_pending_with_locked_pricing(self):
        order = Order.place(
            customer_id="buyer-1",
            seller_id="seller-1",
            items_data=[{"product_id": "p-1", "title": "Lamp", "quantity": 2, "unit_price": 20.0}],
            discount=5.0,
            shipping_charges=3.0,
            tax_amount=2.0,
        )
        assert order.status == OrderStatus.PENDING.value
        assert order.pricing.total_amount == 40.0
        assert order.pricing.final_amount == 40.0
        assert len(order.items) == 1
        assert isinstance(order._events[-1], OrderPlaced)

    def test_final_amount_never_negative(self):
        order = Order.place(
            customer_id="buyer-1",
            seller_id="seller-1",
            items_data=[{"product_id": "p-1", "title": "Pin", "quantity": 1, "unit_price": 1.0}],
            discount=10.0,
        )
        assert order.pricing.final_amount == 0.0


class TestForwardEdges:
    def test_seller_walks_the_happy_path(self):
        order = _order()
        order.accept()
        order.mark_processing()
        order.mark_shipped()
        order.mark_delivered()
        assert order.status == OrderStatus.DELIVERED.value

    def test_accept_raises_order_confirmed(self):
        order = _order()
        order.accept()
        assert isinstance(order._events[-1], OrderConfirmed)

    @pytest.mark.parametrize(
        "status,target",
        [
            ("pending", "processing"),
            ("pending", "shipped"),
            ("confirmed", "delivered"),
            ("shipped", "confirmed"),
            ("delivered", "shipped"),
            ("cancelled", "confirmed"),
        ],
    )
    def test_skipping_or_going_back_is_illegal(self, status, target):
        order = _order(status)
        with pytest.raises(LifecycleError) as exc:
            order.transition(target, "seller")
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert order.status == status

    def test_buyer_cannot_move_order_forward(self):
        order = _order()
        with pytest.raises(LifecycleError) as exc:
            order.transition("confirmed", "buyer")
        assert exc.value.code == ErrorCode.ROLE_MISMATCH

    def test_admin_may_take_forward_edges(self):
        order = _order("confirmed")
        order.transition("processing", "admin")
        order.transition("shipped", "admin")
        assert isinstance(order._events[-1], OrderShipped)


class TestReject:
    def test_reject_cancels_pending_order_with_default_reason(self):
        order = _order()
        order.reject()
        assert order.status == "cancelled"
        assert order.cancellation_reason == "Rejected by seller"
        assert order.cancelled_by == "seller"
        assert order.rejection_reason is None

    def test_reject_keeps_given_reason(self):
        order = _order()
        order.reject(reason="Out of stock", actor_id="seller-1")
        assert order.rejection_reason == "Out of stock"
        event = order._events[-1]
        assert isinstance(event, OrderCancelled)
        assert event.previous_status == "pending"
        assert event.cancelled_by_id == "seller-1"

    def test_only_pending_orders_can_be_rejected(self):
        order = _order("confirmed")
        with pytest.raises(LifecycleError) as exc:
            order.reject()
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION


class TestCancel:
    @pytest.mark.parametrize("role", ["buyer", "seller"])
    @pytest.mark.parametrize("status", ["pending", "confirmed"])
    def test_buyer_or_seller_cancels_before_processing(self, role, status):
        order = _order(status)
        order.cancel("Changed plans", role)
        assert order.status == "cancelled"
        assert order.cancelled_by == role
        assert order.cancellation_reason == "Changed plans"

    @pytest.mark.parametrize("role", ["buyer", "seller"])
    def test_processing_orders_are_past_the_policy(self, role):
        order = _order("processing")
        with pytest.raises(LifecycleError) as exc:
            order.cancel("Too slow", role)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert order.status == "processing"

    def test_admin_cancel_follows_the_policy(self):
        order = _order("processing")
        with pytest.raises(LifecycleError) as exc:
            order.cancel("Fraud check", "admin", actor_id="admin-1")
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert order.status == "processing"

    def test_admin_transition_cancels_processing_order(self):
        order = _order("processing")
        order.transition("cancelled", "admin", reason="Fraud check", actor_id="admin-1")
        assert order.status == "cancelled"
        assert order.cancelled_by == "admin"

    @pytest.mark.parametrize("role", ["buyer", "seller", "admin"])
    def test_shipped_orders_cannot_be_cancelled(self, role):
        order = _order("shipped")
        with pytest.raises(LifecycleError) as exc:
            order.cancel("Too late", role)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION

    def test_delivery_partner_cannot_cancel_orders(self):
        order = _order()
        with pytest.raises(LifecycleError) as exc:
            order.cancel("No", "delivery_partner")
        assert exc.value.code == ErrorCode.ROLE_MISMATCH

    def test_cancelled_is_terminal(self):
        order = _order()
        order.cancel("Oops", "buyer")
        with pytest.raises(LifecycleError) as exc:
            order.cancel("Again", "buyer")
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
