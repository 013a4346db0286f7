"""Application tests for the order lifecycle through domain.process().

Placement, seller acceptance or rejection, and seller-driven progress, with
the acting account resolved from the AccountAccess read model.
"""

import json

import pytest
from ordering.order.acceptance import AcceptOrder, RejectOrder
from ordering.order.administration import TransitionOrder
from ordering.order.order import Order, OrderStatus
from ordering.order.placement import PlaceOrder
from ordering.order.progress import MarkDelivered, MarkProcessing, MarkShipped
from protean import current_domain
from shared.errors import ErrorCode, LifecycleError

ORDER_ITEMS = [{"product_id": "prod-001", "title": "Steel Bottle", "quantity": 2, "unit_price": 12.5}]


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestPlaceOrder:
    def test_persists_pending_order(self, place_order, buyer_id, seller_id):
        order = _get(place_order())
        assert order.status == OrderStatus.PENDING.value
        assert str(order.customer_id) == buyer_id
        assert str(order.seller_id) == seller_id
        assert len(order.items) == 2
        assert order.pricing.total_amount == 33.0
        assert order.pricing.final_amount == 36.0

    def test_pending_seller_cannot_take_orders(self, buyer_id, seed_account):
        pending_seller = seed_account("seller", approval_status="pending")
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                PlaceOrder(customer_id=buyer_id, seller_id=pending_seller, items=json.dumps(ORDER_ITEMS)),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.PENDING_APPROVAL

    def test_unknown_seller(self, buyer_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                PlaceOrder(customer_id=buyer_id, seller_id="ghost-seller", items=json.dumps(ORDER_ITEMS)),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.NOT_FOUND

    def test_only_buyers_place_orders(self, seller_id, seed_account):
        other_seller = seed_account("seller")
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                PlaceOrder(customer_id=other_seller, seller_id=seller_id, items=json.dumps(ORDER_ITEMS)),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.ROLE_MISMATCH

    def test_unknown_buyer_is_not_authenticated(self, seller_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                PlaceOrder(customer_id="ghost-buyer", seller_id=seller_id, items=json.dumps(ORDER_ITEMS)),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.NOT_AUTHENTICATED


class TestSellerDecision:
    def test_accept(self, place_order, seller_id):
        order_id = place_order()
        current_domain.process(AcceptOrder(order_id=order_id, actor_id=seller_id), asynchronous=False)
        assert _get(order_id).status == "confirmed"

    def test_reject_without_reason(self, place_order, seller_id):
        order_id = place_order()
        current_domain.process(RejectOrder(order_id=order_id, actor_id=seller_id), asynchronous=False)
        order = _get(order_id)
        assert order.status == "cancelled"
        assert order.cancelled_by == "seller"

    def test_other_seller_cannot_accept(self, place_order, seed_account):
        order_id = place_order()
        stranger = seed_account("seller")
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(AcceptOrder(order_id=order_id, actor_id=stranger), asynchronous=False)
        assert exc.value.code == ErrorCode.NOT_OWNER
        assert _get(order_id).status == "pending"

    def test_buyer_cannot_accept(self, place_order, buyer_id):
        order_id = place_order()
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(AcceptOrder(order_id=order_id, actor_id=buyer_id), asynchronous=False)
        assert exc.value.code == ErrorCode.ROLE_MISMATCH

    def test_accept_twice_is_illegal(self, confirmed_order_id, seller_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(AcceptOrder(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION

    def test_unknown_order(self, seller_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(AcceptOrder(order_id="missing", actor_id=seller_id), asynchronous=False)
        assert exc.value.code == ErrorCode.NOT_FOUND


class TestSellerProgress:
    def test_happy_path_to_delivered(self, confirmed_order_id, seller_id):
        for command_cls, expected in (
            (MarkProcessing, "processing"),
            (MarkShipped, "shipped"),
            (MarkDelivered, "delivered"),
        ):
            current_domain.process(command_cls(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
            assert _get(confirmed_order_id).status == expected

    def test_cannot_ship_before_processing(self, confirmed_order_id, seller_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(MarkShipped(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert _get(confirmed_order_id).status == "confirmed"


class TestAdminTransition:
    def test_admin_moves_order_forward(self, confirmed_order_id, admin_id):
        current_domain.process(
            TransitionOrder(order_id=confirmed_order_id, actor_id=admin_id, status="processing"),
            asynchronous=False,
        )
        assert _get(confirmed_order_id).status == "processing"

    def test_admin_still_bound_by_state_machine(self, place_order, admin_id):
        order_id = place_order()
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                TransitionOrder(order_id=order_id, actor_id=admin_id, status="delivered"),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION

    def test_sellers_cannot_use_admin_transition(self, confirmed_order_id, seller_id):
        with pytest.raises(LifecycleError) as exc:
            current_domain.process(
                TransitionOrder(order_id=confirmed_order_id, actor_id=seller_id, status="processing"),
                asynchronous=False,
            )
        assert exc.value.code == ErrorCode.ROLE_MISMATCH
