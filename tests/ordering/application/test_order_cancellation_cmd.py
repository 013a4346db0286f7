"""Application tests for CancelOrder — who may cancel, and until when."""

import pytest
from ordering.order.administration import TransitionOrder
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order
from ordering.order.progress import MarkProcessing
from protean import current_domain
from shared.errors import ErrorCode, LifecycleError


def _cancel(order_id, actor_id, reason="Changed my mind"):
    current_domain.process(CancelOrder(order_id=order_id, actor_id=actor_id, reason=reason), asynchronous=False)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestCancelOrder:
    def test_buyer_cancels_pending_order(self, place_order, buyer_id):
        order_id = place_order()
        _cancel(order_id, buyer_id)
        order = _get(order_id)
        assert order.status == "cancelled"
        assert order.cancelled_by == "buyer"
        assert order.cancellation_reason == "Changed my mind"

    def test_seller_cancels_confirmed_order(self, confirmed_order_id, seller_id):
        _cancel(confirmed_order_id, seller_id, reason="Supplier delay")
        assert _get(confirmed_order_id).cancelled_by == "seller"

    def test_buyer_cannot_cancel_processing_order(self, confirmed_order_id, seller_id, buyer_id):
        current_domain.process(MarkProcessing(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
        with pytest.raises(LifecycleError) as exc:
            _cancel(confirmed_order_id, buyer_id)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert _get(confirmed_order_id).status == "processing"

    def test_admin_cancels_confirmed_order(self, confirmed_order_id, admin_id):
        _cancel(confirmed_order_id, admin_id, reason="Payment dispute")
        order = _get(confirmed_order_id)
        assert order.status == "cancelled"
        assert order.cancelled_by == "admin"

    def test_admin_cancel_of_processing_order_is_illegal(self, confirmed_order_id, seller_id, admin_id):
        current_domain.process(MarkProcessing(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
        with pytest.raises(LifecycleError) as exc:
            _cancel(confirmed_order_id, admin_id, reason="Payment dispute")
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
        assert _get(confirmed_order_id).status == "processing"

    def test_admin_transition_cancels_processing_order(self, confirmed_order_id, seller_id, admin_id):
        current_domain.process(MarkProcessing(order_id=confirmed_order_id, actor_id=seller_id), asynchronous=False)
        current_domain.process(
            TransitionOrder(order_id=confirmed_order_id, actor_id=admin_id, status="cancelled", reason="Fraud check"),
            asynchronous=False,
        )
        order = _get(confirmed_order_id)
        assert order.status == "cancelled"
        assert order.cancelled_by == "admin"

    def test_other_buyer_cannot_cancel(self, place_order, seed_account):
        order_id = place_order()
        with pytest.raises(LifecycleError) as exc:
            _cancel(order_id, seed_account("buyer"))
        assert exc.value.code == ErrorCode.NOT_OWNER

    def test_delivery_partner_cannot_cancel(self, place_order, partner_id):
        order_id = place_order()
        with pytest.raises(LifecycleError) as exc:
            _cancel(order_id, partner_id)
        assert exc.value.code == ErrorCode.ROLE_MISMATCH

    def test_rejected_seller_cannot_cancel(self, place_order, seed_account, buyer_id):
        order_id = place_order()
        rejected = seed_account("seller", approval_status="rejected")
        with pytest.raises(LifecycleError) as exc:
            _cancel(order_id, rejected)
        assert exc.value.code == ErrorCode.PENDING_APPROVAL

    def test_cancelling_twice_is_illegal(self, place_order, buyer_id):
        order_id = place_order()
        _cancel(order_id, buyer_id)
        with pytest.raises(LifecycleError) as exc:
            _cancel(order_id, buyer_id)
        assert exc.value.code == ErrorCode.ILLEGAL_TRANSITION
