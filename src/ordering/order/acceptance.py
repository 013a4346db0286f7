"""Seller decision on a pending order — accept or reject."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize
from ordering.domain import ordering
from ordering.order.order import Order
from shared.access import Role
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class AcceptOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Order")
class RejectOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command_handler(part_of=Order)
class OrderAcceptanceHandler:
    def _seller_order(self, command):
        actor = authorize(command.actor_id, Role.SELLER, "orders")
        order = load_or_fail(current_domain.repository_for(Order), command.order_id, "Order")
        assert_owner(actor, order.seller_id, "order")
        return order

    @handle(AcceptOrder)
    def accept_order(self, command):
        order = self._seller_order(command)
        order.accept()
        current_domain.repository_for(Order).add(order)
        logger.info("Order accepted", order_id=str(order.id), seller_id=str(order.seller_id))

    @handle(RejectOrder)
    def reject_order(self, command):
        order = self._seller_order(command)
        order.reject(reason=command.reason, actor_id=command.actor_id)
        current_domain.repository_for(Order).add(order)
        logger.info("Order rejected", order_id=str(order.id), seller_id=str(order.seller_id))
