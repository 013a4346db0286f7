"""Seller-driven order progress — processing, shipped, delivered."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize
from ordering.domain import ordering
from ordering.order.order import Order
from shared.access import Role
from shared.errors import load_or_fail


@ordering.command(part_of="Order")
class MarkProcessing:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Order")
class MarkShipped:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Order")
class MarkDelivered:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command_handler(part_of=Order)
class OrderProgressHandler:
    def _advance(self, command, step):
        actor = authorize(command.actor_id, Role.SELLER, "orders")
        repo = current_domain.repository_for(Order)
        order = load_or_fail(repo, command.order_id, "Order")
        assert_owner(actor, order.seller_id, "order")
        step(order)
        repo.add(order)

    @handle(MarkProcessing)
    def mark_processing(self, command):
        self._advance(command, Order.mark_processing)

    @handle(MarkShipped)
    def mark_shipped(self, command):
        self._advance(command, Order.mark_shipped)

    @handle(MarkDelivered)
    def mark_delivered(self, command):
        self._advance(command, Order.mark_delivered)
