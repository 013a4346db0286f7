"""Order cancellation — command and handler.

Buyers cancel their own orders and sellers the orders they received,
while the cancellation policy allows it. Admins cancel under the same
policy; later edges go through TransitionOrder.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize_any
from ordering.domain import ordering
from ordering.order.order import Order
from shared.access import Role
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        actor = authorize_any(command.actor_id, {Role.BUYER, Role.SELLER, Role.ADMIN}, "orders")
        repo = current_domain.repository_for(Order)
        order = load_or_fail(repo, command.order_id, "Order")

        if actor.role == Role.BUYER.value:
            assert_owner(actor, order.customer_id, "order")
        elif actor.role == Role.SELLER.value:
            assert_owner(actor, order.seller_id, "order")

        order.cancel(reason=command.reason, actor_role=actor.role, actor_id=command.actor_id)
        repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            cancelled_by=actor.role,
            reason=command.reason,
        )
