"""Administrative order transitions — any legal edge of the state machine."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.actors import authorize
from ordering.domain import ordering
from ordering.order.order import Order, OrderStatus
from shared.access import Role
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class TransitionOrder:
    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)
    reason = String(max_length=500)


@ordering.command_handler(part_of=Order)
class OrderAdministrationHandler:
    @handle(TransitionOrder)
    def transition_order(self, command):
        authorize(command.actor_id, Role.ADMIN, "orders")
        repo = current_domain.repository_for(Order)
        order = load_or_fail(repo, command.order_id, "Order")

        previous = order.status
        order.transition(command.status, Role.ADMIN, reason=command.reason, actor_id=command.actor_id)
        repo.add(order)

        logger.info(
            "Order transitioned by admin",
            order_id=str(order.id),
            from_status=previous,
            to_status=order.status,
            admin_id=str(command.actor_id),
        )
