"""Delivery cancellation — command and handler.

Only the delivery changes. The order keeps its status and may receive a
new delivery afterwards.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize_any
from ordering.delivery.delivery import Delivery
from ordering.domain import ordering
from shared.access import Role
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Delivery")
class CancelDelivery:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    reason = String(max_length=500)


@ordering.command_handler(part_of=Delivery)
class CancelDeliveryHandler:
    @handle(CancelDelivery)
    def cancel_delivery(self, command):
        actor = authorize_any(command.actor_id, {Role.SELLER, Role.ADMIN}, "deliveries")
        repo = current_domain.repository_for(Delivery)
        delivery = load_or_fail(repo, command.delivery_id, "Delivery")
        if actor.role == Role.SELLER.value:
            assert_owner(actor, delivery.seller_id, "delivery")

        delivery.cancel(reason=command.reason, cancelled_by=actor.role)
        repo.add(delivery)

        logger.info(
            "Delivery cancelled",
            delivery_id=str(delivery.id),
            order_id=str(delivery.order_id),
            cancelled_by=actor.role,
        )
