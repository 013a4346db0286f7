"""Delivery creation — command and handler.

At most one active delivery exists per order. Cancelled deliveries do not
count, so a seller can request a new one after a cancellation.
"""

import json

from protean import handle
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize_any
from ordering.delivery.delivery import Delivery, DeliveryStatus
from ordering.domain import ordering
from ordering.order.order import Order
from shared.access import Role
from shared.errors import ErrorCode, LifecycleError, load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Delivery")
class CreateDelivery:
    """Request delivery of a confirmed order."""

    order_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    pickup = Text(required=True)  # JSON location snapshot
    drop = Text(required=True)  # JSON location snapshot
    delivery_fee = Float(default=0.0)
    tip = Float(default=0.0)
    notes = Text()


def active_deliveries_for(order_id) -> list:
    deliveries = current_domain.repository_for(Delivery)._dao.query.filter(order_id=str(order_id)).all().items
    return [d for d in deliveries if d.status != DeliveryStatus.CANCELLED.value]


@ordering.command_handler(part_of=Delivery)
class CreateDeliveryHandler:
    @handle(CreateDelivery)
    def create_delivery(self, command):
        actor = authorize_any(command.actor_id, {Role.SELLER, Role.ADMIN}, "deliveries")
        order_repo = current_domain.repository_for(Order)
        order = load_or_fail(order_repo, command.order_id, "Order")
        if actor.role == Role.SELLER.value:
            assert_owner(actor, order.seller_id, "order")

        delivery = Delivery.create(
            order=order,
            pickup=json.loads(command.pickup) if isinstance(command.pickup, str) else command.pickup,
            drop=json.loads(command.drop) if isinstance(command.drop, str) else command.drop,
            delivery_fee=command.delivery_fee or 0.0,
            tip=command.tip or 0.0,
            notes=command.notes,
        )

        if active_deliveries_for(order.id):
            raise LifecycleError(
                ErrorCode.DELIVERY_ALREADY_EXISTS,
                f"Order {order.id} already has an active delivery",
                field="order_id",
            )

        order.attach_delivery(str(delivery.id))
        current_domain.repository_for(Delivery).add(delivery)
        order_repo.add(order)

        logger.info("Delivery created", delivery_id=str(delivery.id), order_id=str(order.id))
        return str(delivery.id)
