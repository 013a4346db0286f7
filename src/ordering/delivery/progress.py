"""Delivery progress reported by the assigned partner."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize
from ordering.delivery.delivery import Delivery
from ordering.domain import ordering
from shared.access import Role
from shared.errors import load_or_fail


@ordering.command(part_of="Delivery")
class StartDelivery:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Delivery")
class PickUpDelivery:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Delivery")
class DispatchDelivery:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command(part_of="Delivery")
class CompleteDelivery:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)


@ordering.command_handler(part_of=Delivery)
class DeliveryProgressHandler:
    def _advance(self, command, step):
        actor = authorize(command.actor_id, Role.DELIVERY_PARTNER, "deliveries")
        repo = current_domain.repository_for(Delivery)
        delivery = load_or_fail(repo, command.delivery_id, "Delivery")
        assert_owner(actor, delivery.delivery_partner_id, "delivery")
        step(delivery)
        repo.add(delivery)

    @handle(StartDelivery)
    def start_delivery(self, command):
        self._advance(command, Delivery.start)

    @handle(PickUpDelivery)
    def pick_up_delivery(self, command):
        self._advance(command, Delivery.pick_up)

    @handle(DispatchDelivery)
    def dispatch_delivery(self, command):
        self._advance(command, Delivery.dispatch)

    @handle(CompleteDelivery)
    def complete_delivery(self, command):
        self._advance(command, Delivery.complete)
