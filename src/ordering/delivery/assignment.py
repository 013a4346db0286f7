"""Partner assignment — first assignment and explicit reassignment."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from ordering.actors import assert_owner, authorize_any, is_approved_partner
from ordering.delivery.delivery import Delivery
from ordering.domain import ordering
from ordering.partners import get_partner_directory
from shared.access import Role
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Delivery")
class AssignPartner:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    delivery_partner_id = Identifier(required=True)


@ordering.command(part_of="Delivery")
class ReassignPartner:
    delivery_id = Identifier(required=True)
    actor_id = Identifier(required=True)
    delivery_partner_id = Identifier(required=True)


@ordering.command_handler(part_of=Delivery)
class PartnerAssignmentHandler:
    def _managed_delivery(self, command):
        actor = authorize_any(command.actor_id, {Role.SELLER, Role.ADMIN}, "deliveries")
        delivery = load_or_fail(current_domain.repository_for(Delivery), command.delivery_id, "Delivery")
        if actor.role == Role.SELLER.value:
            assert_owner(actor, delivery.seller_id, "delivery")
        return delivery

    def _partner_available(self, partner_id):
        # Only approved delivery-partner accounts reach the directory
        if not is_approved_partner(partner_id):
            return False
        return get_partner_directory().is_assignable(str(partner_id))

    @handle(AssignPartner)
    def assign_partner(self, command):
        delivery = self._managed_delivery(command)
        available = self._partner_available(command.delivery_partner_id)
        delivery.assign_partner(command.delivery_partner_id, partner_available=available)
        current_domain.repository_for(Delivery).add(delivery)
        logger.info(
            "Delivery partner assigned",
            delivery_id=str(delivery.id),
            delivery_partner_id=str(command.delivery_partner_id),
        )

    @handle(ReassignPartner)
    def reassign_partner(self, command):
        delivery = self._managed_delivery(command)
        previous = delivery.delivery_partner_id
        available = self._partner_available(command.delivery_partner_id)
        delivery.reassign_partner(command.delivery_partner_id, partner_available=available)
        current_domain.repository_for(Delivery).add(delivery)
        logger.info(
            "Delivery partner reassigned",
            delivery_id=str(delivery.id),
            previous_partner_id=str(previous),
            delivery_partner_id=str(command.delivery_partner_id),
        )
