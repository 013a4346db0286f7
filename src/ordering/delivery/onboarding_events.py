"""Inbound cross-domain event handler — approved delivery partners join the roster."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.delivery.delivery import Delivery
from ordering.domain import ordering
from ordering.projections.partner_roster import PartnerRoster
from shared.access import Role
from shared.events.onboarding import ApplicationApproved
from shared.logging import get_logger

logger = get_logger(__name__)

ordering.register_external_event(ApplicationApproved, "Onboarding.ApplicationApproved.v1")


@ordering.event_handler(part_of=Delivery, stream_category="onboarding::application")
class OnboardingApplicationEventHandler:
    @handle(ApplicationApproved)
    def on_application_approved(self, event: ApplicationApproved) -> None:
        if event.kind != Role.DELIVERY_PARTNER.value:
            return

        logger.info("Adding delivery partner to roster", partner_id=str(event.account_id))
        repo = current_domain.repository_for(PartnerRoster)
        try:
            entry = repo.get(str(event.account_id))
        except ObjectNotFoundError:
            entry = PartnerRoster(partner_id=str(event.account_id))

        entry.name = event.display_name
        entry.contact_number = event.phone
        entry.vehicle_type = event.vehicle_type
        entry.is_verified = True
        repo.add(entry)
