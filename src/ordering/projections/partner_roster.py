"""Partner roster — delivery partners known to the ordering context.

Partners are added when their delivery-partner application is approved
and lose verification if their account is later rejected. Completed
deliveries are counted from Delivery events.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from ordering.delivery.delivery import Delivery
from ordering.delivery.events import DeliveryCompleted
from ordering.domain import ordering
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.projection
class PartnerRoster:
    partner_id = Identifier(identifier=True, required=True)
    name = String(max_length=255)
    contact_number = String(max_length=20)
    vehicle_type = String(max_length=50)
    is_verified = Boolean(default=False)
    rating = Float(default=0.0)
    completed_deliveries = Integer(default=0)
    last_delivery_at = DateTime()


@ordering.projector(projector_for=PartnerRoster, aggregates=[Delivery])
class PartnerRosterProjector:
    @on(DeliveryCompleted)
    def on_delivery_completed(self, event):
        repo = current_domain.repository_for(PartnerRoster)
        try:
            entry = repo.get(str(event.delivery_partner_id))
        except ObjectNotFoundError:
            logger.warning("Completed delivery for unknown partner", partner_id=str(event.delivery_partner_id))
            return

        entry.completed_deliveries = (entry.completed_deliveries or 0) + 1
        entry.last_delivery_at = event.delivered_at
        repo.add(entry)
