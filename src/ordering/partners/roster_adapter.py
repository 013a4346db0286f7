"""Roster partner directory — answers from the local PartnerRoster read model."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.partners.port import PartnerDirectoryPort
from ordering.projections.partner_roster import PartnerRoster


class RosterPartnerDirectory(PartnerDirectoryPort):
    def is_assignable(self, partner_id: str) -> bool:
        try:
            entry = current_domain.repository_for(PartnerRoster).get(str(partner_id))
        except ObjectNotFoundError:
            return False
        return bool(entry.is_verified)
