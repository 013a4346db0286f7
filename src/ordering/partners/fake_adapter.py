"""Fake partner directory — every partner is available unless told otherwise."""

from ordering.partners.port import PartnerDirectoryPort


class FakePartnerDirectory(PartnerDirectoryPort):
    def __init__(self):
        self.unavailable = set()

    def configure(self, unavailable=()):
        """Mark the given partner ids as unavailable for testing."""
        self.unavailable = {str(partner_id) for partner_id in unavailable}

    def is_assignable(self, partner_id: str) -> bool:
        return str(partner_id) not in self.unavailable
