"""Partner directory port — availability of delivery partners.

Partner records are owned by a partner-facing subsystem outside this
context. Assignment only needs a yes/no answer per partner.
"""

from abc import ABC, abstractmethod


class PartnerDirectoryPort(ABC):
    """Abstract interface for partner directory adapters."""

    @abstractmethod
    def is_assignable(self, partner_id: str) -> bool:
        """Return True if the partner exists, is verified, and can take work."""
        ...
