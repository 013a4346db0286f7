"""Partner directory abstraction — who may take a delivery right now."""

import os

_directory_instance = None


def get_partner_directory():
    """Return the configured partner directory adapter (singleton).

    Uses FakePartnerDirectory by default. Set PARTNER_DIRECTORY=roster to
    answer from the PartnerRoster read model kept by this context.
    """
    global _directory_instance
    if _directory_instance is None:
        adapter = os.environ.get("PARTNER_DIRECTORY", "fake")
        if adapter == "fake":
            from ordering.partners.fake_adapter import FakePartnerDirectory

            _directory_instance = FakePartnerDirectory()
        elif adapter == "roster":
            from ordering.partners.roster_adapter import RosterPartnerDirectory

            _directory_instance = RosterPartnerDirectory()
        else:
            raise ValueError(f"Unknown partner directory adapter: {adapter}")
    return _directory_instance


def reset_partner_directory():
    """Reset the partner directory singleton (useful for testing)."""
    global _directory_instance
    _directory_instance = None
