"""Onboarding bounded context — accounts, role applications, and their review.

Owns who is on the marketplace and what they have been cleared to do.
Buyers and admins are usable from signup; sellers and delivery partners
submit an application that an administrator approves or rejects.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

onboarding = Domain(name="onboarding")
