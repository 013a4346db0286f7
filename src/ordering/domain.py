"""Ordering bounded context — order lifecycle and delivery assignment.

Orders move forward through a fixed state machine driven by sellers, with
buyers and admins allowed to cancel under the shared cancellation policy.
Confirmed orders get a Delivery that is assigned to a delivery partner and
tracked to completion. Both aggregates are CQRS; actors are authorized
against a local read model of onboarding accounts.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

ordering = Domain(name="ordering")
