"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
"""

from dataclasses import dataclass


@dataclass
class OnboardingState:
    """Tracks one applicant from signup to review."""

    admin_id: str | None = None
    account_id: str | None = None
    application_id: str | None = None
    kind: str = "seller"


@dataclass
class FulfillmentState:
    """Tracks the accounts, order, and delivery of one fulfillment journey."""

    admin_id: str | None = None
    buyer_id: str | None = None
    seller_id: str | None = None
    partner_id: str | None = None
    order_id: str | None = None
    delivery_id: str | None = None
