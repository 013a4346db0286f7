"""Cross-domain event contracts for Onboarding domain events.

These classes define the event shape for consumption by the Ordering
domain, which keeps local read models of account access and delivery
partners. They are registered as external events via
domain.register_external_event() with matching __type__ strings so
Protean's stream deserialization works correctly.

The source-of-truth events are in src/onboarding/account/events.py and
src/onboarding/application/events.py.
"""

from protean.core.event import BaseEvent
from protean.fields import DateTime, Identifier, String


class AccountRegistered(BaseEvent):
    """A new marketplace account was created."""

    __version__ = 1

    account_id = Identifier(required=True)
    name = String(required=True)
    email = String(required=True)
    role = String(required=True)
    approval_status = String(required=True)
    registered_at = DateTime(required=True)


class AccountApproved(BaseEvent):
    """An account was granted the capabilities of its role."""

    __version__ = 1

    account_id = Identifier(required=True)
    role = String(required=True)
    approved_at = DateTime(required=True)


class AccountRejected(BaseEvent):
    """An account's application for its role was turned down."""

    __version__ = 1

    account_id = Identifier(required=True)
    role = String(required=True)
    reason = String(required=True)
    rejected_at = DateTime(required=True)


class ApplicationApproved(BaseEvent):
    """An administrator approved a seller or delivery-partner application."""

    __version__ = 1

    application_id = Identifier(required=True)
    account_id = Identifier(required=True)
    kind = String(required=True)
    display_name = String(required=True)
    phone = String()
    vehicle_type = String()
    reviewed_by = Identifier(required=True)
    reviewed_at = DateTime(required=True)


class AccountReapplied(BaseEvent):
    """A previously rejected account submitted a fresh application."""

    __version__ = 1

    account_id = Identifier(required=True)
    role = String(required=True)
    reapplied_at = DateTime(required=True)
