"""Domain events for the Account aggregate."""

from protean.fields import DateTime, Identifier, String

from onboarding.domain import onboarding


@onboarding.event(part_of="Account")
class AccountRegistered:
    """A new account signed up under a role."""

    __version__ = 1

    account_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    approval_status: String(required=True)
    registered_at: DateTime(required=True)


@onboarding.event(part_of="Account")
class AccountApproved:
    """An administrator cleared the account for its role."""

    __version__ = 1

    account_id: Identifier(required=True)
    role: String(required=True)
    approved_at: DateTime(required=True)


@onboarding.event(part_of="Account")
class AccountRejected:
    """An administrator turned the account down."""

    __version__ = 1

    account_id: Identifier(required=True)
    role: String(required=True)
    reason: String(required=True)
    rejected_at: DateTime(required=True)


@onboarding.event(part_of="Account")
class AccountReapplied:
    """A rejected account submitted a fresh application and is pending again."""

    __version__ = 1

    account_id: Identifier(required=True)
    role: String(required=True)
    reapplied_at: DateTime(required=True)
