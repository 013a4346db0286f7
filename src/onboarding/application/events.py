"""Domain events for the Application aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from onboarding.domain import onboarding


@onboarding.event(part_of="Application")
class ApplicationSubmitted:
    """A seller or delivery partner submitted an application for review."""

    __version__ = 1

    application_id: Identifier(required=True)
    account_id: Identifier(required=True)
    kind: String(required=True)
    display_name: String(required=True)
    documents: Text()  # JSON list of document references
    submitted_at: DateTime(required=True)


@onboarding.event(part_of="Application")
class ApplicationApproved:
    """An administrator approved an application."""

    __version__ = 1

    application_id: Identifier(required=True)
    account_id: Identifier(required=True)
    kind: String(required=True)
    display_name: String(required=True)
    phone: String()
    vehicle_type: String()
    reviewed_by: Identifier(required=True)
    reviewed_at: DateTime(required=True)


@onboarding.event(part_of="Application")
class ApplicationRejected:
    """An administrator rejected an application with a reason."""

    __version__ = 1

    application_id: Identifier(required=True)
    account_id: Identifier(required=True)
    kind: String(required=True)
    reason: Text(required=True)
    reviewed_by: Identifier(required=True)
    reviewed_at: DateTime(required=True)
