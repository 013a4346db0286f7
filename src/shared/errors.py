"""Error taxonomy for the marketplace lifecycle.

Every rule violation in the onboarding and ordering contexts is raised as a
``LifecycleError`` carrying one of the codes below. The class extends
Protean's ``ValidationError`` so callers that already handle domain
validation failures keep working, while the API layer can map the ``code``
to a precise HTTP status.
"""

from enum import Enum

from protean.exceptions import ObjectNotFoundError, ValidationError


class ErrorCode(Enum):
    # Lookup
    NOT_FOUND = "NOT_FOUND"

    # Authorization
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    ROLE_MISMATCH = "ROLE_MISMATCH"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    NOT_OWNER = "NOT_OWNER"

    # State-machine guards
    ALREADY_REVIEWED = "ALREADY_REVIEWED"
    ILLEGAL_TRANSITION = "ILLEGAL_TRANSITION"
    NOT_PENDING = "NOT_PENDING"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    TERMINAL_STATE = "TERMINAL_STATE"
    ORDER_NOT_CONFIRMED = "ORDER_NOT_CONFIRMED"
    DELIVERY_ALREADY_EXISTS = "DELIVERY_ALREADY_EXISTS"
    ALREADY_APPROVED = "ALREADY_APPROVED"
    APPLICATION_PENDING = "APPLICATION_PENDING"

    # Input / precondition
    MISSING_REASON = "MISSING_REASON"
    PARTNER_UNAVAILABLE = "PARTNER_UNAVAILABLE"
    SAME_PARTNER = "SAME_PARTNER"


AUTHORIZATION_CODES = frozenset(
    {
        ErrorCode.NOT_AUTHENTICATED,
        ErrorCode.ROLE_MISMATCH,
        ErrorCode.PENDING_APPROVAL,
        ErrorCode.NOT_OWNER,
    }
)

STATE_GUARD_CODES = frozenset(
    {
        ErrorCode.ALREADY_REVIEWED,
        ErrorCode.ILLEGAL_TRANSITION,
        ErrorCode.NOT_PENDING,
        ErrorCode.NOT_ASSIGNED,
        ErrorCode.TERMINAL_STATE,
        ErrorCode.ORDER_NOT_CONFIRMED,
        ErrorCode.DELIVERY_ALREADY_EXISTS,
        ErrorCode.ALREADY_APPROVED,
        ErrorCode.APPLICATION_PENDING,
    }
)


class LifecycleError(ValidationError):
    """A named, recoverable failure of a lifecycle operation."""

    def __init__(self, code: ErrorCode, message: str, field: str = "status"):
        super().__init__({field: [message]})
        self.code = code

    def __str__(self):
        return f"{self.code.value}: {self.messages}"


def http_status_for(code: ErrorCode) -> int:
    """Map an error code to the HTTP status the API layer responds with."""
    if code == ErrorCode.NOT_FOUND:
        return 404
    if code == ErrorCode.NOT_AUTHENTICATED:
        return 401
    if code in AUTHORIZATION_CODES:
        return 403
    if code in STATE_GUARD_CODES:
        return 409
    return 400


def load_or_fail(repository, identifier, label: str):
    """Fetch an aggregate, turning a missing record into ``NOT_FOUND``."""
    try:
        return repository.get(identifier)
    except ObjectNotFoundError as exc:
        raise LifecycleError(ErrorCode.NOT_FOUND, f"{label} {identifier} not found", field="id") from exc
