"""Approval Gate: decides whether an account may reach a role-scoped area.

The gate is a pure function of the account snapshot handed over by the
session layer. It never redirects, notifies, or mutates anything; callers
turn a ``Deny`` into whatever response their surface needs.

Sellers whose approval is still outstanding keep access to a fixed set of
self-service areas (dashboard, profile, settings). Delivery partners get no
partial access: until approved, every delivery-partner area is denied.
"""

from dataclasses import dataclass
from enum import Enum

from shared.errors import ErrorCode, LifecycleError


class Role(Enum):
    BUYER = "buyer"
    SELLER = "seller"
    DELIVERY_PARTNER = "delivery_partner"
    ADMIN = "admin"


class ApprovalStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


# Roles that must pass an administrator review before gaining capabilities
REVIEWED_ROLES = frozenset({Role.SELLER, Role.DELIVERY_PARTNER})

SELLER_PENDING_ALLOW_LIST = frozenset({"dashboard", "profile", "settings"})


@dataclass(frozen=True)
class AccountSnapshot:
    """The slice of an account the gate needs, as supplied per request."""

    account_id: str
    role: str
    approval_status: str


@dataclass(frozen=True)
class Allow:
    allowed: bool = True


@dataclass(frozen=True)
class Deny:
    reason: ErrorCode
    allowed: bool = False


def initial_approval_status(role: str) -> str:
    """Buyers and admins start approved; reviewed roles start pending."""
    if role in {r.value for r in REVIEWED_ROLES}:
        return ApprovalStatus.PENDING.value
    return ApprovalStatus.APPROVED.value


def _section(requested_path: str | None) -> str:
    """Reduce a requested path like ``/seller/profile/edit`` to ``profile``."""
    if not requested_path:
        return ""
    parts = [p for p in requested_path.strip().lower().split("/") if p]
    if parts and parts[0] in {"seller", "sellers"}:
        parts = parts[1:]
    return parts[0] if parts else ""


def can_access(account, required_role, requested_path: str | None = None) -> Allow | Deny:
    """Decide whether ``account`` may reach ``requested_path`` under ``required_role``.

    ``account`` is anything exposing ``role`` and ``approval_status``
    (an ``AccountSnapshot``, the onboarding ``Account`` aggregate, or an
    ``AccountAccess`` read model record), or ``None`` when unauthenticated.
    """
    if account is None:
        return Deny(ErrorCode.NOT_AUTHENTICATED)

    required = Role(required_role) if not isinstance(required_role, Role) else required_role
    if account.role != required.value:
        return Deny(ErrorCode.ROLE_MISMATCH)

    if account.approval_status == ApprovalStatus.APPROVED.value:
        return Allow()

    if required == Role.SELLER:
        if _section(requested_path) in SELLER_PENDING_ALLOW_LIST:
            return Allow()
        return Deny(ErrorCode.PENDING_APPROVAL)

    # Pending delivery partners reach nothing
    return Deny(ErrorCode.PENDING_APPROVAL)


_DENIAL_MESSAGES = {
    ErrorCode.NOT_AUTHENTICATED: "Authentication required",
    ErrorCode.ROLE_MISMATCH: "Account role is not permitted to perform this action",
    ErrorCode.PENDING_APPROVAL: "Account is pending administrator approval",
}


def require_access(account, required_role, requested_path: str | None = None) -> None:
    """Raise a ``LifecycleError`` unless the gate allows the request."""
    decision = can_access(account, required_role, requested_path)
    if isinstance(decision, Deny):
        raise LifecycleError(decision.reason, _DENIAL_MESSAGES[decision.reason], field="account")
