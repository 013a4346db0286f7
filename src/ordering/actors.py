"""Acting-account resolution for order and delivery commands.

Commands carry the id of the account performing them. The account's role
and approval standing come from the AccountAccess read model and are run
through the Approval Gate before any aggregate is touched.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.projections.account_access import AccountAccess
from shared.access import Allow, Role, can_access, require_access
from shared.errors import ErrorCode, LifecycleError


def load_actor(actor_id) -> AccountAccess | None:
    if not actor_id:
        return None
    try:
        return current_domain.repository_for(AccountAccess).get(str(actor_id))
    except ObjectNotFoundError:
        return None


def authorize(actor_id, required_role, area: str) -> AccountAccess:
    """Load the actor and require ``required_role`` for ``area``."""
    actor = load_actor(actor_id)
    require_access(actor, required_role, area)
    return actor


def authorize_any(actor_id, roles, area: str) -> AccountAccess:
    """Load the actor and require one of ``roles`` for ``area``."""
    actor = load_actor(actor_id)
    if actor is not None and actor.role not in {role.value for role in roles}:
        raise LifecycleError(
            ErrorCode.ROLE_MISMATCH,
            f"A {actor.role} account cannot act on {area}",
            field="account",
        )
    require_access(actor, Role(actor.role) if actor else next(iter(roles)), area)
    return actor


def assert_owner(actor: AccountAccess, owner_id, label: str) -> None:
    if str(actor.account_id) != str(owner_id):
        raise LifecycleError(
            ErrorCode.NOT_OWNER,
            f"Account {actor.account_id} does not own this {label}",
            field="account",
        )


def is_approved_partner(partner_id) -> bool:
    """Whether ``partner_id`` belongs to an approved delivery-partner account."""
    partner = load_actor(partner_id)
    return isinstance(can_access(partner, Role.DELIVERY_PARTNER, "deliveries"), Allow)
