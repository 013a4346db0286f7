"""Approval Gate lookups against stored accounts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from onboarding.account.account import Account
from shared.access import Allow, Deny, can_access
from shared.errors import ErrorCode


def check_access(account_id, required_role, requested_path=None) -> Allow | Deny:
    """Run the gate for the account with ``account_id``.

    An unknown or missing account id is treated as an anonymous request.
    """
    if not account_id:
        return Deny(ErrorCode.NOT_AUTHENTICATED)

    try:
        account = current_domain.repository_for(Account).get(account_id)
    except ObjectNotFoundError:
        return Deny(ErrorCode.NOT_AUTHENTICATED)

    return can_access(account, required_role, requested_path)
