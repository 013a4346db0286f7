"""Account access — the ordering context's copy of each account's role and standing.

Populated from Onboarding account events. Every order and delivery
command resolves its acting account here before running the Approval Gate.
"""

from protean.fields import DateTime, Identifier, String

from ordering.domain import ordering


@ordering.projection
class AccountAccess:
    account_id = Identifier(identifier=True, required=True)
    name = String(max_length=255)
    role = String(required=True, max_length=50)
    approval_status = String(required=True, max_length=20)
    updated_at = DateTime()
