"""Inbound cross-domain event handler — Ordering reacts to Onboarding account events.

Keeps the AccountAccess read model in step with each account's role and
approval standing.

Cross-domain events are imported from shared.events.onboarding and
registered as external events via ordering.register_external_event().
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from ordering.domain import ordering
from ordering.order.order import Order
from ordering.projections.account_access import AccountAccess
from shared.access import ApprovalStatus
from shared.events.onboarding import AccountApproved, AccountReapplied, AccountRegistered, AccountRejected
from shared.logging import get_logger

logger = get_logger(__name__)

ordering.register_external_event(AccountRegistered, "Onboarding.AccountRegistered.v1")
ordering.register_external_event(AccountApproved, "Onboarding.AccountApproved.v1")
ordering.register_external_event(AccountRejected, "Onboarding.AccountRejected.v1")
ordering.register_external_event(AccountReapplied, "Onboarding.AccountReapplied.v1")


@ordering.event_handler(part_of=Order, stream_category="onboarding::account")
class OnboardingAccountEventHandler:
    """Mirrors account standing into the AccountAccess read model."""

    def _set_status(self, account_id, role, approval_status, changed_at):
        repo = current_domain.repository_for(AccountAccess)
        try:
            record = repo.get(str(account_id))
        except ObjectNotFoundError:
            record = AccountAccess(account_id=str(account_id), role=role, approval_status=approval_status)
        record.approval_status = approval_status
        record.updated_at = changed_at
        repo.add(record)

    @handle(AccountRegistered)
    def on_account_registered(self, event: AccountRegistered) -> None:
        logger.info("Tracking new account", account_id=str(event.account_id), role=event.role)
        current_domain.repository_for(AccountAccess).add(
            AccountAccess(
                account_id=str(event.account_id),
                name=event.name,
                role=event.role,
                approval_status=event.approval_status,
                updated_at=event.registered_at,
            )
        )

    @handle(AccountApproved)
    def on_account_approved(self, event: AccountApproved) -> None:
        logger.info("Account approved", account_id=str(event.account_id), role=event.role)
        self._set_status(event.account_id, event.role, ApprovalStatus.APPROVED.value, event.approved_at)

    @handle(AccountRejected)
    def on_account_rejected(self, event: AccountRejected) -> None:
        logger.info("Account rejected", account_id=str(event.account_id), role=event.role)
        self._set_status(event.account_id, event.role, ApprovalStatus.REJECTED.value, event.rejected_at)

    @handle(AccountReapplied)
    def on_account_reapplied(self, event: AccountReapplied) -> None:
        logger.info("Account reapplied", account_id=str(event.account_id), role=event.role)
        self._set_status(event.account_id, event.role, ApprovalStatus.PENDING.value, event.reapplied_at)
