"""Application review — an administrator approves or rejects an application.

The application and its account change in one unit of work: either both
reflect the decision or neither does.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from onboarding.account.account import Account
from onboarding.application.application import Application, ReviewDecision
from onboarding.domain import onboarding
from shared.access import Role, require_access
from shared.errors import load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@onboarding.command(part_of="Application")
class ReviewApplication:
    """Record an administrator's decision on a pending application."""

    application_id: Identifier(required=True)
    decision: String(required=True, choices=ReviewDecision)
    admin_id: Identifier(required=True)
    notes: Text()


@onboarding.command_handler(part_of=Application)
class ReviewApplicationHandler:
    @handle(ReviewApplication)
    def review_application(self, command):
        account_repo = current_domain.repository_for(Account)
        application_repo = current_domain.repository_for(Application)

        try:
            admin = account_repo.get(command.admin_id)
        except ObjectNotFoundError:
            admin = None
        require_access(admin, Role.ADMIN)

        application = load_or_fail(application_repo, command.application_id, "Application")
        account = load_or_fail(account_repo, application.account_id, "Account")

        if command.decision == ReviewDecision.APPROVE.value:
            application.approve(command.admin_id, command.notes)
            account.approve()
        else:
            application.reject(command.admin_id, command.notes)
            account.reject(command.notes)

        application_repo.add(application)
        account_repo.add(account)

        logger.info(
            "Application reviewed",
            application_id=str(application.id),
            account_id=str(account.id),
            decision=command.decision,
            reviewed_by=str(command.admin_id),
        )
        return str(application.id)
