"""Application submission — command and handler.

A submission is accepted only when the account's role matches the kind of
application, the account is not already approved, and no other application
of the account is still waiting for review. Submitting after a rejection
puts the account back to pending in the same unit of work.
"""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from onboarding.account.account import Account
from onboarding.application.application import Application, ApplicationKind, ApplicationStatus
from onboarding.domain import onboarding
from shared.errors import ErrorCode, LifecycleError, load_or_fail
from shared.logging import get_logger

logger = get_logger(__name__)


@onboarding.command(part_of="Application")
class SubmitApplication:
    """Submit seller or delivery-partner details for administrator review."""

    account_id: Identifier(required=True)
    kind: String(required=True, choices=ApplicationKind)
    profile: Text(required=True)  # JSON object of profile fields
    documents: Text()  # JSON list of document references


def pending_applications_for(account_id) -> list:
    return (
        current_domain.repository_for(Application)
        ._dao.query.filter(account_id=str(account_id), status=ApplicationStatus.PENDING.value)
        .all()
        .items
    )


@onboarding.command_handler(part_of=Application)
class SubmitApplicationHandler:
    @handle(SubmitApplication)
    def submit_application(self, command):
        account_repo = current_domain.repository_for(Account)
        account = load_or_fail(account_repo, command.account_id, "Account")

        if account.role != command.kind:
            raise LifecycleError(
                ErrorCode.ROLE_MISMATCH,
                f"A {account.role} account cannot submit a {command.kind} application",
                field="kind",
            )
        if account.is_approved:
            raise LifecycleError(ErrorCode.ALREADY_APPROVED, "Account is already approved", field="account")
        if pending_applications_for(account.id):
            raise LifecycleError(
                ErrorCode.APPLICATION_PENDING,
                "Account already has an application awaiting review",
                field="account",
            )

        profile = json.loads(command.profile) if isinstance(command.profile, str) else command.profile
        documents = json.loads(command.documents) if command.documents else []

        application = Application.submit(
            account_id=str(account.id),
            kind=command.kind,
            profile=profile,
            documents=documents,
        )

        if account.is_rejected:
            account.reapply()
            account_repo.add(account)

        current_domain.repository_for(Application).add(application)

        logger.info(
            "Application submitted",
            application_id=str(application.id),
            account_id=str(account.id),
            kind=application.kind,
        )
        return str(application.id)
