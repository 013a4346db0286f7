"""Account registration — command and handler."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from onboarding.account.account import Account
from onboarding.domain import onboarding
from shared.access import Role
from shared.logging import get_logger

logger = get_logger(__name__)


@onboarding.command(part_of="Account")
class RegisterAccount:
    """Sign up a new account under one of the marketplace roles."""

    name: String(required=True, max_length=255)
    email: String(required=True, max_length=254)
    role: String(required=True, choices=Role)


@onboarding.command_handler(part_of=Account)
class RegisterAccountHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        account = Account.register(name=command.name, email=command.email, role=command.role)
        current_domain.repository_for(Account).add(account)

        logger.info(
            "Account registered",
            account_id=str(account.id),
            role=account.role,
            approval_status=account.approval_status,
        )
        return str(account.id)
