"""Application tests for account registration via domain.process()."""

import pytest
from onboarding.account.account import Account
from onboarding.account.registration import RegisterAccount
from protean import current_domain
from protean.exceptions import ValidationError


def _register(role, email="user@example.com"):
    return current_domain.process(
        RegisterAccount(name="Test User", email=email, role=role),
        asynchronous=False,
    )


class TestRegisterAccount:
    def test_persists_pending_seller(self):
        account_id = _register("seller")
        account = current_domain.repository_for(Account).get(account_id)
        assert account.role == "seller"
        assert account.approval_status == "pending"
        assert account.email.address == "user@example.com"

    def test_persists_approved_buyer(self):
        account_id = _register("buyer")
        account = current_domain.repository_for(Account).get(account_id)
        assert account.is_approved

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            _register("wholesaler")
