"""Application tests for running the Approval Gate against stored accounts."""

import pytest
from onboarding.account.access import check_access
from onboarding.account.registration import RegisterAccount
from onboarding.application.review import ReviewApplication
from onboarding.application.submission import SubmitApplication
from protean import current_domain
from shared.access import Allow, Deny
from shared.errors import ErrorCode


def _register(role, email):
    return current_domain.process(RegisterAccount(name="Someone", email=email, role=role), asynchronous=False)


@pytest.fixture()
def seller_id():
    return _register("seller", "seller@example.com")


class TestCheckAccess:
    def test_missing_account_id_is_not_authenticated(self):
        decision = check_access(None, "buyer")
        assert isinstance(decision, Deny)
        assert decision.reason == ErrorCode.NOT_AUTHENTICATED

    def test_unknown_account_is_not_authenticated(self):
        decision = check_access("nobody", "buyer")
        assert decision.reason == ErrorCode.NOT_AUTHENTICATED

    def test_pending_seller_reaches_dashboard_only(self, seller_id):
        assert isinstance(check_access(seller_id, "seller", "/seller/dashboard"), Allow)
        decision = check_access(seller_id, "seller", "/seller/products")
        assert decision.reason == ErrorCode.PENDING_APPROVAL

    def test_role_mismatch(self, seller_id):
        decision = check_access(seller_id, "buyer")
        assert decision.reason == ErrorCode.ROLE_MISMATCH

    def test_approved_seller_passes_everywhere(self, seller_id, seller_profile_json):
        admin_id = _register("admin", "admin@example.com")
        application_id = current_domain.process(
            SubmitApplication(account_id=seller_id, kind="seller", profile=seller_profile_json),
            asynchronous=False,
        )
        current_domain.process(
            ReviewApplication(application_id=application_id, decision="approve", admin_id=admin_id),
            asynchronous=False,
        )
        assert check_access(seller_id, "seller", "/seller/products").allowed
