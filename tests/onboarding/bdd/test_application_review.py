"""BDD tests for application review."""

from pytest_bdd import parsers, scenarios, then, when
from shared.errors import LifecycleError

scenarios("features/application_review.feature")

ADMIN_ID = "admin-001"


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("an administrator approves the application")
def approve_application(application, account, error):
    try:
        application.approve(ADMIN_ID)
        account.approve()
    except LifecycleError as exc:
        error["exc"] = exc


@when(parsers.cfparse('an administrator rejects the application with "{notes}"'))
def reject_application(application, account, notes, error):
    try:
        application.reject(ADMIN_ID, notes)
        account.reject(notes)
    except LifecycleError as exc:
        error["exc"] = exc


@when("an administrator rejects the application without a reason")
def reject_without_reason(application, error):
    try:
        application.reject(ADMIN_ID, None)
    except LifecycleError as exc:
        error["exc"] = exc


@when("the account reapplies")
def reapply(account):
    account.reapply()


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the application records its reviewer")
def records_reviewer(application):
    assert application.reviewed_by == ADMIN_ID
    assert application.reviewed_at is not None


@then(parsers.cfparse('the account rejection reason is "{reason}"'))
def rejection_reason_is(account, reason):
    assert account.rejection_reason == reason


@then("the account has no rejection reason")
def no_rejection_reason(account):
    assert account.rejection_reason is None
