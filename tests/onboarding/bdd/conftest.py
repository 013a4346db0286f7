"""Shared BDD fixtures and step definitions for the Onboarding domain."""

import pytest
from onboarding.account.account import Account
from onboarding.application.application import Application
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then

_PROFILES = {
    "seller": {
        "business_name": "Asha Traders",
        "email": "asha@example.com",
        "phone": "+91 98765 43210",
        "business_address": "14 Market Road, Pune",
    },
    "delivery_partner": {
        "full_name": "Ravi Kumar",
        "email": "ravi@example.com",
        "phone": "+91 91234 56789",
        "address": "12 MG Road, Bengaluru",
        "vehicle_type": "motorcycle",
    },
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured lifecycle and validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a newly registered "{role}" account'), target_fixture="account")
def registered_account(role):
    account = Account.register(name="Applicant", email="applicant@example.com", role=role)
    account._events.clear()
    return account


@given("the account has submitted an application", target_fixture="application")
def submitted_application(account):
    application = Application.submit(
        account_id=str(account.id),
        kind=account.role,
        profile=_PROFILES[account.role],
    )
    application._events.clear()
    return application


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the account approval status is "{status}"'))
def account_status_is(account, status):
    assert account.approval_status == status


@then(parsers.cfparse('the application status is "{status}"'))
def application_status_is(application, status):
    assert application.status == status


@then(parsers.cfparse('the action fails with "{code}"'))
def action_fails_with(error, code):
    assert error["exc"] is not None, f"Expected {code} but nothing was raised"
    assert isinstance(error["exc"], ValidationError)
    assert error["exc"].code.value == code
