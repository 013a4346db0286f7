"""FastAPI endpoints for the Onboarding domain."""

import json

from fastapi import APIRouter, Header
from protean.utils.globals import current_domain

from onboarding.account.access import check_access
from onboarding.account.account import Account
from onboarding.account.registration import RegisterAccount
from onboarding.api.schemas import (
    AccessDecisionResponse,
    AccountIdResponse,
    AccountResponse,
    ApplicationIdResponse,
    ApplicationResponse,
    RegisterAccountRequest,
    ReviewRequest,
    SubmitApplicationRequest,
)
from onboarding.application.application import Application, ReviewDecision
from onboarding.application.review import ReviewApplication
from onboarding.application.submission import SubmitApplication
from shared.access import Deny, Role
from shared.errors import load_or_fail
from shared.http import require_actor

account_router = APIRouter(prefix="/accounts", tags=["accounts"])
application_router = APIRouter(prefix="/applications", tags=["applications"])


def _account_response(account) -> AccountResponse:
    return AccountResponse(
        account_id=str(account.id),
        name=account.name,
        email=account.email.address,
        role=account.role,
        approval_status=account.approval_status,
        is_approved=account.is_approved,
        is_rejected=account.is_rejected,
        rejection_reason=account.rejection_reason,
    )


def _application_response(application) -> ApplicationResponse:
    profile = application.profile.to_dict()
    profile["email"] = application.profile.email.address
    profile["phone"] = application.profile.phone.number
    return ApplicationResponse(
        application_id=str(application.id),
        account_id=str(application.account_id),
        kind=application.kind,
        status=application.status,
        display_name=application.display_name,
        profile=profile,
        documents=application.documents,
        admin_notes=application.admin_notes,
        reviewed_by=str(application.reviewed_by) if application.reviewed_by else None,
        reviewed_at=application.reviewed_at.isoformat() if application.reviewed_at else None,
        submitted_at=application.submitted_at.isoformat() if application.submitted_at else None,
    )


# --- Accounts ---


@account_router.post("", status_code=201, response_model=AccountIdResponse)
async def register_account(body: RegisterAccountRequest) -> AccountIdResponse:
    command = RegisterAccount(name=body.name, email=body.email, role=body.role)
    result = current_domain.process(command, asynchronous=False)
    return AccountIdResponse(account_id=result)


@account_router.get("/{account_id}", response_model=AccountResponse)
async def get_account(account_id: str) -> AccountResponse:
    account = load_or_fail(current_domain.repository_for(Account), account_id, "Account")
    return _account_response(account)


@account_router.get("/{account_id}/access", response_model=AccessDecisionResponse)
async def get_access(account_id: str, role: Role, path: str | None = None) -> AccessDecisionResponse:
    decision = check_access(account_id, role, path)
    if isinstance(decision, Deny):
        return AccessDecisionResponse(allowed=False, reason=decision.reason.value)
    return AccessDecisionResponse(allowed=True)


# --- Applications ---


@application_router.post("", status_code=201, response_model=ApplicationIdResponse)
async def submit_application(body: SubmitApplicationRequest) -> ApplicationIdResponse:
    command = SubmitApplication(
        account_id=body.account_id,
        kind=body.kind,
        profile=json.dumps(body.profile),
        documents=json.dumps(body.documents),
    )
    result = current_domain.process(command, asynchronous=False)
    return ApplicationIdResponse(application_id=result)


@application_router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(application_id: str) -> ApplicationResponse:
    application = load_or_fail(current_domain.repository_for(Application), application_id, "Application")
    return _application_response(application)


async def _review(application_id, decision, admin_id, notes) -> ApplicationResponse:
    command = ReviewApplication(
        application_id=application_id,
        decision=decision.value,
        admin_id=require_actor(admin_id),
        notes=notes,
    )
    current_domain.process(command, asynchronous=False)
    return await get_application(application_id)


@application_router.post("/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: str,
    body: ReviewRequest | None = None,
    x_account_id: str | None = Header(default=None),
) -> ApplicationResponse:
    notes = body.notes if body else None
    return await _review(application_id, ReviewDecision.APPROVE, x_account_id, notes)


@application_router.post("/{application_id}/reject", response_model=ApplicationResponse)
async def reject_application(
    application_id: str,
    body: ReviewRequest,
    x_account_id: str | None = Header(default=None),
) -> ApplicationResponse:
    return await _review(application_id, ReviewDecision.REJECT, x_account_id, body.notes)
