"""Pydantic request/response schemas for the Onboarding API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterAccountRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"name": "Asha Traders", "email": "asha@example.com", "role": "seller"}]
        }
    }

    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=254)
    role: str = Field(..., description="buyer, seller, delivery_partner, or admin")


class SubmitApplicationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "account_id": "acc-001",
                    "kind": "delivery_partner",
                    "profile": {
                        "full_name": "Ravi Kumar",
                        "email": "ravi@example.com",
                        "phone": "+91 98765 43210",
                        "address": "12 MG Road, Bengaluru",
                        "vehicle_type": "scooter",
                        "vehicle_number": "KA01AB1234",
                    },
                    "documents": ["license.pdf"],
                }
            ]
        }
    }

    account_id: str
    kind: str
    profile: dict[str, Any]
    documents: list[str] = Field(default_factory=list)


class ReviewRequest(BaseModel):
    notes: str | None = None


# --- Response Schemas ---


class AccountIdResponse(BaseModel):
    account_id: str


class ApplicationIdResponse(BaseModel):
    application_id: str


class AccountResponse(BaseModel):
    account_id: str
    name: str
    email: str
    role: str
    approval_status: str
    is_approved: bool
    is_rejected: bool
    rejection_reason: str | None = None


class AccessDecisionResponse(BaseModel):
    allowed: bool
    reason: str | None = None


class ApplicationResponse(BaseModel):
    application_id: str
    account_id: str
    kind: str
    status: str
    display_name: str
    profile: dict[str, Any]
    documents: list[str]
    admin_notes: str | None = None
    reviewed_by: str | None = None
    reviewed_at: str | None = None
    submitted_at: str | None = None
