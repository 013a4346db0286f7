"""Application aggregate — a seller or delivery-partner request for approval.

Applications are append-only: a decided application is never reopened.
A rejected account reapplies by submitting a new application row.
"""

import json
import re
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text, ValueObject

from onboarding.domain import onboarding
from onboarding.shared.contact import EmailAddress, PhoneNumber
from shared.errors import ErrorCode, LifecycleError

_GSTIN_PATTERN = re.compile(r"^\d{2}[A-Z]{5}\d{4}[A-Z][A-Z\d]Z[A-Z\d]$")
_PAN_PATTERN = re.compile(r"^[A-Z]{5}\d{4}[A-Z]$")


class ApplicationKind(Enum):
    SELLER = "seller"
    DELIVERY_PARTNER = "delivery_partner"


class ApplicationStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReviewDecision(Enum):
    APPROVE = "approve"
    REJECT = "reject"


class VehicleType(Enum):
    MOTORCYCLE = "motorcycle"
    SCOOTER = "scooter"
    BICYCLE = "bicycle"
    CAR = "car"
    VAN = "van"


@onboarding.value_object(part_of="Application")
class SellerProfile:
    """Business details a seller submits for review."""

    business_name: String(required=True, max_length=255)
    email: ValueObject(EmailAddress, required=True)
    phone: ValueObject(PhoneNumber, required=True)
    business_address: Text(required=True)
    gst_number: String(max_length=15)
    pan_number: String(max_length=10)

    @invariant.post
    def tax_identifiers_are_well_formed(self):
        if self.gst_number and not _GSTIN_PATTERN.match(self.gst_number):
            raise ValidationError({"gst_number": [f"Invalid GST number: {self.gst_number!r}"]})
        if self.pan_number and not _PAN_PATTERN.match(self.pan_number):
            raise ValidationError({"pan_number": [f"Invalid PAN: {self.pan_number!r}"]})


@onboarding.value_object(part_of="Application")
class PartnerProfile:
    """Personal and vehicle details a delivery partner submits for review."""

    full_name: String(required=True, max_length=255)
    email: ValueObject(EmailAddress, required=True)
    phone: ValueObject(PhoneNumber, required=True)
    address: Text(required=True)
    vehicle_type: String(required=True, choices=VehicleType)
    vehicle_number: String(max_length=20)


@onboarding.value_object(part_of="Application")
class ReviewRecord:
    """Who decided an application, when, and with what notes.

    Replaced wholesale, so reviewer and timestamp are always set together.
    """

    reviewed_by: Identifier(required=True)
    reviewed_at: DateTime(required=True)
    admin_notes: Text()


@onboarding.aggregate
class Application:
    """A request to operate as a seller or delivery partner."""

    account_id: Identifier(required=True)
    kind: String(required=True, choices=ApplicationKind)
    seller_profile: ValueObject(SellerProfile)
    partner_profile: ValueObject(PartnerProfile)
    documents_submitted: Text()  # JSON list of document references
    status: String(choices=ApplicationStatus, default=ApplicationStatus.PENDING.value)
    review: ValueObject(ReviewRecord)
    submitted_at: DateTime()

    @invariant.post
    def profile_matches_kind(self):
        if self.kind == ApplicationKind.SELLER.value:
            if self.seller_profile is None or self.partner_profile is not None:
                raise ValidationError({"profile": ["A seller application carries a seller profile only"]})
        elif self.kind == ApplicationKind.DELIVERY_PARTNER.value:
            if self.partner_profile is None or self.seller_profile is not None:
                raise ValidationError({"profile": ["A delivery partner application carries a partner profile only"]})

    @invariant.post
    def review_recorded_exactly_when_decided(self):
        pending = self.status == ApplicationStatus.PENDING.value
        if pending and self.review is not None:
            raise ValidationError({"review": ["A pending application has no review"]})
        if not pending and self.review is None:
            raise ValidationError({"review": ["A decided application must record its review"]})

    # ------------------------------------------------------------------
    # Read helpers
    # ------------------------------------------------------------------
    @property
    def profile(self):
        return self.seller_profile if self.kind == ApplicationKind.SELLER.value else self.partner_profile

    @property
    def display_name(self) -> str:
        if self.kind == ApplicationKind.SELLER.value:
            return self.seller_profile.business_name
        return self.partner_profile.full_name

    @property
    def documents(self) -> list:
        return json.loads(self.documents_submitted) if self.documents_submitted else []

    @property
    def reviewed_by(self):
        return self.review.reviewed_by if self.review else None

    @property
    def reviewed_at(self):
        return self.review.reviewed_at if self.review else None

    @property
    def admin_notes(self):
        return self.review.admin_notes if self.review else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @classmethod
    def submit(cls, account_id, kind, profile, documents=None):
        from onboarding.application.events import ApplicationSubmitted

        now = datetime.now(UTC)
        profile_fields = dict(profile)
        profile_fields["email"] = EmailAddress(address=profile_fields.get("email"))
        profile_fields["phone"] = PhoneNumber(number=profile_fields.get("phone"))

        if kind == ApplicationKind.SELLER.value:
            profiles = {"seller_profile": SellerProfile(**profile_fields)}
        else:
            profiles = {"partner_profile": PartnerProfile(**profile_fields)}

        application = cls(
            account_id=account_id,
            kind=kind,
            documents_submitted=json.dumps(documents or []),
            status=ApplicationStatus.PENDING.value,
            submitted_at=now,
            **profiles,
        )
        application.raise_(
            ApplicationSubmitted(
                application_id=str(application.id),
                account_id=str(account_id),
                kind=kind,
                display_name=application.display_name,
                documents=application.documents_submitted,
                submitted_at=now,
            )
        )
        return application

    def _decide(self, status, admin_id, notes):
        with atomic_change(self):
            self.status = status.value
            self.review = ReviewRecord(
                reviewed_by=admin_id,
                reviewed_at=datetime.now(UTC),
                admin_notes=notes,
            )

    def _assert_pending(self):
        if self.status != ApplicationStatus.PENDING.value:
            raise LifecycleError(
                ErrorCode.ALREADY_REVIEWED,
                f"Application has already been {self.status}",
            )

    def approve(self, admin_id, notes=None):
        from onboarding.application.events import ApplicationApproved

        self._assert_pending()
        self._decide(ApplicationStatus.APPROVED, admin_id, notes)

        profile = self.profile
        self.raise_(
            ApplicationApproved(
                application_id=str(self.id),
                account_id=str(self.account_id),
                kind=self.kind,
                display_name=self.display_name,
                phone=profile.phone.number,
                vehicle_type=getattr(profile, "vehicle_type", None),
                reviewed_by=str(admin_id),
                reviewed_at=self.reviewed_at,
            )
        )

    def reject(self, admin_id, notes):
        from onboarding.application.events import ApplicationRejected

        self._assert_pending()
        if not notes or not notes.strip():
            raise LifecycleError(ErrorCode.MISSING_REASON, "A rejection reason is required", field="notes")
        self._decide(ApplicationStatus.REJECTED, admin_id, notes)

        self.raise_(
            ApplicationRejected(
                application_id=str(self.id),
                account_id=str(self.account_id),
                kind=self.kind,
                reason=notes,
                reviewed_by=str(admin_id),
                reviewed_at=self.reviewed_at,
            )
        )
