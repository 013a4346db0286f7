"""Account aggregate — a marketplace user and their approval standing."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, ValueObject

from onboarding.domain import onboarding
from onboarding.shared.contact import EmailAddress
from shared.access import REVIEWED_ROLES, AccountSnapshot, ApprovalStatus, Role, initial_approval_status
from shared.errors import ErrorCode, LifecycleError


@onboarding.aggregate
class Account:
    """A person using the marketplace under exactly one role.

    Buyers and admins are approved the moment they register. Sellers and
    delivery partners start pending and move to approved or rejected only
    through an application review. A rejected account may reapply, which
    puts it back to pending and clears the previous rejection reason.
    """

    name: String(required=True, max_length=255)
    email: ValueObject(EmailAddress, required=True)
    role: String(required=True, choices=Role)
    approval_status: String(choices=ApprovalStatus, default=ApprovalStatus.PENDING.value)
    rejection_reason: String(max_length=1000)
    registered_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def unreviewed_roles_are_always_approved(self):
        if self.role and not self.requires_review and self.approval_status != ApprovalStatus.APPROVED.value:
            raise ValidationError({"approval_status": [f"{self.role} accounts are approved at signup"]})

    @invariant.post
    def rejection_reason_only_while_rejected(self):
        rejected = self.approval_status == ApprovalStatus.REJECTED.value
        if rejected and not self.rejection_reason:
            raise ValidationError({"rejection_reason": ["A rejected account must carry a reason"]})
        if not rejected and self.rejection_reason:
            raise ValidationError({"rejection_reason": ["Only rejected accounts carry a rejection reason"]})

    @property
    def is_approved(self) -> bool:
        return self.approval_status == ApprovalStatus.APPROVED.value

    @property
    def is_rejected(self) -> bool:
        return self.approval_status == ApprovalStatus.REJECTED.value

    @property
    def requires_review(self) -> bool:
        return self.role in {role.value for role in REVIEWED_ROLES}

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            account_id=str(self.id),
            role=self.role,
            approval_status=self.approval_status,
        )

    @classmethod
    def register(cls, name, email, role):
        from onboarding.account.events import AccountRegistered

        now = datetime.now(UTC)
        account = cls(
            name=name,
            email=EmailAddress(address=email),
            role=role,
            approval_status=initial_approval_status(role),
            registered_at=now,
            updated_at=now,
        )
        account.raise_(
            AccountRegistered(
                account_id=str(account.id),
                name=name,
                email=email,
                role=role,
                approval_status=account.approval_status,
                registered_at=now,
            )
        )
        return account

    def _assert_reviewable(self):
        if not self.requires_review:
            raise LifecycleError(
                ErrorCode.ROLE_MISMATCH,
                f"{self.role} accounts are not subject to review",
                field="role",
            )
        if self.approval_status != ApprovalStatus.PENDING.value:
            raise LifecycleError(
                ErrorCode.ALREADY_REVIEWED,
                f"Account is already {self.approval_status}",
                field="approval_status",
            )

    def approve(self):
        from onboarding.account.events import AccountApproved

        self._assert_reviewable()

        now = datetime.now(UTC)
        with atomic_change(self):
            self.approval_status = ApprovalStatus.APPROVED.value
            self.rejection_reason = None
            self.updated_at = now

        self.raise_(AccountApproved(account_id=str(self.id), role=self.role, approved_at=now))

    def reject(self, reason):
        from onboarding.account.events import AccountRejected

        self._assert_reviewable()
        if not reason or not reason.strip():
            raise LifecycleError(ErrorCode.MISSING_REASON, "A rejection reason is required", field="reason")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.approval_status = ApprovalStatus.REJECTED.value
            self.rejection_reason = reason
            self.updated_at = now

        self.raise_(AccountRejected(account_id=str(self.id), role=self.role, reason=reason, rejected_at=now))

    def reapply(self):
        from onboarding.account.events import AccountReapplied

        if not self.is_rejected:
            raise LifecycleError(
                ErrorCode.ILLEGAL_TRANSITION,
                f"Cannot reapply from {self.approval_status}",
                field="approval_status",
            )

        now = datetime.now(UTC)
        with atomic_change(self):
            self.approval_status = ApprovalStatus.PENDING.value
            self.rejection_reason = None
            self.updated_at = now

        self.raise_(AccountReapplied(account_id=str(self.id), role=self.role, reapplied_at=now))
