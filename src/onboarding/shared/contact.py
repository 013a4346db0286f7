"""Contact details shared by accounts and applications."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from onboarding.domain import onboarding


@onboarding.value_object
class EmailAddress:
    """A structurally valid email address."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)
        if not local_part or "." not in domain_part or ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
        if domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})


@onboarding.value_object
class PhoneNumber:
    """Digits with optional spaces, hyphens, parentheses, and a leading +."""

    number: String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        number = self.number

        if not re.search(r"\d", number) or not re.match(r"^\+?[\d\s\-()]+$", number):
            raise ValidationError({"phone": [f"Invalid phone number: {number!r}"]})
