"""Tests for the lifecycle error taxonomy and its HTTP mapping."""

import pytest
from shared.errors import ErrorCode, LifecycleError, http_status_for


class TestHttpStatusFor:
    def test_not_found(self):
        assert http_status_for(ErrorCode.NOT_FOUND) == 404

    def test_not_authenticated(self):
        assert http_status_for(ErrorCode.NOT_AUTHENTICATED) == 401

    @pytest.mark.parametrize(
        "code", [ErrorCode.ROLE_MISMATCH, ErrorCode.PENDING_APPROVAL, ErrorCode.NOT_OWNER]
    )
    def test_authorization_failures_are_forbidden(self, code):
        assert http_status_for(code) == 403

    @pytest.mark.parametrize(
        "code",
        [
            ErrorCode.ALREADY_REVIEWED,
            ErrorCode.ILLEGAL_TRANSITION,
            ErrorCode.NOT_PENDING,
            ErrorCode.NOT_ASSIGNED,
            ErrorCode.TERMINAL_STATE,
            ErrorCode.ORDER_NOT_CONFIRMED,
            ErrorCode.DELIVERY_ALREADY_EXISTS,
        ],
    )
    def test_state_guards_are_conflicts(self, code):
        assert http_status_for(code) == 409

    @pytest.mark.parametrize("code", [ErrorCode.MISSING_REASON, ErrorCode.PARTNER_UNAVAILABLE])
    def test_input_failures_are_bad_requests(self, code):
        assert http_status_for(code) == 400


class TestLifecycleError:
    def test_carries_code_and_field_message(self):
        exc = LifecycleError(ErrorCode.NOT_PENDING, "Delivery is assigned")
        assert exc.code == ErrorCode.NOT_PENDING
        assert exc.messages == {"status": ["Delivery is assigned"]}

    def test_custom_field(self):
        exc = LifecycleError(ErrorCode.MISSING_REASON, "Reason required", field="notes")
        assert exc.messages == {"notes": ["Reason required"]}

    def test_string_form_names_the_code(self):
        assert str(LifecycleError(ErrorCode.TERMINAL_STATE, "done")).startswith("TERMINAL_STATE")
