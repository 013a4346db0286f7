"""Onboarding load test scenarios.

Sellers and delivery partners sign up, apply, and get reviewed by an
administrator. Roughly one in four applications is rejected and the
applicant applies again.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import account_data, application_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OnboardingState


def register(client, role: str) -> str | None:
    with client.post("/accounts", json=account_data(role), catch_response=True, name="POST /accounts") as resp:
        if resp.status_code == 201:
            return resp.json()["account_id"]
        resp.failure(f"Register {role} failed: {resp.status_code} — {extract_error_detail(resp)}")
        return None


class ApplicationReviewJourney(SequentialTaskSet):
    """Register -> Submit Application -> Review (-> Reapply -> Approve).

    Generates events: AccountRegistered, ApplicationSubmitted,
    ApplicationApproved/Rejected, AccountApproved/Rejected, AccountReapplied.
    """

    def on_start(self):
        self.state = OnboardingState(kind=random.choice(["seller", "delivery_partner"]))
        self.state.admin_id = register(self.client, "admin")

    def _submit(self):
        with self.client.post(
            "/applications",
            json=application_data(self.state.account_id, self.state.kind),
            catch_response=True,
            name="POST /applications",
        ) as resp:
            if resp.status_code == 201:
                self.state.application_id = resp.json()["application_id"]
            else:
                resp.failure(f"Submit application failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def _decide(self, decision: str, notes: str | None = None):
        with self.client.post(
            f"/applications/{self.state.application_id}/{decision}",
            json={"notes": notes},
            headers={"X-Account-Id": self.state.admin_id},
            catch_response=True,
            name=f"POST /applications/{{id}}/{decision}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"{decision} failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def register_applicant(self):
        self.state.account_id = register(self.client, self.state.kind)
        if not (self.state.account_id and self.state.admin_id):
            self.interrupt()

    @task
    def submit_application(self):
        self._submit()

    @task
    def check_gate_while_pending(self):
        role = self.state.kind
        with self.client.get(
            f"/accounts/{self.state.account_id}/access",
            params={"role": role, "path": "/seller/dashboard" if role == "seller" else "/deliveries"},
            catch_response=True,
            name="GET /accounts/{id}/access",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Access check failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def review(self):
        if random.random() < 0.25:
            self._decide("reject", notes="Documents could not be verified")
            self._submit()
        self._decide("approve", notes="Verified")

    @task
    def done(self):
        self.interrupt()


class OnboardingUser(HttpUser):
    """Applicants moving through review."""

    wait_time = between(1, 3)
    tasks = [ApplicationReviewJourney]
