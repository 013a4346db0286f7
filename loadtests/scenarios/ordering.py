"""Ordering load test scenarios.

A buyer orders from an approved seller, the seller accepts and requests a
delivery, and an approved delivery partner carries it to the door. Some
journeys cancel instead, either the order before acceptance or the
delivery before pickup.

Accounts reach the ordering read model asynchronously, so the first
ordering call of a journey is retried until the account is known there.
"""

import random
import time

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import application_data, delivery_data, order_data
from loadtests.helpers.response import error_code, extract_error_detail
from loadtests.helpers.state import FulfillmentState
from loadtests.scenarios.onboarding import register

_PROPAGATION_RETRIES = 10
_PROPAGATION_DELAY = 0.5
_NOT_YET_PROPAGATED = {"NOT_AUTHENTICATED", "NOT_FOUND", "PENDING_APPROVAL"}


def _as(account_id: str) -> dict:
    return {"X-Account-Id": account_id}


class OrderDeliveryJourney(SequentialTaskSet):
    """Onboard -> Place Order -> Accept -> Create Delivery -> Assign -> Deliver.

    Generates events: OrderPlaced, OrderConfirmed, DeliveryCreated,
    PartnerAssigned, DeliveryStarted, DeliveryPickedUp,
    DeliveryOutForDelivery, DeliveryCompleted, or the cancellation events.
    """

    def on_start(self):
        self.state = FulfillmentState()

    def _approved(self, role: str) -> str | None:
        account_id = register(self.client, role)
        if account_id is None or role == "buyer":
            return account_id

        resp = self.client.post("/applications", json=application_data(account_id, role), name="POST /applications")
        if resp.status_code != 201:
            return None
        application_id = resp.json()["application_id"]
        resp = self.client.post(
            f"/applications/{application_id}/approve",
            headers=_as(self.state.admin_id),
            name="POST /applications/{id}/approve",
        )
        return account_id if resp.status_code == 200 else None

    def _put(self, path: str, actor_id: str, name: str, json=None) -> bool:
        with self.client.put(path, json=json, headers=_as(actor_id), catch_response=True, name=name) as resp:
            if resp.status_code == 200:
                return True
            resp.failure(f"{name} failed: {resp.status_code} — {extract_error_detail(resp)}")
            return False

    @task
    def onboard_accounts(self):
        self.state.admin_id = register(self.client, "admin")
        self.state.buyer_id = self._approved("buyer")
        self.state.seller_id = self._approved("seller")
        self.state.partner_id = self._approved("delivery_partner")
        if not all((self.state.admin_id, self.state.buyer_id, self.state.seller_id, self.state.partner_id)):
            self.interrupt()

    @task
    def place_order(self):
        payload = order_data(self.state.seller_id)
        for _ in range(_PROPAGATION_RETRIES):
            with self.client.post(
                "/orders",
                json=payload,
                headers=_as(self.state.buyer_id),
                catch_response=True,
                name="POST /orders",
            ) as resp:
                if resp.status_code == 201:
                    self.state.order_id = resp.json()["order_id"]
                    return
                if error_code(resp) in _NOT_YET_PROPAGATED:
                    resp.success()
                    time.sleep(_PROPAGATION_DELAY)
                    continue
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()
        self.interrupt()

    @task
    def accept_or_cancel(self):
        if random.random() < 0.15:
            self._put(
                f"/orders/{self.state.order_id}/cancel",
                self.state.buyer_id,
                "PUT /orders/{id}/cancel",
                json={"reason": "Ordered by mistake"},
            )
            self.interrupt()
        if not self._put(f"/orders/{self.state.order_id}/accept", self.state.seller_id, "PUT /orders/{id}/accept"):
            self.interrupt()

    @task
    def create_delivery(self):
        with self.client.post(
            "/deliveries",
            json=delivery_data(self.state.order_id),
            headers=_as(self.state.seller_id),
            catch_response=True,
            name="POST /deliveries",
        ) as resp:
            if resp.status_code == 201:
                self.state.delivery_id = resp.json()["delivery_id"]
            else:
                resp.failure(f"Create delivery failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def assign_partner(self):
        if not self._put(
            f"/deliveries/{self.state.delivery_id}/assign",
            self.state.seller_id,
            "PUT /deliveries/{id}/assign",
            json={"delivery_partner_id": self.state.partner_id},
        ):
            self.interrupt()

    @task
    def carry_delivery(self):
        if random.random() < 0.1:
            self._put(
                f"/deliveries/{self.state.delivery_id}/cancel",
                self.state.seller_id,
                "PUT /deliveries/{id}/cancel",
                json={"reason": "Customer rescheduled"},
            )
            self.interrupt()
        for step in ("start", "pick-up", "dispatch", "complete"):
            if not self._put(
                f"/deliveries/{self.state.delivery_id}/{step}",
                self.state.partner_id,
                f"PUT /deliveries/{{id}}/{step}",
            ):
                self.interrupt()

    @task
    def done(self):
        self.interrupt()


class FulfillmentUser(HttpUser):
    """End-to-end order and delivery journeys across both domains."""

    wait_time = between(1, 3)
    tasks = [OrderDeliveryJourney]
