"""Delivery aggregate (CQRS) — physical transport of a confirmed order.

State Machine:
    PENDING → ASSIGNED → IN_PROGRESS → PICKED_UP → OUT_FOR_DELIVERY → DELIVERED
    any non-terminal state → CANCELLED

The delivery lifecycle runs independently of its order. Cancelling a
delivery leaves the order untouched so the seller can create a new one.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text, ValueObject

from ordering.cancellation_policy import CancellableKind, can_cancel
from ordering.delivery.events import (
    DeliveryCancelled,
    DeliveryCompleted,
    DeliveryCreated,
    DeliveryOutForDelivery,
    DeliveryPickedUp,
    DeliveryStarted,
    PartnerAssigned,
    PartnerReassigned,
)
from ordering.domain import ordering
from ordering.order.order import DELIVERABLE_STATUSES, OrderStatus
from shared.errors import ErrorCode, LifecycleError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class DeliveryStatus(Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    PICKED_UP = "picked_up"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    DeliveryStatus.PENDING: {DeliveryStatus.ASSIGNED, DeliveryStatus.CANCELLED},
    DeliveryStatus.ASSIGNED: {DeliveryStatus.IN_PROGRESS, DeliveryStatus.CANCELLED},
    DeliveryStatus.IN_PROGRESS: {DeliveryStatus.PICKED_UP, DeliveryStatus.CANCELLED},
    DeliveryStatus.PICKED_UP: {DeliveryStatus.OUT_FOR_DELIVERY, DeliveryStatus.CANCELLED},
    DeliveryStatus.OUT_FOR_DELIVERY: {DeliveryStatus.DELIVERED, DeliveryStatus.CANCELLED},
    DeliveryStatus.DELIVERED: set(),  # Terminal
    DeliveryStatus.CANCELLED: set(),  # Terminal
}

# States in which a partner must be on the delivery
_PARTNER_BOUND_STATUSES = {
    DeliveryStatus.ASSIGNED.value,
    DeliveryStatus.IN_PROGRESS.value,
    DeliveryStatus.PICKED_UP.value,
    DeliveryStatus.OUT_FOR_DELIVERY.value,
    DeliveryStatus.DELIVERED.value,
}


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Delivery")
class Location:
    """Address and contact snapshot for one end of a delivery.

    Copied at creation time; later edits to the buyer's or seller's
    addresses do not reach an existing delivery.
    """

    address = Text(required=True)
    contact_name = String(max_length=255)
    contact_phone = String(max_length=20)
    latitude = Float(min_value=-90.0, max_value=90.0)
    longitude = Float(min_value=-180.0, max_value=180.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Delivery:
    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    buyer_id = Identifier(required=True)
    pickup = ValueObject(Location, required=True)
    drop = ValueObject(Location, required=True)
    delivery_fee = Float(default=0.0, min_value=0.0)
    tip = Float(default=0.0, min_value=0.0)
    notes = Text()
    delivery_partner_id = Identifier()
    status = String(choices=DeliveryStatus, default=DeliveryStatus.PENDING.value)
    assigned_at = DateTime()
    picked_up_at = DateTime()
    delivered_at = DateTime()
    cancellation_reason = String(max_length=500)
    cancelled_by = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def partner_present_once_assigned(self):
        if self.status in _PARTNER_BOUND_STATUSES and not self.delivery_partner_id:
            raise ValidationError({"delivery_partner_id": [f"A {self.status} delivery must have a partner"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, order, pickup, drop, delivery_fee=0.0, tip=0.0, notes=None):
        """Create a pending delivery for ``order``.

        Args:
            order: The Order aggregate being delivered; must be confirmed or later.
            pickup: Dict with address, contact_name, contact_phone, latitude, longitude.
            drop: Dict with the same keys as ``pickup``.
        """
        if OrderStatus(order.status) not in DELIVERABLE_STATUSES:
            raise LifecycleError(
                ErrorCode.ORDER_NOT_CONFIRMED,
                f"Cannot create a delivery for an order that is {order.status}",
                field="order_id",
            )

        now = datetime.now(UTC)
        delivery = cls(
            order_id=str(order.id),
            seller_id=str(order.seller_id),
            buyer_id=str(order.customer_id),
            pickup=Location(**pickup),
            drop=Location(**drop),
            delivery_fee=delivery_fee,
            tip=tip,
            notes=notes,
            status=DeliveryStatus.PENDING.value,
            created_at=now,
            updated_at=now,
        )
        delivery.raise_(
            DeliveryCreated(
                delivery_id=str(delivery.id),
                order_id=str(order.id),
                seller_id=str(order.seller_id),
                delivery_fee=delivery_fee,
                created_at=now,
            )
        )
        return delivery

    # -------------------------------------------------------------------
    # State transition helper
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = DeliveryStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise LifecycleError(
                ErrorCode.ILLEGAL_TRANSITION,
                f"Cannot transition delivery from {current.value} to {target_status.value}",
            )

    # -------------------------------------------------------------------
    # Partner assignment
    # -------------------------------------------------------------------
    def assign_partner(self, partner_id, partner_available=True):
        if self.status != DeliveryStatus.PENDING.value:
            raise LifecycleError(ErrorCode.NOT_PENDING, f"Cannot assign a partner to a {self.status} delivery")
        if not partner_available:
            raise LifecycleError(
                ErrorCode.PARTNER_UNAVAILABLE,
                f"Delivery partner {partner_id} is not available",
                field="delivery_partner_id",
            )

        now = datetime.now(UTC)
        with atomic_change(self):
            self.delivery_partner_id = partner_id
            self.status = DeliveryStatus.ASSIGNED.value
            self.assigned_at = now
            self.updated_at = now

        self.raise_(
            PartnerAssigned(
                delivery_id=str(self.id),
                order_id=str(self.order_id),
                delivery_partner_id=str(partner_id),
                assigned_at=now,
            )
        )

    def reassign_partner(self, partner_id, partner_available=True):
        if self.status != DeliveryStatus.ASSIGNED.value:
            raise LifecycleError(
                ErrorCode.NOT_ASSIGNED,
                f"Only an assigned delivery can be reassigned, delivery is {self.status}",
            )
        if str(partner_id) == str(self.delivery_partner_id):
            raise LifecycleError(
                ErrorCode.SAME_PARTNER,
                f"Delivery is already assigned to partner {partner_id}",
                field="delivery_partner_id",
            )
        if not partner_available:
            raise LifecycleError(
                ErrorCode.PARTNER_UNAVAILABLE,
                f"Delivery partner {partner_id} is not available",
                field="delivery_partner_id",
            )

        now = datetime.now(UTC)
        previous_partner_id = self.delivery_partner_id
        self.delivery_partner_id = partner_id
        self.assigned_at = now
        self.updated_at = now

        self.raise_(
            PartnerReassigned(
                delivery_id=str(self.id),
                order_id=str(self.order_id),
                previous_partner_id=str(previous_partner_id),
                delivery_partner_id=str(partner_id),
                reassigned_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Partner progress
    # -------------------------------------------------------------------
    def start(self):
        self._assert_can_transition(DeliveryStatus.IN_PROGRESS)
        now = datetime.now(UTC)
        self.status = DeliveryStatus.IN_PROGRESS.value
        self.updated_at = now
        self.raise_(DeliveryStarted(delivery_id=str(self.id), order_id=str(self.order_id), started_at=now))

    def pick_up(self):
        self._assert_can_transition(DeliveryStatus.PICKED_UP)
        now = datetime.now(UTC)
        self.status = DeliveryStatus.PICKED_UP.value
        self.picked_up_at = now
        self.updated_at = now
        self.raise_(DeliveryPickedUp(delivery_id=str(self.id), order_id=str(self.order_id), picked_up_at=now))

    def dispatch(self):
        self._assert_can_transition(DeliveryStatus.OUT_FOR_DELIVERY)
        now = datetime.now(UTC)
        self.status = DeliveryStatus.OUT_FOR_DELIVERY.value
        self.updated_at = now
        self.raise_(
            DeliveryOutForDelivery(delivery_id=str(self.id), order_id=str(self.order_id), dispatched_at=now)
        )

    def complete(self):
        self._assert_can_transition(DeliveryStatus.DELIVERED)
        now = datetime.now(UTC)
        self.status = DeliveryStatus.DELIVERED.value
        self.delivered_at = now
        self.updated_at = now
        self.raise_(
            DeliveryCompleted(
                delivery_id=str(self.id),
                order_id=str(self.order_id),
                delivery_partner_id=str(self.delivery_partner_id),
                delivered_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self, reason=None, cancelled_by=None):
        if not can_cancel(self.status, CancellableKind.DELIVERY):
            raise LifecycleError(ErrorCode.TERMINAL_STATE, f"Cannot cancel a delivery that is already {self.status}")

        now = datetime.now(UTC)
        previous = self.status
        self.status = DeliveryStatus.CANCELLED.value
        self.cancellation_reason = reason
        self.cancelled_by = cancelled_by
        self.updated_at = now

        self.raise_(
            DeliveryCancelled(
                delivery_id=str(self.id),
                order_id=str(self.order_id),
                previous_status=previous,
                delivery_partner_id=str(self.delivery_partner_id) if self.delivery_partner_id else None,
                reason=reason,
                cancelled_by=cancelled_by,
                cancelled_at=now,
            )
        )
