"""Fulfillment board — order status and delivery status side by side.

Order and delivery lifecycles are independent; this view lines them up
per order for sellers and admins.
"""

from protean.core.projector import on
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from ordering.delivery.delivery import Delivery
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
from ordering.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderDelivered,
    OrderPlaced,
    OrderProcessing,
    OrderShipped,
)
from ordering.order.order import Order


@ordering.projection
class FulfillmentBoard:
    order_id = Identifier(identifier=True, required=True)
    customer_id = Identifier()
    seller_id = Identifier()
    order_status = String(max_length=20)
    final_amount = Float()
    delivery_id = Identifier()
    delivery_status = String(max_length=20)
    delivery_partner_id = Identifier()
    placed_at = DateTime()
    updated_at = DateTime()


@ordering.projector(projector_for=FulfillmentBoard, aggregates=[Order, Delivery])
class FulfillmentBoardProjector:
    def _update(self, order_id, updated_at, **changes):
        repo = current_domain.repository_for(FulfillmentBoard)
        try:
            row = repo.get(str(order_id))
        except ObjectNotFoundError:
            row = FulfillmentBoard(order_id=str(order_id))
        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = updated_at
        repo.add(row)

    # --- Order events ---

    @on(OrderPlaced)
    def on_order_placed(self, event):
        self._update(
            event.order_id,
            event.placed_at,
            customer_id=event.customer_id,
            seller_id=event.seller_id,
            order_status="pending",
            final_amount=event.final_amount,
            placed_at=event.placed_at,
        )

    @on(OrderConfirmed)
    def on_order_confirmed(self, event):
        self._update(event.order_id, event.confirmed_at, order_status="confirmed")

    @on(OrderProcessing)
    def on_order_processing(self, event):
        self._update(event.order_id, event.started_at, order_status="processing")

    @on(OrderShipped)
    def on_order_shipped(self, event):
        self._update(event.order_id, event.shipped_at, order_status="shipped")

    @on(OrderDelivered)
    def on_order_delivered(self, event):
        self._update(event.order_id, event.delivered_at, order_status="delivered")

    @on(OrderCancelled)
    def on_order_cancelled(self, event):
        self._update(event.order_id, event.cancelled_at, order_status="cancelled")

    # --- Delivery events ---

    @on(DeliveryCreated)
    def on_delivery_created(self, event):
        self._update(
            event.order_id,
            event.created_at,
            delivery_id=event.delivery_id,
            delivery_status="pending",
            delivery_partner_id=None,
        )

    @on(PartnerAssigned)
    def on_partner_assigned(self, event):
        self._update(
            event.order_id,
            event.assigned_at,
            delivery_status="assigned",
            delivery_partner_id=event.delivery_partner_id,
        )

    @on(PartnerReassigned)
    def on_partner_reassigned(self, event):
        self._update(event.order_id, event.reassigned_at, delivery_partner_id=event.delivery_partner_id)

    @on(DeliveryStarted)
    def on_delivery_started(self, event):
        self._update(event.order_id, event.started_at, delivery_status="in_progress")

    @on(DeliveryPickedUp)
    def on_delivery_picked_up(self, event):
        self._update(event.order_id, event.picked_up_at, delivery_status="picked_up")

    @on(DeliveryOutForDelivery)
    def on_delivery_out_for_delivery(self, event):
        self._update(event.order_id, event.dispatched_at, delivery_status="out_for_delivery")

    @on(DeliveryCompleted)
    def on_delivery_completed(self, event):
        self._update(event.order_id, event.delivered_at, delivery_status="delivered")

    @on(DeliveryCancelled)
    def on_delivery_cancelled(self, event):
        self._update(event.order_id, event.cancelled_at, delivery_status="cancelled")
