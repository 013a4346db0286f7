"""FastAPI routes for the Ordering domain — orders and deliveries.

The acting account is identified by the ``X-Account-Id`` header.
"""

import json

from fastapi import APIRouter, Header
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    AssignPartnerRequest,
    CreateDeliveryRequest,
    DeliveryIdResponse,
    DeliveryResponse,
    FulfillmentBoardResponse,
    LocationSchema,
    OrderIdResponse,
    OrderItemSchema,
    OrderResponse,
    PlaceOrderRequest,
    ReasonRequest,
    StatusResponse,
    TransitionOrderRequest,
)
from ordering.delivery.assignment import AssignPartner, ReassignPartner
from ordering.delivery.cancellation import CancelDelivery
from ordering.delivery.creation import CreateDelivery
from ordering.delivery.delivery import Delivery
from ordering.delivery.progress import CompleteDelivery, DispatchDelivery, PickUpDelivery, StartDelivery
from ordering.order.acceptance import AcceptOrder, RejectOrder
from ordering.order.administration import TransitionOrder
from ordering.order.cancellation import CancelOrder
from ordering.order.order import Order
from ordering.order.placement import PlaceOrder
from ordering.order.progress import MarkDelivered, MarkProcessing, MarkShipped
from ordering.projections.fulfillment_board import FulfillmentBoard
from shared.errors import load_or_fail
from shared.http import require_actor


def _iso(value):
    return value.isoformat() if value else None


def _location(location) -> LocationSchema:
    return LocationSchema(
        address=location.address,
        contact_name=location.contact_name,
        contact_phone=location.contact_phone,
        latitude=location.latitude,
        longitude=location.longitude,
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest, x_account_id: str | None = Header(default=None)) -> OrderIdResponse:
    command = PlaceOrder(
        customer_id=require_actor(x_account_id),
        seller_id=body.seller_id,
        address_id=body.address_id,
        items=json.dumps([item.model_dump() for item in body.items]),
        discount=body.discount,
        shipping_charges=body.shipping_charges,
        tax_amount=body.tax_amount,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    order = load_or_fail(current_domain.repository_for(Order), order_id, "Order")
    return OrderResponse(
        order_id=str(order.id),
        customer_id=str(order.customer_id),
        seller_id=str(order.seller_id),
        status=order.status,
        payment_status=order.payment_status,
        items=[
            OrderItemSchema(
                product_id=str(item.product_id),
                variant_id=str(item.variant_id) if item.variant_id else None,
                title=item.title,
                quantity=item.quantity,
                unit_price=item.unit_price,
            )
            for item in order.items
        ],
        total_amount=order.pricing.total_amount,
        discount=order.pricing.discount,
        final_amount=order.pricing.final_amount,
        delivery_id=str(order.delivery_id) if order.delivery_id else None,
        cancellation_reason=order.cancellation_reason,
        cancelled_by=order.cancelled_by,
    )


@order_router.get("/{order_id}/fulfillment", response_model=FulfillmentBoardResponse)
async def get_fulfillment(order_id: str) -> FulfillmentBoardResponse:
    row = load_or_fail(current_domain.repository_for(FulfillmentBoard), order_id, "Order")
    return FulfillmentBoardResponse(
        order_id=str(row.order_id),
        order_status=row.order_status,
        delivery_id=str(row.delivery_id) if row.delivery_id else None,
        delivery_status=row.delivery_status,
        delivery_partner_id=str(row.delivery_partner_id) if row.delivery_partner_id else None,
    )


@order_router.put("/{order_id}/accept", response_model=StatusResponse)
async def accept_order(order_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    current_domain.process(AcceptOrder(order_id=order_id, actor_id=require_actor(x_account_id)), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/reject", response_model=StatusResponse)
async def reject_order(
    order_id: str, body: ReasonRequest | None = None, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = RejectOrder(
        order_id=order_id,
        actor_id=require_actor(x_account_id),
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/processing", response_model=StatusResponse)
async def mark_processing(order_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    current_domain.process(MarkProcessing(order_id=order_id, actor_id=require_actor(x_account_id)), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/ship", response_model=StatusResponse)
async def mark_shipped(order_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    current_domain.process(MarkShipped(order_id=order_id, actor_id=require_actor(x_account_id)), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/deliver", response_model=StatusResponse)
async def mark_delivered(order_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    current_domain.process(MarkDelivered(order_id=order_id, actor_id=require_actor(x_account_id)), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/cancel", response_model=StatusResponse)
async def cancel_order(
    order_id: str, body: ReasonRequest | None = None, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = CancelOrder(
        order_id=order_id,
        actor_id=require_actor(x_account_id),
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/transition", response_model=StatusResponse)
async def transition_order(
    order_id: str, body: TransitionOrderRequest, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = TransitionOrder(
        order_id=order_id,
        actor_id=require_actor(x_account_id),
        status=body.status,
        reason=body.reason,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Delivery Router
# ---------------------------------------------------------------------------
delivery_router = APIRouter(prefix="/deliveries", tags=["deliveries"])


@delivery_router.post("", status_code=201, response_model=DeliveryIdResponse)
async def create_delivery(
    body: CreateDeliveryRequest, x_account_id: str | None = Header(default=None)
) -> DeliveryIdResponse:
    command = CreateDelivery(
        order_id=body.order_id,
        actor_id=require_actor(x_account_id),
        pickup=json.dumps(body.pickup.model_dump()),
        drop=json.dumps(body.drop.model_dump()),
        delivery_fee=body.delivery_fee,
        tip=body.tip,
        notes=body.notes,
    )
    result = current_domain.process(command, asynchronous=False)
    return DeliveryIdResponse(delivery_id=result)


@delivery_router.get("/{delivery_id}", response_model=DeliveryResponse)
async def get_delivery(delivery_id: str) -> DeliveryResponse:
    delivery = load_or_fail(current_domain.repository_for(Delivery), delivery_id, "Delivery")
    return DeliveryResponse(
        delivery_id=str(delivery.id),
        order_id=str(delivery.order_id),
        status=delivery.status,
        pickup=_location(delivery.pickup),
        drop=_location(delivery.drop),
        delivery_fee=delivery.delivery_fee,
        delivery_partner_id=str(delivery.delivery_partner_id) if delivery.delivery_partner_id else None,
        assigned_at=_iso(delivery.assigned_at),
        picked_up_at=_iso(delivery.picked_up_at),
        delivered_at=_iso(delivery.delivered_at),
        cancellation_reason=delivery.cancellation_reason,
    )


@delivery_router.put("/{delivery_id}/assign", response_model=StatusResponse)
async def assign_partner(
    delivery_id: str, body: AssignPartnerRequest, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = AssignPartner(
        delivery_id=delivery_id,
        actor_id=require_actor(x_account_id),
        delivery_partner_id=body.delivery_partner_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/reassign", response_model=StatusResponse)
async def reassign_partner(
    delivery_id: str, body: AssignPartnerRequest, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = ReassignPartner(
        delivery_id=delivery_id,
        actor_id=require_actor(x_account_id),
        delivery_partner_id=body.delivery_partner_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/start", response_model=StatusResponse)
async def start_delivery(delivery_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    command = StartDelivery(delivery_id=delivery_id, actor_id=require_actor(x_account_id))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/pick-up", response_model=StatusResponse)
async def pick_up_delivery(delivery_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    command = PickUpDelivery(delivery_id=delivery_id, actor_id=require_actor(x_account_id))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/dispatch", response_model=StatusResponse)
async def dispatch_delivery(delivery_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    command = DispatchDelivery(delivery_id=delivery_id, actor_id=require_actor(x_account_id))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/complete", response_model=StatusResponse)
async def complete_delivery(delivery_id: str, x_account_id: str | None = Header(default=None)) -> StatusResponse:
    command = CompleteDelivery(delivery_id=delivery_id, actor_id=require_actor(x_account_id))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@delivery_router.put("/{delivery_id}/cancel", response_model=StatusResponse)
async def cancel_delivery(
    delivery_id: str, body: ReasonRequest | None = None, x_account_id: str | None = Header(default=None)
) -> StatusResponse:
    command = CancelDelivery(
        delivery_id=delivery_id,
        actor_id=require_actor(x_account_id),
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
