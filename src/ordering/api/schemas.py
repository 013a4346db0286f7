"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str
    variant_id: str | None = None
    title: str
    quantity: int = Field(ge=1)
    unit_price: float = Field(ge=0)


class LocationSchema(BaseModel):
    address: str
    contact_name: str | None = None
    contact_phone: str | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "seller_id": "acc-seller-001",
                    "address_id": "addr-001",
                    "items": [
                        {"product_id": "prod-001", "title": "Steel Water Bottle", "quantity": 2, "unit_price": 12.5}
                    ],
                    "shipping_charges": 3.0,
                }
            ]
        }
    }

    seller_id: str
    address_id: str | None = None
    items: list[OrderItemSchema] = Field(min_length=1)
    discount: float = Field(0.0, ge=0)
    shipping_charges: float = Field(0.0, ge=0)
    tax_amount: float = Field(0.0, ge=0)
    notes: str | None = None


class ReasonRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class TransitionOrderRequest(BaseModel):
    status: str
    reason: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Delivery Request Schemas
# ---------------------------------------------------------------------------
class CreateDeliveryRequest(BaseModel):
    order_id: str
    pickup: LocationSchema
    drop: LocationSchema
    delivery_fee: float = Field(0.0, ge=0)
    tip: float = Field(0.0, ge=0)
    notes: str | None = None


class AssignPartnerRequest(BaseModel):
    delivery_partner_id: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class DeliveryIdResponse(BaseModel):
    delivery_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    seller_id: str
    status: str
    payment_status: str
    items: list[OrderItemSchema]
    total_amount: float
    discount: float
    final_amount: float
    delivery_id: str | None = None
    cancellation_reason: str | None = None
    cancelled_by: str | None = None


class DeliveryResponse(BaseModel):
    delivery_id: str
    order_id: str
    status: str
    pickup: LocationSchema
    drop: LocationSchema
    delivery_fee: float
    delivery_partner_id: str | None = None
    assigned_at: str | None = None
    picked_up_at: str | None = None
    delivered_at: str | None = None
    cancellation_reason: str | None = None


class FulfillmentBoardResponse(BaseModel):
    order_id: str
    order_status: str | None = None
    delivery_id: str | None = None
    delivery_status: str | None = None
    delivery_partner_id: str | None = None
