"""Delivery domain events.

Every event carries the order id so read models keyed by order can follow
the delivery without loading it.
"""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Delivery")
class DeliveryCreated:
    """A seller requested delivery for a confirmed order."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    delivery_fee = Float()
    created_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class PartnerAssigned:
    """A delivery partner was assigned to a pending delivery."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    delivery_partner_id = Identifier(required=True)
    assigned_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class PartnerReassigned:
    """An assigned delivery was handed to a different partner."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_partner_id = Identifier(required=True)
    delivery_partner_id = Identifier(required=True)
    reassigned_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class DeliveryStarted:
    """The assigned partner set off to the pickup location."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    started_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class DeliveryPickedUp:
    """The partner collected the parcel from the seller."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    picked_up_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class DeliveryOutForDelivery:
    """The parcel is on its way to the drop location."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    dispatched_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class DeliveryCompleted:
    """The parcel was handed to the buyer."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    delivery_partner_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@ordering.event(part_of="Delivery")
class DeliveryCancelled:
    """The delivery was called off. The order keeps its own status."""

    __version__ = 1

    delivery_id = Identifier(required=True)
    order_id = Identifier(required=True)
    previous_status = String(required=True)
    delivery_partner_id = Identifier()
    reason = String()
    cancelled_by = String()
    cancelled_at = DateTime(required=True)
