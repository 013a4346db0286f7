"""Order domain events — immutable facts about order state changes."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A buyer placed an order with a seller."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    item_count = Integer(required=True)
    final_amount = Float(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderConfirmed:
    """The seller accepted the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderProcessing:
    """The seller started preparing the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    started_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderShipped:
    """The order left the seller."""

    __version__ = 1

    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderDelivered:
    """The order reached the buyer."""

    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled by its buyer, its seller, or an admin."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    reason = String()
    cancelled_by = String(required=True)  # Role of the actor
    cancelled_by_id = Identifier()
    cancelled_at = DateTime(required=True)
