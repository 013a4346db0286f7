"""Order placement — command and handler."""

import json

from protean import handle
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain

from ordering.actors import authorize, load_actor
from ordering.domain import ordering
from ordering.order.order import Order
from shared.access import Deny, Role, can_access
from shared.errors import ErrorCode, LifecycleError
from shared.logging import get_logger

logger = get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    """A buyer places an order for items sold by one seller."""

    customer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    address_id = Identifier()
    items = Text(required=True)  # JSON list of item dicts
    discount = Float(default=0.0)
    shipping_charges = Float(default=0.0)
    tax_amount = Float(default=0.0)
    notes = Text()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        authorize(command.customer_id, Role.BUYER, "orders")

        seller = load_actor(command.seller_id)
        if seller is None:
            raise LifecycleError(ErrorCode.NOT_FOUND, f"Seller {command.seller_id} not found", field="seller_id")
        decision = can_access(seller, Role.SELLER, "orders")
        if isinstance(decision, Deny):
            raise LifecycleError(decision.reason, "Seller cannot take orders", field="seller_id")

        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        order = Order.place(
            customer_id=command.customer_id,
            seller_id=command.seller_id,
            items_data=items_data,
            address_id=command.address_id,
            discount=command.discount or 0.0,
            shipping_charges=command.shipping_charges or 0.0,
            tax_amount=command.tax_amount or 0.0,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            seller_id=str(command.seller_id),
            final_amount=order.pricing.final_amount,
        )
        return str(order.id)
