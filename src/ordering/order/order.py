"""Order aggregate (CQRS) — a buyer's purchase from a single seller.

State Machine:
    PENDING → CONFIRMED → PROCESSING → SHIPPED → DELIVERED
    PENDING, CONFIRMED, PROCESSING → CANCELLED

Transitions only move forward; DELIVERED and CANCELLED are terminal.
Sellers drive the forward edges. Buyers and sellers may cancel while the
cancellation policy allows it. Admins may take any edge in the table,
including cancelling an order that is already processing.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from ordering.cancellation_policy import CancellableKind, can_cancel
from ordering.domain import ordering
from ordering.order.events import (
    OrderCancelled,
    OrderConfirmed,
    OrderDelivered,
    OrderPlaced,
    OrderProcessing,
    OrderShipped,
)
from shared.access import Role
from shared.errors import ErrorCode, LifecycleError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

# Orders that a delivery may be created for
DELIVERABLE_STATUSES = frozenset({OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.SHIPPED})


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class OrderPricing:
    """Amounts locked when the order is placed."""

    total_amount = Float(default=0.0, min_value=0.0)
    discount = Float(default=0.0, min_value=0.0)
    shipping_charges = Float(default=0.0, min_value=0.0)
    tax_amount = Float(default=0.0, min_value=0.0)
    final_amount = Float(default=0.0, min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A product snapshot taken at placement time."""

    product_id = Identifier(required=True)
    variant_id = Identifier()
    title = String(required=True, max_length=255)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    seller_id = Identifier(required=True)
    address_id = Identifier()
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    notes = Text()
    delivery_id = Identifier()
    rejection_reason = String(max_length=500)
    cancellation_reason = String(max_length=500)
    cancelled_by = String(max_length=50)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, seller_id, items_data, address_id=None, discount=0.0, shipping_charges=0.0,
              tax_amount=0.0, notes=None):
        """Place a new order.

        Args:
            customer_id: The buyer placing the order.
            seller_id: The seller who owns every item in the order.
            items_data: List of dicts with product_id, variant_id, title,
                        quantity, unit_price.
        """
        now = datetime.now(UTC)
        total = sum(item["unit_price"] * item["quantity"] for item in items_data)
        final = max(total - discount + shipping_charges + tax_amount, 0.0)

        order = cls(
            customer_id=customer_id,
            seller_id=seller_id,
            address_id=address_id,
            status=OrderStatus.PENDING.value,
            pricing=OrderPricing(
                total_amount=total,
                discount=discount,
                shipping_charges=shipping_charges,
                tax_amount=tax_amount,
                final_amount=final,
            ),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        for item_data in items_data:
            order.add_items(OrderItem(**item_data))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                seller_id=str(seller_id),
                item_count=len(items_data),
                final_amount=final,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transition helpers
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise LifecycleError(
                ErrorCode.ILLEGAL_TRANSITION,
                f"Cannot transition from {current.value} to {target_status.value}",
            )

    def _assert_actor_may_take(self, target_status, actor_role):
        role = Role(actor_role)
        if role == Role.ADMIN:
            return
        if target_status == OrderStatus.CANCELLED:
            if role not in (Role.BUYER, Role.SELLER):
                raise LifecycleError(ErrorCode.ROLE_MISMATCH, f"A {role.value} cannot cancel orders", field="role")
            if not can_cancel(self.status, CancellableKind.ORDER):
                raise LifecycleError(
                    ErrorCode.ILLEGAL_TRANSITION,
                    f"Orders cannot be cancelled once {self.status}",
                )
            return
        if role != Role.SELLER:
            raise LifecycleError(
                ErrorCode.ROLE_MISMATCH,
                f"Only the seller may move an order to {target_status.value}",
                field="role",
            )

    def transition(self, target_status, actor_role, reason=None, actor_id=None):
        """Move the order to ``target_status`` on behalf of an actor with ``actor_role``."""
        target = OrderStatus(target_status)
        self._assert_can_transition(target)
        self._assert_actor_may_take(target, actor_role)

        now = datetime.now(UTC)
        previous = self.status
        self.status = target.value
        self.updated_at = now

        if target == OrderStatus.CONFIRMED:
            self.raise_(OrderConfirmed(order_id=str(self.id), seller_id=str(self.seller_id), confirmed_at=now))
        elif target == OrderStatus.PROCESSING:
            self.raise_(OrderProcessing(order_id=str(self.id), started_at=now))
        elif target == OrderStatus.SHIPPED:
            self.raise_(OrderShipped(order_id=str(self.id), shipped_at=now))
        elif target == OrderStatus.DELIVERED:
            self.raise_(OrderDelivered(order_id=str(self.id), delivered_at=now))
        else:
            self.cancellation_reason = reason
            self.cancelled_by = Role(actor_role).value
            self.raise_(
                OrderCancelled(
                    order_id=str(self.id),
                    previous_status=previous,
                    reason=reason,
                    cancelled_by=self.cancelled_by,
                    cancelled_by_id=str(actor_id) if actor_id else None,
                    cancelled_at=now,
                )
            )

    # -------------------------------------------------------------------
    # Seller actions
    # -------------------------------------------------------------------
    def accept(self):
        self.transition(OrderStatus.CONFIRMED, Role.SELLER)

    def reject(self, reason=None, actor_id=None):
        """A seller turning an order down is a cancellation of a pending order."""
        if OrderStatus(self.status) != OrderStatus.PENDING:
            raise LifecycleError(ErrorCode.ILLEGAL_TRANSITION, f"Cannot reject an order that is {self.status}")
        self.rejection_reason = reason
        self.transition(OrderStatus.CANCELLED, Role.SELLER, reason=reason or "Rejected by seller", actor_id=actor_id)

    def mark_processing(self):
        self.transition(OrderStatus.PROCESSING, Role.SELLER)

    def mark_shipped(self):
        self.transition(OrderStatus.SHIPPED, Role.SELLER)

    def mark_delivered(self):
        self.transition(OrderStatus.DELIVERED, Role.SELLER)

    # -------------------------------------------------------------------
    # Cancellation
    # -------------------------------------------------------------------
    def cancel(self, reason, actor_role, actor_id=None):
        """Cancel on behalf of a buyer, seller, or admin.

        The cancellation policy binds every role here. Admins reach the
        ``processing -> cancelled`` edge only through ``transition``.
        """
        if not can_cancel(self.status, CancellableKind.ORDER):
            raise LifecycleError(
                ErrorCode.ILLEGAL_TRANSITION,
                f"Orders cannot be cancelled once {self.status}",
            )
        self.transition(OrderStatus.CANCELLED, actor_role, reason=reason, actor_id=actor_id)

    # -------------------------------------------------------------------
    # Delivery link
    # -------------------------------------------------------------------
    def attach_delivery(self, delivery_id):
        """Record the delivery created for this order.

        Saving the order alongside a new delivery bumps its version, so two
        concurrent delivery requests for one order cannot both commit.
        """
        self.delivery_id = delivery_id
        self.updated_at = datetime.now(UTC)
