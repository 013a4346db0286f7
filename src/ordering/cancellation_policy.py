"""Cancellation Policy — when an order or a delivery may still be cancelled.

Orders may be cancelled by their buyer or seller only before work on them
has started. Deliveries may be cancelled at any point before they finish.
Admins cancel orders through the explicit state machine instead, which
additionally permits ``processing → cancelled``.
"""

from enum import Enum


class CancellableKind(Enum):
    ORDER = "order"
    DELIVERY = "delivery"


ORDER_CANCELLABLE_STATUSES = frozenset({"pending", "confirmed"})
DELIVERY_TERMINAL_STATUSES = frozenset({"delivered", "cancelled"})


def can_cancel(entity_status: str, entity_kind) -> bool:
    kind = CancellableKind(entity_kind) if not isinstance(entity_kind, CancellableKind) else entity_kind
    if kind == CancellableKind.ORDER:
        return entity_status in ORDER_CANCELLABLE_STATUSES
    return entity_status not in DELIVERY_TERMINAL_STATUSES
