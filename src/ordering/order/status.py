"""Order status and the transition table that governs it.

    Pending → Processing → Shipped → Delivered
    Pending, Processing → Cancelled

Delivered and Cancelled are terminal. Moves are forward-only: a status may
skip ahead (staff marking a Pending order Shipped directly) but never step
back.
"""

from enum import Enum

from ordering.shared import errors


class OrderStatus(Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    @classmethod
    def parse(cls, value) -> "OrderStatus":
        """Look up a status by name, ignoring case and surrounding blanks."""
        if isinstance(value, cls):
            return value
        text = (value or "").strip().lower()
        for status in cls:
            if status.value.lower() == text:
                return status
        raise errors.InvalidStatus(value)


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {
        OrderStatus.PROCESSING,
        OrderStatus.SHIPPED,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

FULFILLED_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


def check_transition(order_id, current: OrderStatus, target: OrderStatus) -> bool:
    """Decide a status-change request.

    Returns False for a request that asks for the current status (nothing to
    do), True when the move is allowed, and raises the matching error
    otherwise. Rules are applied in this order: same status, cancellation of
    a fulfilled order, anything out of Cancelled, anything out of Delivered,
    then the transition table.
    """
    if target == current:
        return False
    if target is OrderStatus.CANCELLED and current in FULFILLED_STATES:
        raise errors.AlreadyFulfilled(order_id, current.value)
    if current is OrderStatus.CANCELLED:
        raise errors.OrderCancelled(order_id)
    if current is OrderStatus.DELIVERED:
        raise errors.OrderDelivered(order_id)
    if target not in _VALID_TRANSITIONS[current]:
        raise errors.InvalidStatusTransition(order_id, current.value, target.value)
    return True
