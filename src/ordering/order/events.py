"""Domain events for the Order aggregate.

Lifecycle events carry the acting caller so the audit log can record who
made the change.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order; stock for every line has been reserved."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    item_count = Integer(required=True)
    subtotal = Float(required=True)
    tax = Float(required=True)
    total = Float(required=True)
    payment_method = String(required=True)
    shipping_method = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """Staff moved the order forward in its lifecycle."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    new_status = String(required=True)
    performed_by_id = String()
    performed_by_role = String()
    changed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderCancelled:
    """The order was cancelled and its stock returned."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    performed_by_id = String()
    performed_by_role = String()
    cancelled_at = DateTime(required=True)
