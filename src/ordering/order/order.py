"""Order aggregate: items, frozen totals, shipping snapshot and status history.

Totals are computed once at placement and never recomputed. Unit prices and
the shipping address are snapshots: later catalog or profile edits do not
reach an order that has already been placed.

Status moves are decided by ``ordering.order.status.check_transition``;
the aggregate applies them and appends a history entry for each one.
"""

from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from ordering.order.status import OrderStatus, check_transition
from ordering.shared.money import ZERO, to_decimal, to_float

DEFAULT_SHIPPING_METHOD = "Standard"
SUPPORTED_PAYMENT_METHOD = "Cash"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class ShippingSnapshot:
    """Recipient and address captured when the order was placed."""

    first_name = String(max_length=100)
    last_name = String(max_length=100)
    address_line1 = String(max_length=255)
    address_line2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    phone = String(max_length=30)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part and part.strip())

    @property
    def formatted_address(self) -> str:
        """Join the non-empty address components with ``" • "``.

        City and state are shown together as ``"City, State"``.
        """
        locality = ", ".join(part for part in (self.city, self.state) if part and part.strip())
        components = (self.address_line1, self.address_line2, locality, self.postal_code, self.country)
        return " • ".join(part.strip() for part in components if part and part.strip())


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order", limit=None)
class OrderItem:
    part_id = Identifier(required=True)
    part_name = String(max_length=150)
    sku = String(max_length=64)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)

    @property
    def line_total(self):
        return to_decimal(self.unit_price) * self.quantity


@ordering.entity(part_of="Order", limit=None)
class OrderStatusHistory:
    status = String(choices=OrderStatus, required=True)
    changed_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    status_history = HasMany(OrderStatusHistory)
    shipping = ValueObject(ShippingSnapshot)
    shipping_method = String(max_length=50, default=DEFAULT_SHIPPING_METHOD)
    payment_method = String(max_length=50, default=SUPPORTED_PAYMENT_METHOD)
    subtotal = Float(default=0.0)
    tax = Float(default=0.0)
    total = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def totals_must_match_items(self):
        # Children may not be loaded yet on a freshly fetched order
        if not self.items:
            return
        subtotal = sum((item.line_total for item in self.items), ZERO)
        if to_decimal(self.subtotal) != subtotal:
            raise ValidationError({"subtotal": ["Subtotal must equal the sum of line totals"]})
        if to_decimal(self.total) != to_decimal(self.subtotal) + to_decimal(self.tax):
            raise ValidationError({"total": ["Total must equal subtotal plus tax"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, customer_id, lines, totals, shipping, shipping_method=None, payment_method=None):
        """Build a Pending order from priced lines.

        Args:
            customer_id: The customer profile placing the order.
            lines: ``PricedLine`` values with the unit price already captured.
            totals: ``OrderTotals`` computed from the same lines.
            shipping: The resolved ``ShippingSnapshot``.
        """
        now = datetime.now(UTC)
        order = cls(
            customer_id=str(customer_id),
            status=OrderStatus.PENDING.value,
            items=[
                OrderItem(
                    part_id=line.part_id,
                    part_name=line.part_name,
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_price=to_float(line.unit_price),
                )
                for line in lines
            ],
            status_history=[OrderStatusHistory(status=OrderStatus.PENDING.value, changed_at=now)],
            shipping=shipping,
            shipping_method=shipping_method or DEFAULT_SHIPPING_METHOD,
            payment_method=payment_method or SUPPORTED_PAYMENT_METHOD,
            subtotal=to_float(totals.subtotal),
            tax=to_float(totals.tax),
            total=to_float(totals.total),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(order.customer_id),
                item_count=len(order.items),
                subtotal=order.subtotal,
                tax=order.tax,
                total=order.total,
                payment_method=order.payment_method,
                shipping_method=order.shipping_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def _record_status(self, status: OrderStatus, at):
        self.status = status.value
        self.updated_at = at
        self.add_status_history(OrderStatusHistory(status=status.value, changed_at=at))

    def change_status(self, target, performed_by_id=None, performed_by_role=None) -> bool:
        """Move the order to ``target`` (an ``OrderStatus`` or its name).

        Returns False when the order already has that status. A Cancelled
        target goes through ``cancel``; the caller is responsible for
        returning stock when the order ends up cancelled.
        """
        target = OrderStatus.parse(target)
        if target is OrderStatus.CANCELLED:
            return self.cancel(performed_by_id, performed_by_role)

        current = OrderStatus(self.status)
        if not check_transition(self.id, current, target):
            return False

        now = datetime.now(UTC)
        self._record_status(target, now)
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=current.value,
                new_status=target.value,
                performed_by_id=performed_by_id,
                performed_by_role=performed_by_role,
                changed_at=now,
            )
        )
        return True

    def cancel(self, performed_by_id=None, performed_by_role=None) -> bool:
        """Cancel the order. Returns False if it was already cancelled."""
        current = OrderStatus(self.status)
        if not check_transition(self.id, current, OrderStatus.CANCELLED):
            return False

        now = datetime.now(UTC)
        self._record_status(OrderStatus.CANCELLED, now)
        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                previous_status=current.value,
                performed_by_id=performed_by_id,
                performed_by_role=performed_by_role,
                cancelled_at=now,
            )
        )
        return True

    def reserved_quantities(self) -> dict:
        """Quantity held by this order per part, summed across lines."""
        quantities = {}
        for item in self.items:
            key = str(item.part_id)
            quantities[key] = quantities.get(key, 0) + item.quantity
        return quantities

    def history(self) -> list:
        return sorted(self.status_history, key=lambda entry: entry.changed_at)
