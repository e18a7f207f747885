"""Order placement: command and handler.

Placement validates the whole request before touching anything: lines,
stock, payment method and shipping address. Only then is stock reserved and
the order built. Reservations and the new order are staged in the handler's
unit of work and commit together; if the commit fails, neither survives.
"""

import json

import structlog
from protean import handle
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.order import DEFAULT_SHIPPING_METHOD, SUPPORTED_PAYMENT_METHOD, Order
from ordering.order.pricing import PricedLine, calculate_totals
from ordering.order.shipping import resolve_shipping
from ordering.part.ledger import InventoryLedger
from ordering.shared import errors
from ordering.shared.access import Role, require_role
from ordering.shared.money import to_decimal

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    caller_id = String(max_length=255)
    caller_role = String(max_length=20)
    items = Text(required=True)  # JSON: list of {part_id, quantity}
    use_saved_address = Boolean(default=True)
    address_override = Text()  # JSON: address dict
    shipping_method = String(max_length=50)
    payment_method = String(max_length=50)


def _load_json(value):
    if value is None or not isinstance(value, str):
        return value
    return json.loads(value) if value.strip() else None


def _parse_quantity(part_id, raw) -> int:
    if isinstance(raw, bool):
        raise errors.InvalidQuantity(part_id, raw)
    try:
        quantity = int(raw)
    except (TypeError, ValueError):
        raise errors.InvalidQuantity(part_id, raw) from None
    if quantity != raw and str(quantity) != str(raw).strip():
        raise errors.InvalidQuantity(part_id, raw)
    if quantity <= 0:
        raise errors.InvalidQuantity(part_id, quantity)
    return quantity


def _normalize_payment_method(value) -> str:
    method = (value or "").strip() or SUPPORTED_PAYMENT_METHOD
    if method.lower() != SUPPORTED_PAYMENT_METHOD.lower():
        raise errors.UnsupportedPaymentMethod(method, SUPPORTED_PAYMENT_METHOD)
    return SUPPORTED_PAYMENT_METHOD


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        require_role(command.caller_role, Role.CUSTOMER)

        customer = current_domain.repository_for(Customer).find_by_user_id(command.caller_id)
        if customer is None:
            raise errors.CustomerNotFound(f"user {command.caller_id}")

        requests = _load_json(command.items) or []
        if not requests:
            raise errors.EmptyOrder()

        ledger = InventoryLedger()
        parts = ledger.resolve(str(request.get("part_id")) for request in requests if request.get("part_id"))

        # Quantities for a part listed on several lines count together
        requested = {}
        lines = []
        for request in requests:
            part_id = str(request.get("part_id") or "")
            part = parts.get(part_id)
            if part is None:
                raise errors.PartNotFound(part_id or None)

            quantity = _parse_quantity(part_id, request.get("quantity"))
            requested[part_id] = requested.get(part_id, 0) + quantity
            if requested[part_id] > part.quantity_in_stock:
                raise errors.InsufficientStock(part_id, requested[part_id], part.quantity_in_stock)

            lines.append(
                PricedLine(
                    part_id=part_id,
                    part_name=part.name,
                    sku=part.sku,
                    quantity=quantity,
                    unit_price=to_decimal(part.price),
                )
            )

        totals = calculate_totals(lines)
        payment_method = _normalize_payment_method(command.payment_method)
        shipping = resolve_shipping(
            customer,
            use_saved_address=command.use_saved_address is not False,
            override=_load_json(command.address_override),
        )

        for part_id, quantity in requested.items():
            ledger.reserve(parts[part_id], quantity)

        order = Order.place(
            customer_id=customer.id,
            lines=lines,
            totals=totals,
            shipping=shipping,
            shipping_method=(command.shipping_method or "").strip() or DEFAULT_SHIPPING_METHOD,
            payment_method=payment_method,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(customer.id),
            item_count=len(lines),
            total=order.total,
        )
        return str(order.id)
