"""Read side for orders: the representation returned to callers.

Display fields come from the order's shipping snapshot, so they show who and
where the order shipped to even after the customer edits their profile. Only
the email is read from the live customer record.
"""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.order.lifecycle import load_order
from ordering.order.order import Order
from ordering.shared import errors
from ordering.shared.access import STAFF_ROLES, Role, authorize_owner, require_role
from ordering.shared.money import to_decimal

PLACEHOLDER = "-"


def _display(value) -> str:
    return value.strip() if value and value.strip() else PLACEHOLDER


def present_order(order: Order, customer: Customer | None = None, include_history: bool = False) -> dict:
    shipping = order.shipping
    representation = {
        "id": str(order.id),
        "customer_id": str(order.customer_id),
        "created_at": order.created_at,
        "subtotal": order.subtotal,
        "tax": order.tax,
        "total": order.total,
        "status": order.status,
        "payment_method": order.payment_method,
        "shipping_method": order.shipping_method,
        "customer_name": _display(shipping.full_name if shipping else None),
        "customer_email": _display(customer.email if customer else None),
        "customer_phone": _display(shipping.phone if shipping else None),
        "delivery_address": _display(shipping.formatted_address if shipping else None),
        "items": [
            {
                "part_id": str(item.part_id),
                "part_name": item.part_name,
                "sku": item.sku,
                "unit_price": item.unit_price,
                "quantity": item.quantity,
                "line_total": float(to_decimal(item.line_total)),
            }
            for item in order.items
        ],
        "status_history": None,
    }
    if include_history:
        representation["status_history"] = [
            {"status": entry.status, "changed_at": entry.changed_at} for entry in order.history()
        ]
    return representation


def _customer(customer_id) -> Customer | None:
    try:
        return current_domain.repository_for(Customer).get(customer_id)
    except ObjectNotFoundError:
        return None


def order_detail(order_id, caller_id, caller_role, include_history=False) -> dict:
    order = load_order(order_id)
    customer = _customer(order.customer_id)
    authorize_owner(caller_id, caller_role, customer.user_id if customer else None)
    return present_order(order, customer, include_history=include_history)


def my_orders(caller_id, caller_role) -> list[dict]:
    require_role(caller_role, Role.CUSTOMER)
    customer = current_domain.repository_for(Customer).find_by_user_id(caller_id)
    if customer is None:
        raise errors.CustomerNotFound(f"user {caller_id}")
    orders = current_domain.repository_for(Order).find_for_customer(customer.id)
    return [present_order(order, customer) for order in orders]


def customer_orders(customer_id, caller_role) -> list[dict]:
    require_role(caller_role, *STAFF_ROLES)
    customer = _customer(customer_id)
    if customer is None:
        raise errors.CustomerNotFound(customer_id)
    orders = current_domain.repository_for(Order).find_for_customer(customer.id)
    return [present_order(order, customer) for order in orders]
