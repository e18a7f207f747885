"""Order lifecycle: status changes and cancellation.

Cancellation returns every line's quantity to stock in the same unit of
work that marks the order cancelled. Cancelling an order that is already
cancelled changes nothing, so stock is returned exactly once.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.order.order import Order
from ordering.order.status import OrderStatus
from ordering.part.ledger import InventoryLedger
from ordering.shared import errors
from ordering.shared.access import STAFF_ROLES, authorize_owner, require_role

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    caller_id = String(max_length=255)
    caller_role = String(max_length=20)
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class CancelOrder:
    caller_id = String(max_length=255)
    caller_role = String(max_length=20)
    order_id = Identifier(required=True)


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise errors.OrderNotFound(order_id) from None


def owner_user_id(order: Order):
    """User id of the customer who placed ``order``, or None if the profile is gone."""
    try:
        return current_domain.repository_for(Customer).get(order.customer_id).user_id
    except ObjectNotFoundError:
        return None


@ordering.command_handler(part_of=Order)
class OrderLifecycleHandler:
    def _return_stock(self, order: Order) -> None:
        ledger = InventoryLedger()
        for part_id, quantity in order.reserved_quantities().items():
            ledger.restock(part_id, quantity)

    def _save(self, order: Order, changed: bool) -> None:
        if not changed:
            logger.debug("Order status unchanged", order_id=str(order.id), status=order.status)
            return
        if OrderStatus(order.status) is OrderStatus.CANCELLED:
            self._return_stock(order)
        current_domain.repository_for(Order).add(order)

    @handle(UpdateOrderStatus)
    def update_status(self, command):
        role = require_role(command.caller_role, *STAFF_ROLES)
        target = OrderStatus.parse(command.status)

        order = load_order(command.order_id)
        previous = order.status
        changed = order.change_status(target, performed_by_id=command.caller_id, performed_by_role=role.value)
        self._save(order, changed)

        if changed:
            logger.info("Order status changed", order_id=str(order.id), previous=previous, status=order.status)
        return order.status

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_order(command.order_id)
        role = authorize_owner(command.caller_id, command.caller_role, owner_user_id(order))

        changed = order.cancel(performed_by_id=command.caller_id, performed_by_role=role.value)
        self._save(order, changed)

        if changed:
            logger.info("Order cancelled", order_id=str(order.id), cancelled_by=role.value)
        return order.status
