"""Error taxonomy for order processing.

Request problems subclass Protean's ``ValidationError`` and missing records
subclass ``ObjectNotFoundError``, so the framework's exception handlers map
them to 400 and 404. ``Forbidden`` and ``TransactionFailure`` have their own
handlers in ``ordering.api.errors``.

All validation errors are raised before any state is mutated.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


# ---------------------------------------------------------------------------
# Order placement
# ---------------------------------------------------------------------------
class EmptyOrder(ValidationError):
    def __init__(self):
        super().__init__({"items": ["Order must contain at least one item"]})


class InvalidQuantity(ValidationError):
    def __init__(self, part_id, quantity):
        self.part_id = part_id
        self.quantity = quantity
        super().__init__({"items": [f"Quantity must be positive (part {part_id}, requested {quantity})"]})


class InsufficientStock(ValidationError):
    """Requested quantity for a part exceeds what is on hand."""

    def __init__(self, part_id, requested, available):
        self.part_id = part_id
        self.requested = requested
        self.available = available
        super().__init__(
            {
                "items": [
                    f"Not enough stock for part {part_id}. "
                    f"Requested {requested}, available {available} (short by {requested - available})"
                ]
            }
        )


class UnsupportedPaymentMethod(ValidationError):
    def __init__(self, payment_method, supported):
        self.payment_method = payment_method
        super().__init__(
            {"payment_method": [f"Unsupported payment method {payment_method!r}; only {supported!r} is accepted"]}
        )


# ---------------------------------------------------------------------------
# Shipping snapshot
# ---------------------------------------------------------------------------
class NoSavedAddress(ValidationError):
    def __init__(self):
        super().__init__({"shipping_address": ["No saved address on file"]})


class MissingOverride(ValidationError):
    def __init__(self):
        super().__init__({"shipping_address": ["Shipping address is required when not using the saved address"]})


class IncompleteAddress(ValidationError):
    def __init__(self, missing_fields):
        self.missing_fields = list(missing_fields)
        super().__init__(
            {
                "shipping_address": [
                    "address_line1, city, postal_code and country are required; "
                    f"missing: {', '.join(self.missing_fields)}"
                ]
            }
        )


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
class AlreadyFulfilled(ValidationError):
    def __init__(self, order_id, status):
        super().__init__(
            {"status": [f"Order #{order_id} has already been {status.lower()} and cannot be cancelled"]}
        )


class OrderCancelled(ValidationError):
    def __init__(self, order_id):
        super().__init__({"status": [f"Order #{order_id} is cancelled and cannot change status"]})


class OrderDelivered(ValidationError):
    def __init__(self, order_id):
        super().__init__({"status": [f"Order #{order_id} is delivered and cannot change status"]})


class InvalidStatus(ValidationError):
    def __init__(self, value):
        super().__init__({"status": [f"Invalid status value {value!r}"]})


class InvalidStatusTransition(ValidationError):
    def __init__(self, order_id, current, target):
        super().__init__({"status": [f"Order #{order_id} cannot move from {current} back to {target}"]})


# ---------------------------------------------------------------------------
# Missing records
# ---------------------------------------------------------------------------
class PartNotFound(ObjectNotFoundError):
    def __init__(self, part_id):
        self.part_id = part_id
        super().__init__({"part_id": [f"Part {part_id} not found"]})


class OrderNotFound(ObjectNotFoundError):
    def __init__(self, order_id):
        super().__init__({"order_id": [f"Order {order_id} not found"]})


class CustomerNotFound(ObjectNotFoundError):
    def __init__(self, reference):
        super().__init__({"customer": [f"Customer profile not found for {reference}"]})


# ---------------------------------------------------------------------------
# Authorization and storage
# ---------------------------------------------------------------------------
class Forbidden(Exception):
    """The caller's role or identity does not permit the operation."""

    def __init__(self, message="Operation not permitted"):
        self.message = message
        super().__init__(message)


class TransactionFailure(Exception):
    """The unit of work failed to commit and was rolled back."""

    def __init__(self, message="The request could not be committed and was rolled back"):
        self.message = message
        super().__init__(message)
