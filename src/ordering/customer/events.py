"""Domain events for the Customer aggregate."""

from protean.fields import Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Customer")
class CustomerRegistered:
    __version__ = 1

    customer_id = Identifier(required=True)
    user_id = String(required=True)
    email = String(required=True)


@ordering.event(part_of="Customer")
class SavedAddressUpdated:
    __version__ = 1

    customer_id = Identifier(required=True)
    city = String()
    country = String()
