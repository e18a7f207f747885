"""Customer profile as seen by ordering: contact details and one saved address."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from ordering.customer.events import CustomerRegistered, SavedAddressUpdated
from ordering.domain import ordering

# Fields whose presence makes a saved address usable for shipping
ADDRESS_KEY_FIELDS = ("address_line1", "city", "postal_code", "country")

ADDRESS_FIELDS = ("address_line1", "address_line2", "city", "state", "postal_code", "country")


@ordering.aggregate
class Customer:
    user_id = String(required=True, max_length=255, unique=True)
    email = String(required=True, max_length=254)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    phone = String(max_length=30)
    address_line1 = String(max_length=255)
    address_line2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)
    registered_at = DateTime()

    @classmethod
    def register(cls, user_id, email, first_name=None, last_name=None, phone=None, **address):
        customer = cls(
            user_id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            registered_at=datetime.now(UTC),
            **{field: address.get(field) for field in ADDRESS_FIELDS},
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                user_id=customer.user_id,
                email=customer.email,
            )
        )
        return customer

    def has_saved_address(self) -> bool:
        return any((getattr(self, field) or "").strip() for field in ADDRESS_KEY_FIELDS)

    def update_saved_address(self, phone=None, **address):
        """Replace the saved address wholesale.

        Orders already placed keep the snapshot taken when they were placed.
        """
        for field in ADDRESS_FIELDS:
            setattr(self, field, address.get(field))
        if phone is not None:
            self.phone = phone

        self.raise_(
            SavedAddressUpdated(
                customer_id=str(self.id),
                city=self.city,
                country=self.country,
            )
        )
