"""Customer profile: registration and saved-address maintenance."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.customer.customer import Customer
from ordering.domain import ordering
from ordering.shared import errors
from ordering.shared.access import Role, require_role


@ordering.command(part_of="Customer")
class RegisterCustomer:
    """Create the ordering profile for a user already known to the identity provider."""

    user_id = String(required=True, max_length=255)
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


@ordering.command(part_of="Customer")
class UpdateSavedAddress:
    caller_id = String(max_length=255)
    caller_role = String(max_length=20)
    phone = String(max_length=30)
    address_line1 = String(max_length=255)
    address_line2 = String(max_length=255)
    city = String(max_length=100)
    state = String(max_length=100)
    postal_code = String(max_length=20)
    country = String(max_length=100)


@ordering.command_handler(part_of=Customer)
class CustomerProfileHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        repo = current_domain.repository_for(Customer)
        if repo.find_by_user_id(command.user_id) is not None:
            raise ValidationError({"user_id": [f"User {command.user_id} already has a customer profile"]})

        customer = Customer.register(
            user_id=command.user_id,
            email=command.email,
            first_name=command.first_name,
            last_name=command.last_name,
            phone=command.phone,
            address_line1=command.address_line1,
            address_line2=command.address_line2,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(customer)
        return str(customer.id)

    @handle(UpdateSavedAddress)
    def update_saved_address(self, command):
        require_role(command.caller_role, Role.CUSTOMER)

        repo = current_domain.repository_for(Customer)
        customer = repo.find_by_user_id(command.caller_id)
        if customer is None:
            raise errors.CustomerNotFound(f"user {command.caller_id}")

        customer.update_saved_address(
            phone=command.phone,
            address_line1=command.address_line1,
            address_line2=command.address_line2,
            city=command.city,
            state=command.state,
            postal_code=command.postal_code,
            country=command.country,
        )
        repo.add(customer)
        return str(customer.id)
