"""Shipping snapshot resolution.

An order ships either to the customer's saved address, copied as-is, or to
an address supplied with the request. Either way the result is an immutable
``ShippingSnapshot`` stored on the order.
"""

from ordering.customer.customer import ADDRESS_KEY_FIELDS
from ordering.order.order import ShippingSnapshot
from ordering.shared import errors


def _blank(value) -> bool:
    return not (value or "").strip()


def _from_saved_address(customer) -> ShippingSnapshot:
    if not customer.has_saved_address():
        raise errors.NoSavedAddress()

    return ShippingSnapshot(
        first_name=customer.first_name,
        last_name=customer.last_name,
        address_line1=customer.address_line1,
        address_line2=customer.address_line2,
        city=customer.city,
        state=customer.state,
        postal_code=customer.postal_code,
        country=customer.country,
        phone=customer.phone,
    )


def _from_override(customer, override: dict) -> ShippingSnapshot:
    missing = [field for field in ADDRESS_KEY_FIELDS if _blank(override.get(field))]
    if missing:
        raise errors.IncompleteAddress(missing)

    def _with_fallback(field):
        value = override.get(field)
        return getattr(customer, field) if _blank(value) else value

    return ShippingSnapshot(
        first_name=_with_fallback("first_name"),
        last_name=_with_fallback("last_name"),
        address_line1=override.get("address_line1"),
        address_line2=override.get("address_line2"),
        city=override.get("city"),
        state=override.get("state"),
        postal_code=override.get("postal_code"),
        country=override.get("country"),
        phone=_with_fallback("phone"),
    )


def resolve_shipping(customer, use_saved_address: bool, override: dict | None = None) -> ShippingSnapshot:
    if use_saved_address:
        return _from_saved_address(customer)
    if override is None:
        raise errors.MissingOverride()
    return _from_override(customer, override)
