import json

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session", autouse=True)
def _schema(ordering_bed):
    from ordering.domain import ordering
    from ordering.utils.db import drop_db, setup_db

    setup_db(ordering)
    yield
    drop_db(ordering)


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
SAVED_ADDRESS = {
    "address_line1": "14 Piston Road",
    "address_line2": "Unit 3",
    "city": "Sheffield",
    "state": "South Yorkshire",
    "postal_code": "S1 2GH",
    "country": "UK",
}


@pytest.fixture()
def add_part():
    from ordering.part.catalog import AddPart

    counter = iter(range(1, 10_000))

    def _add(price=45.99, stock=10, name="Brake Pad Set", sku=None):
        return current_domain.process(
            AddPart(
                caller_role="staff",
                sku=sku or f"BP-{next(counter):04d}",
                name=name,
                price=price,
                quantity_in_stock=stock,
            ),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def register_customer():
    from ordering.customer.registration import RegisterCustomer

    def _register(user_id="user-001", with_address=True, **overrides):
        fields = {
            "user_id": user_id,
            "email": f"{user_id}@example.com",
            "first_name": "Ada",
            "last_name": "Mechanic",
            "phone": "+44 114 496 0000",
        }
        if with_address:
            fields.update(SAVED_ADDRESS)
        fields.update(overrides)
        return current_domain.process(RegisterCustomer(**fields), asynchronous=False)

    return _register


@pytest.fixture()
def place_order():
    from ordering.order.placement import PlaceOrder

    def _place(lines, caller_id="user-001", caller_role="customer", override=None, **kwargs):
        return current_domain.process(
            PlaceOrder(
                caller_id=caller_id,
                caller_role=caller_role,
                items=json.dumps([{"part_id": part_id, "quantity": quantity} for part_id, quantity in lines]),
                use_saved_address=override is None,
                address_override=json.dumps(override) if override is not None else None,
                **kwargs,
            ),
            asynchronous=False,
        )

    return _place


@pytest.fixture()
def stock_of():
    from ordering.part.part import Part

    def _stock(part_id):
        return current_domain.repository_for(Part).get(part_id).quantity_in_stock

    return _stock
