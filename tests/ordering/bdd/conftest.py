"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.lifecycle import UpdateOrderStatus
from ordering.order.order import Order
from ordering.shared.errors import Forbidden
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then

_REQUEST_ERRORS = (ValidationError, ObjectNotFoundError, Forbidden)


@pytest.fixture()
def scenario_state():
    """Ids created by the scenario and the error its last request raised."""
    return {"parts": {}, "order_id": None, "error": None}


@pytest.fixture()
def attempt(scenario_state):
    """Process a command, recording a request error instead of raising it."""

    def _attempt(command):
        scenario_state["error"] = None
        try:
            return current_domain.process(command, asynchronous=False)
        except _REQUEST_ERRORS as exc:
            scenario_state["error"] = exc
            return None

    return _attempt


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a part "{sku}" priced {price:f} with {stock:d} in stock'))
def _(scenario_state, add_part, sku, price, stock):
    scenario_state["parts"][sku] = add_part(price=price, stock=stock, sku=sku)


@given(parsers.cfparse('a registered customer "{user_id}"'))
def _(register_customer, user_id):
    register_customer(user_id=user_id)


@given(parsers.cfparse('the customer has ordered {quantity:d} of "{sku}"'))
def _(scenario_state, place_order, quantity, sku):
    scenario_state["order_id"] = place_order([(scenario_state["parts"][sku], quantity)])


@given(parsers.cfparse('staff moved the order to "{status}"'))
def _(scenario_state, status):
    current_domain.process(
        UpdateOrderStatus(
            order_id=scenario_state["order_id"],
            status=status,
            caller_id="staff-1",
            caller_role="staff",
        ),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
def _order(scenario_state):
    return current_domain.repository_for(Order).get(scenario_state["order_id"])


@then(parsers.cfparse("the order subtotal is {amount:f}"))
def _(scenario_state, amount):
    assert _order(scenario_state).subtotal == amount


@then(parsers.cfparse("the order tax is {amount:f}"))
def _(scenario_state, amount):
    assert _order(scenario_state).tax == amount


@then(parsers.cfparse("the order total is {amount:f}"))
def _(scenario_state, amount):
    assert _order(scenario_state).total == amount


@then(parsers.cfparse('the order status is "{status}"'))
def _(scenario_state, status):
    assert _order(scenario_state).status == status


@then(parsers.cfparse("the order has {count:d} history entries"))
def _(scenario_state, count):
    assert len(_order(scenario_state).status_history) == count


@then(parsers.cfparse('the stock of "{sku}" is {stock:d}'))
def _(scenario_state, stock_of, sku, stock):
    assert stock_of(scenario_state["parts"][sku]) == stock


@then(parsers.cfparse('the request fails with "{error_name}"'))
def _(scenario_state, error_name):
    assert scenario_state["error"] is not None
    assert type(scenario_state["error"]).__name__ == error_name
