"""Integration tests for the Ordering API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import customer_router, order_router, part_router, register_error_handlers
from ordering.part.part import Part
from protean import current_domain

CUSTOMER = {"X-User-Id": "user-api-001", "X-User-Role": "customer"}
STAFF = {"X-User-Id": "staff-api-001", "X-User-Role": "staff"}


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(order_router)
    app.include_router(customer_router)
    app.include_router(part_router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def customer_id(client):
    response = client.post(
        "/customers",
        json={
            "user_id": "user-api-001",
            "email": "ada@example.com",
            "first_name": "Ada",
            "last_name": "Mechanic",
            "phone": "0114 496 0000",
            "address_line1": "14 Piston Road",
            "city": "Sheffield",
            "postal_code": "S1 2GH",
            "country": "UK",
        },
    )
    assert response.status_code == 201
    return response.json()["id"]


def _add_part(client, sku="BP-API-1", price=45.99, stock=10):
    response = client.post(
        "/parts",
        json={"sku": sku, "name": "Brake Pad Set", "price": price, "quantity_in_stock": stock},
        headers=STAFF,
    )
    assert response.status_code == 201
    return response.json()["id"]


def _place(client, part_id, quantity=3, **extra):
    return client.post("/orders", json={"items": [{"part_id": part_id, "quantity": quantity}], **extra}, headers=CUSTOMER)


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, customer_id):
        part_id = _add_part(client)

        response = _place(client, part_id)

        assert response.status_code == 201
        body = response.json()
        assert body["customer_id"] == customer_id
        assert body["subtotal"] == 137.97
        assert body["tax"] == 27.59
        assert body["total"] == 165.56
        assert body["status"] == "Pending"
        assert body["delivery_address"] == "14 Piston Road • Sheffield • S1 2GH • UK"
        assert body["items"][0]["line_total"] == 137.97
        assert current_domain.repository_for(Part).get(part_id).quantity_in_stock == 7

    def test_insufficient_stock_is_400(self, client, customer_id):
        part_id = _add_part(client, stock=2)
        response = _place(client, part_id, quantity=3)
        assert response.status_code == 400
        assert current_domain.repository_for(Part).get(part_id).quantity_in_stock == 2

    def test_unknown_part_is_404(self, client, customer_id):
        assert _place(client, "no-such-part").status_code == 404

    def test_empty_order_is_400(self, client, customer_id):
        response = client.post("/orders", json={"items": []}, headers=CUSTOMER)
        assert response.status_code == 400

    def test_override_without_city_is_400(self, client, customer_id):
        part_id = _add_part(client)
        response = _place(
            client,
            part_id,
            use_saved_address=False,
            shipping_address={"address_line1": "1 Garage Lane", "postal_code": "LS1 4AP", "country": "UK"},
        )
        assert response.status_code == 400

    def test_staff_cannot_place_orders(self, client, customer_id):
        part_id = _add_part(client)
        response = client.post("/orders", json={"items": [{"part_id": part_id, "quantity": 1}]}, headers=STAFF)
        assert response.status_code == 403

    def test_missing_identity_is_403(self, client, customer_id):
        part_id = _add_part(client)
        response = client.post("/orders", json={"items": [{"part_id": part_id, "quantity": 1}]})
        assert response.status_code == 403


class TestOrderReadEndpoints:
    def test_get_order_with_history(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]

        response = client.get(f"/orders/{order_id}", params={"include_history": True}, headers=CUSTOMER)

        assert response.status_code == 200
        assert [h["status"] for h in response.json()["status_history"]] == ["Pending"]

    def test_get_order_hides_history_by_default(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        assert client.get(f"/orders/{order_id}", headers=CUSTOMER).json()["status_history"] is None

    def test_other_customer_gets_403(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        response = client.get(f"/orders/{order_id}", headers={"X-User-Id": "user-x", "X-User-Role": "customer"})
        assert response.status_code == 403

    def test_unknown_order_is_404(self, client):
        assert client.get("/orders/missing-order", headers=STAFF).status_code == 404

    def test_my_orders(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        response = client.get("/orders/mine", headers=CUSTOMER)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [order_id]

    def test_customer_orders_for_staff(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        response = client.get(f"/customers/{customer_id}/orders", headers=STAFF)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [order_id]

    def test_customer_orders_forbidden_for_customers(self, client, customer_id):
        assert client.get(f"/customers/{customer_id}/orders", headers=CUSTOMER).status_code == 403


class TestLifecycleEndpoints:
    def test_status_change(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]

        response = client.patch(f"/orders/{order_id}/status", json={"status": "shipped"}, headers=STAFF)

        assert response.status_code == 200
        assert response.json()["status"] == "Shipped"

    def test_backward_status_change_is_400(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        client.patch(f"/orders/{order_id}/status", json={"status": "Shipped"}, headers=STAFF)

        response = client.patch(f"/orders/{order_id}/status", json={"status": "Processing"}, headers=STAFF)
        assert response.status_code == 400

    def test_customer_cannot_change_status(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        response = client.patch(f"/orders/{order_id}/status", json={"status": "Shipped"}, headers=CUSTOMER)
        assert response.status_code == 403

    def test_cancel_restocks(self, client, customer_id):
        part_id = _add_part(client)
        order_id = _place(client, part_id).json()["id"]

        response = client.delete(f"/orders/{order_id}", headers=CUSTOMER)

        assert response.status_code == 200
        assert response.json()["status"] == "Cancelled"
        assert current_domain.repository_for(Part).get(part_id).quantity_in_stock == 10

    def test_cancel_shipped_is_400(self, client, customer_id):
        order_id = _place(client, _add_part(client)).json()["id"]
        client.patch(f"/orders/{order_id}/status", json={"status": "Shipped"}, headers=STAFF)
        assert client.delete(f"/orders/{order_id}", headers=CUSTOMER).status_code == 400


class TestCatalogAndProfileEndpoints:
    def test_add_part_requires_staff(self, client):
        response = client.post(
            "/parts",
            json={"sku": "BP-API-9", "name": "Brake Pad Set", "price": 1.0},
            headers=CUSTOMER,
        )
        assert response.status_code == 403

    def test_change_price(self, client):
        part_id = _add_part(client)
        response = client.put(f"/parts/{part_id}/price", json={"price": 50.0}, headers=STAFF)
        assert response.status_code == 200
        assert current_domain.repository_for(Part).get(part_id).price == 50.0

    def test_update_my_address(self, client, customer_id):
        response = client.put(
            "/customers/me/address",
            json={"address_line1": "99 New Street", "city": "York", "postal_code": "YO1 7HH", "country": "UK"},
            headers=CUSTOMER,
        )
        assert response.status_code == 200
