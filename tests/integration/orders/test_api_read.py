"""Integration tests for Order read endpoints.

Covers:
- GET /orders: every order, filters by status, customer and date range.
- GET /orders/{id}: order representation and 404 envelope.
"""

from __future__ import annotations

import pytest
from freezegun import freeze_time

from modules.customers.models import Customer

pytestmark = pytest.mark.integration


@pytest.fixture()
def create_order(api_client, fake_inventory):
    def _create(customer, *product_ids):
        response = api_client.post(
            "/orders",
            {
                "customerId": customer.pk,
                "items": [{"productId": pid, "quantity": 1} for pid in product_ids],
            },
            format="json",
        )
        assert response.status_code == 201
        return response.json()

    return _create


@pytest.fixture()
def second_customer():
    return Customer.objects.create(
        name="Maria Garcia", email="maria.garcia@example.com", address="45 Oak Ave"
    )


class TestListOrders:
    def test_empty_list(self, api_client):
        response = api_client.get("/orders")
        assert response.status_code == 200
        assert response.json() == []

    def test_lists_every_order(self, api_client, customer, create_order):
        first = create_order(customer, 1)
        second = create_order(customer, 2, 101)

        response = api_client.get("/orders")

        assert [o["id"] for o in response.json()] == [first["id"], second["id"]]
        assert len(response.json()[1]["items"]) == 2

    def test_filter_by_status(self, api_client, customer, create_order):
        pending = create_order(customer, 1)
        shipped = create_order(customer, 2)
        api_client.put(f"/orders/{shipped['id']}/status", {"status": "Shipped"}, format="json")

        response = api_client.get("/orders", {"status": "shipped"})

        assert [o["id"] for o in response.json()] == [shipped["id"]]
        assert pending["id"] not in [o["id"] for o in response.json()]

    def test_filter_by_customer(self, api_client, customer, second_customer, create_order):
        create_order(customer, 1)
        theirs = create_order(second_customer, 1)

        response = api_client.get("/orders", {"customer": second_customer.pk})

        assert [o["id"] for o in response.json()] == [theirs["id"]]

    def test_filter_by_date_range(self, api_client, customer, create_order):
        with freeze_time("2024-01-05 10:00:00"):
            create_order(customer, 1)
        with freeze_time("2024-02-10 10:00:00"):
            february = create_order(customer, 1)
        with freeze_time("2024-03-15 10:00:00"):
            create_order(customer, 1)

        response = api_client.get(
            "/orders", {"start_date": "2024-02-01", "end_date": "2024-02-28"}
        )

        assert [o["id"] for o in response.json()] == [february["id"]]
        assert response.json()[0]["orderDate"].startswith("2024-02-10")

    def test_invalid_date_filter_returns_400(self, api_client):
        response = api_client.get("/orders", {"start_date": "yesterday"})

        assert response.status_code == 400
        body = response.json()
        assert body["detail"].startswith("Validation error for field 'start_date'")


class TestRetrieveOrder:
    def test_returns_order(self, api_client, customer, create_order):
        created = create_order(customer, 1, 2)

        response = api_client.get(f"/orders/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_unknown_order_returns_404_envelope(self, api_client):
        response = api_client.get("/orders/999999")

        assert response.status_code == 404
        body = response.json()
        assert body["criticality"] == "critical"
        assert body["detail"] == "Order not found with ID: 999999"
        assert body["id"]

    def test_non_numeric_id_returns_404(self, api_client):
        response = api_client.get("/orders/abc")
        assert response.status_code == 404
