"""Integration tests for the Order creation endpoint.

Covers:
- Success 201: order with priced items and a computed total.
- Validation 400: malformed payloads rejected by the serializer.
- Business 404/400: unknown customer, empty items, unknown products,
  totals above the storable maximum.
- Stock locking: failures keep the order with ``Stock Lock Error``.
- Inventory outages during product validation fail open.
"""

from __future__ import annotations

import json

import httpx
import pytest

from modules.orders.constants import EMPTY_ORDER_MESSAGE, MAX_ITEM_QUANTITY, OrderStatus
from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration

URL = "/orders"


def _payload(customer_id, *items):
    return {
        "customerId": customer_id,
        "items": [{"productId": pid, "quantity": qty} for pid, qty in items],
    }


# ===========================================================================
# Success
# ===========================================================================


class TestCreateOrderSuccess:
    def test_returns_201_with_pending_order(self, api_client, customer, fake_inventory):
        response = api_client.post(
            URL, _payload(customer.pk, (1, 1), (2, 1)), format="json"
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Pending"
        assert body["customerId"] == customer.pk
        assert body["totalAmount"] == "20.00"
        assert [(i["productId"], i["quantity"], i["price"]) for i in body["items"]] == [
            (1, 1, "10.00"),
            (2, 1, "10.00"),
        ]
        assert {"id", "orderDate", "createdAt", "updatedAt"} <= body.keys()

    def test_order_is_persisted(self, api_client, customer, fake_inventory):
        response = api_client.post(URL, _payload(customer.pk, (101, 3)), format="json")

        order = Order.objects.get(pk=response.json()["id"])
        assert order.customer_id == customer.pk
        assert order.items.get().quantity == 3

    def test_items_round_trip_in_request_order(self, api_client, customer, fake_inventory):
        response = api_client.post(
            URL, _payload(customer.pk, (102, 1), (1, 2), (101, 1)), format="json"
        )
        assert [i["productId"] for i in response.json()["items"]] == [102, 1, 101]

    def test_inventory_receives_one_lock_request_with_all_items(
        self, api_client, customer, fake_inventory
    ):
        api_client.post(URL, _payload(customer.pk, (1, 2), (2, 5)), format="json")

        assert len(fake_inventory.lock_requests) == 1
        sent = json.loads(fake_inventory.lock_requests[0].content)
        assert sent == {
            "items": [{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 5}]
        }

    def test_product_check_outage_fails_open(self, api_client, customer, fake_inventory):
        fake_inventory.product_errors[1] = 500
        fake_inventory.product_errors[2] = httpx.ConnectError("inventory down")

        response = api_client.post(URL, _payload(customer.pk, (1, 1), (2, 1)), format="json")

        assert response.status_code == 201
        assert response.json()["status"] == "Pending"


# ===========================================================================
# Validation and business errors
# ===========================================================================


class TestCreateOrderErrors:
    def test_unknown_customer_returns_404(self, api_client, fake_inventory):
        response = api_client.post(URL, _payload(999, (1, 1)), format="json")

        assert response.status_code == 404
        body = response.json()
        assert body["criticality"] == "critical"
        assert "Customer" in body["detail"]
        assert "999" in body["detail"]
        assert fake_inventory.requests == []

    @pytest.mark.parametrize("items", [[], None])
    def test_empty_items_returns_400(self, api_client, customer, fake_inventory, items):
        response = api_client.post(
            URL, {"customerId": customer.pk, "items": items}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"] == EMPTY_ORDER_MESSAGE
        assert Order.objects.count() == 0

    def test_missing_items_returns_400(self, api_client, customer, fake_inventory):
        response = api_client.post(URL, {"customerId": customer.pk}, format="json")

        assert response.status_code == 400
        assert response.json()["detail"] == EMPTY_ORDER_MESSAGE

    def test_unknown_products_return_400_naming_them(
        self, api_client, customer, fake_inventory
    ):
        response = api_client.post(
            URL, _payload(customer.pk, (1, 1), (777, 1), (888, 2)), format="json"
        )

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert "777" in detail and "888" in detail
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0
        assert fake_inventory.lock_requests == []

    def test_zero_quantity_rejected_by_serializer(self, api_client, customer, fake_inventory):
        response = api_client.post(URL, _payload(customer.pk, (1, 0)), format="json")

        assert response.status_code == 400
        body = response.json()
        assert body["detail"].startswith("Validation error for field 'items[0].quantity'")
        assert body["otherErrors"][0]["criticality"] == "non-critical"
        assert fake_inventory.requests == []

    def test_oversized_quantity_rejected_by_serializer(
        self, api_client, customer, fake_inventory
    ):
        response = api_client.post(
            URL, _payload(customer.pk, (1, 100_000_000)), format="json"
        )

        assert response.status_code == 400
        assert response.json()["detail"].startswith(
            "Validation error for field 'items[0].quantity'"
        )
        assert Order.objects.count() == 0
        assert fake_inventory.requests == []

    def test_total_above_maximum_returns_400(self, api_client, customer, fake_inventory):
        # 100 lines * 100000 units * 10.00 = 100,000,000.00
        lines = [(1, MAX_ITEM_QUANTITY)] * 100
        response = api_client.post(URL, _payload(customer.pk, *lines), format="json")

        assert response.status_code == 400
        body = response.json()
        assert "exceeds the maximum" in body["detail"]
        assert body["otherErrors"][0]["detail"] == (
            "Recovery suggestion: Correct the order data and try again"
        )
        assert Order.objects.count() == 0
        assert fake_inventory.lock_requests == []

    def test_missing_customer_id_rejected(self, api_client, fake_inventory):
        response = api_client.post(URL, {"items": [{"productId": 1, "quantity": 1}]}, format="json")

        assert response.status_code == 400
        assert "customerId" in response.json()["detail"]


# ===========================================================================
# Stock locking
# ===========================================================================


class TestCreateOrderStockLocking:
    @pytest.mark.parametrize(
        "lock_response",
        [
            (200, {"success": False, "message": "Product 1 is reserved"}),
            (422, {"message": "Insufficient stock"}),
            (500, {"message": "boom"}),
        ],
    )
    def test_lock_failure_returns_201_with_stock_lock_error(
        self, api_client, customer, fake_inventory, lock_response
    ):
        fake_inventory.lock_response = lock_response

        response = api_client.post(URL, _payload(customer.pk, (1, 1)), format="json")

        assert response.status_code == 201
        assert response.json()["status"] == "Stock Lock Error"
        assert Order.objects.get().status == OrderStatus.STOCK_LOCK_ERROR

    def test_unreachable_inventory_on_lock(self, api_client, customer, fake_inventory):
        fake_inventory.lock_exception = httpx.ReadTimeout("timed out")

        response = api_client.post(URL, _payload(customer.pk, (1, 1)), format="json")

        assert response.status_code == 201
        assert response.json()["status"] == "Stock Lock Error"
