"""Integration tests for DELETE /orders/{id}."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderItem, Payment, Shipment

pytestmark = pytest.mark.integration


@pytest.fixture()
def order(api_client, customer, fake_inventory):
    response = api_client.post(
        "/orders",
        {"customerId": customer.pk, "items": [{"productId": 1, "quantity": 1}]},
        format="json",
    )
    return Order.objects.get(pk=response.json()["id"])


class TestDeleteOrder:
    def test_returns_204_and_removes_order(self, api_client, order):
        response = api_client.delete(f"/orders/{order.pk}")

        assert response.status_code == 204
        assert not Order.objects.filter(pk=order.pk).exists()

    def test_cascades_to_items_payments_and_shipments(self, api_client, order):
        Payment.objects.create(order=order, amount=Decimal("10.00"), transaction_id="TXN-9")
        Shipment.objects.create(order=order, carrier="UPS", tracking_number="1Z9")

        api_client.delete(f"/orders/{order.pk}")

        assert not OrderItem.objects.filter(order_id=order.pk).exists()
        assert not Payment.objects.exists()
        assert not Shipment.objects.exists()

    def test_customer_survives_order_deletion(self, api_client, order, customer):
        api_client.delete(f"/orders/{order.pk}")
        assert api_client.get(f"/customers/{customer.pk}").status_code == 200

    def test_second_delete_returns_404(self, api_client, order):
        api_client.delete(f"/orders/{order.pk}")
        response = api_client.delete(f"/orders/{order.pk}")

        assert response.status_code == 404
        assert response.json()["detail"] == f"Order not found with ID: {order.pk}"
