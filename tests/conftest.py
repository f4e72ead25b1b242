from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple

import httpx
import pytest
from rest_framework.test import APIClient

from modules.customers.models import Customer
from modules.inventory.client import InventoryClient

INVENTORY_BASE_URL = "http://inventory.test/api/v1"


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def customer():
    return Customer.objects.create(
        name="John Smith",
        email="john.smith@example.com",
        phone="+1-555-123-4567",
        address="123 Main St, Springfield",
    )


# ---------------------------------------------------------------------------
# Inventory service fake (httpx.MockTransport, no network)
# ---------------------------------------------------------------------------


class FakeInventory:
    """In-memory stand-in for the inventory service.

    ``known_products`` answer ``GET /products/{id}`` with 200, anything else
    with 404 unless overridden in ``product_errors``.  ``lock_response`` is
    the ``(status, body)`` returned by ``POST /stock/lock``; setting
    ``lock_exception`` makes the transport raise instead.
    """

    def __init__(self) -> None:
        self.known_products: Set[int] = {1, 2, 101, 102}
        self.product_errors: Dict[int, Any] = {}
        self.lock_response: Tuple[int, Any] = (200, {"success": True, "message": "Stock locked"})
        self.lock_exception: Optional[Exception] = None
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if request.method == "GET" and path.startswith("/api/v1/products/"):
            product_id = int(path.rsplit("/", 1)[-1])
            error = self.product_errors.get(product_id)
            if isinstance(error, Exception):
                raise error
            if error is not None:
                return httpx.Response(error, json={"message": "inventory error"})
            if product_id in self.known_products:
                return httpx.Response(
                    200,
                    json={"id": product_id, "sku": f"SKU-{product_id}", "name": f"Product {product_id}"},
                )
            return httpx.Response(404, json={"message": "Product not found"})

        if request.method == "POST" and path == "/api/v1/stock/lock":
            if self.lock_exception is not None:
                raise self.lock_exception
            status_code, body = self.lock_response
            return httpx.Response(status_code, json=body)

        return httpx.Response(404)

    @property
    def product_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def lock_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == "POST"]

    def client(self) -> InventoryClient:
        return InventoryClient(INVENTORY_BASE_URL, transport=httpx.MockTransport(self.handler))


@pytest.fixture()
def fake_inventory(monkeypatch, settings):
    """Route every inventory call through ``FakeInventory`` and price each line at 10.00."""
    inventory = FakeInventory()
    client = inventory.client()
    monkeypatch.setattr("modules.inventory.services.get_inventory_client", lambda: client)
    settings.ORDER_PRICE_SOURCE = "modules.orders.pricing.FixedPriceSource"
    yield inventory
    client.close()
