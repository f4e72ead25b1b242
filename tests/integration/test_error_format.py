"""Integration tests for standardized error responses."""

import uuid
from unittest.mock import patch

import pytest

pytestmark = pytest.mark.integration

ENVELOPE_KEYS = {"criticality", "id", "detail"}


class TestStandardizedErrors:
    def test_not_found_has_standard_format(self, api_client):
        response = api_client.get("/orders/31337")
        assert response.status_code == 404
        data = response.json()
        assert ENVELOPE_KEYS <= data.keys()
        assert uuid.UUID(data["id"]).version == 7

    def test_malformed_json_returns_400(self, api_client):
        response = api_client.post("/customers", data="{", content_type="application/json")
        assert response.status_code == 400
        data = response.json()
        assert ENVELOPE_KEYS <= data.keys()
        assert data["criticality"] == "critical"

    def test_validation_error_carries_recovery_suggestion(self, api_client):
        response = api_client.post("/orders", {"items": []}, format="json")
        assert response.status_code == 400
        data = response.json()
        recovery = data["otherErrors"][0]
        assert recovery["criticality"] == "non-critical"
        assert "Please check your input and correct the validation errors" in recovery["detail"]

    def test_method_not_allowed_returns_405(self, api_client):
        response = api_client.patch("/orders/1", {"status": "Shipped"}, format="json")
        assert response.status_code == 405
        assert ENVELOPE_KEYS <= response.json().keys()

    def test_unsupported_media_type_returns_415(self, api_client):
        response = api_client.post("/customers", data="name=x", content_type="text/plain")
        assert response.status_code == 415

    def test_unexpected_error_returns_generic_500(self, api_client):
        with patch(
            "modules.customers.services.CustomerService.list_customers",
            side_effect=RuntimeError("database password=hunter2 leaked"),
        ):
            response = api_client.get("/customers")

        assert response.status_code == 500
        data = response.json()
        assert data["detail"] == "Internal server error"
        assert "hunter2" not in response.content.decode()

    def test_each_error_gets_a_distinct_trace_id(self, api_client):
        first = api_client.get("/orders/1").json()["id"]
        second = api_client.get("/orders/1").json()["id"]
        assert first != second
