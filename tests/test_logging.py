import pytest


class TestSensitiveDataMasking:
    @pytest.mark.parametrize(
        "key, value, secret",
        [
            ("email", "customer john.smith@example.com registered", "john.smith@example.com"),
            ("phone", "+1-555-123-4567", "555-123-4567"),
            ("data", "password='s3cret123'", "s3cret123"),
            ("header", "token=abc123xyz", "abc123xyz"),
            ("auth", "Authorization: Bearer-xyz987", "Bearer-xyz987"),
        ],
    )
    def test_sensitive_values_masked(self, key, value, secret):
        from config.settings import mask_sensitive_data

        result = mask_sensitive_data(None, None, {"event": "test", key: value})
        assert secret not in result[key]
        assert "***MASKED***" in result[key]

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "order.created", "order_id": 42, "status": "Pending"}
        result = mask_sensitive_data(None, None, event_dict)
        assert result == {"event": "order.created", "order_id": 42, "status": "Pending"}

    def test_trace_ids_are_not_masked(self):
        from config.settings import mask_sensitive_data

        trace_id = "01927c1e-4b7a-7c3e-9d2f-0a1b2c3d4e5f"
        result = mask_sensitive_data(None, None, {"event": "test", "error_id": trace_id})
        assert result["error_id"] == trace_id
