"""Customer DRF serializers (inbound validation only).

Responses are rendered from ``CustomerOutputDTO``.  E-mail uniqueness is
not checked here: the service reports a duplicate as a conflict.
"""

from __future__ import annotations

from rest_framework import serializers

PHONE_REGEX = r"^\+?[0-9\-\s]+$"


class CreateCustomerSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=100)
    email = serializers.EmailField(max_length=100)
    phone = serializers.RegexField(
        PHONE_REGEX,
        max_length=20,
        required=False,
        allow_blank=True,
        default="",
        error_messages={"invalid": "Invalid phone number format"},
    )
    address = serializers.CharField()
