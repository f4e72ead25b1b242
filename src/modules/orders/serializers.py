"""Order DRF serializers (inbound validation only).

The API speaks camelCase; ``source=`` maps each field to the snake_case
key the DTOs expect.  Responses are rendered from ``OrderOutputDTO``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import MAX_ITEM_QUANTITY, REQUESTABLE_STATUSES

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class OrderItemInputSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source="product_id", min_value=1)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_ITEM_QUANTITY)


class CreateOrderSerializer(serializers.Serializer):
    """``{customerId, items: [{productId, quantity}]}``.

    An empty or missing ``items`` passes here; the service rejects it with
    its own message.
    """

    customerId = serializers.IntegerField(source="customer_id", min_value=1)
    items = OrderItemInputSerializer(
        many=True, required=False, allow_empty=True, allow_null=True
    )


class UpdateOrderSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=REQUESTABLE_STATUSES, required=False)
    shippingAddress = serializers.CharField(
        source="shipping_address", required=False, allow_blank=True
    )
    items = OrderItemInputSerializer(many=True, required=False, allow_empty=True)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=REQUESTABLE_STATUSES)
