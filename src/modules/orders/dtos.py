"""Order DTOs for the service layer.

Pydantic v2, immutable (``frozen=True``).  These are the contracts between
the API layer (DRF serializers) and ``OrderService``.  Output DTOs dump
with camelCase aliases, which is the outward JSON shape of an order.

- ``CreateOrderItemDTO`` / ``CreateOrderDTO``: order creation input.
- ``UpdateOrderDTO``: partial update; ``None`` means "not supplied".
- ``OrderItemOutputDTO`` / ``OrderOutputDTO``: API responses.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from modules.orders.constants import MAX_ITEM_QUANTITY

if TYPE_CHECKING:
    from modules.orders.models import Order

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateOrderItemDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int = Field(ge=1)
    quantity: int = Field(ge=1, le=MAX_ITEM_QUANTITY)


class CreateOrderDTO(BaseModel):
    """Order creation input.

    ``items`` may be empty here: the service rejects an empty order with a
    domain error so callers that skip the serializer get the same answer.
    """

    model_config = ConfigDict(frozen=True)

    customer_id: int
    items: List[CreateOrderItemDTO] = Field(default_factory=list)

    @property
    def product_ids(self) -> List[int]:
        """Distinct product ids in first-seen order."""
        return list(dict.fromkeys(item.product_id for item in self.items))


class UpdateOrderDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Optional[str] = None
    shipping_address: Optional[str] = None
    items: Optional[List[CreateOrderItemDTO]] = None


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class OutputDTO(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class OrderItemOutputDTO(OutputDTO):
    id: int
    product_id: int
    quantity: int
    price: Decimal

    @field_serializer("price")
    def _two_places(self, value: Decimal) -> str:
        return f"{value:.2f}"


class OrderOutputDTO(OutputDTO):
    id: int
    customer_id: int
    order_date: datetime
    status: str
    total_amount: Decimal
    items: List[OrderItemOutputDTO]
    created_at: datetime
    updated_at: datetime

    @field_serializer("total_amount")
    def _two_places(self, value: Decimal) -> str:
        return f"{value:.2f}"

    @classmethod
    def from_entity(cls, order: Order) -> OrderOutputDTO:
        """Build the response DTO; ``items`` should be prefetched."""
        return cls(
            id=order.pk,
            customer_id=order.customer_id,
            order_date=order.order_date,
            status=order.status,
            total_amount=order.total_amount,
            items=[
                OrderItemOutputDTO(
                    id=item.pk,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items.all()
            ],
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def to_representation(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
