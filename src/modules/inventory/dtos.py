"""Wire DTOs exchanged with the inventory service."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InventoryDTO(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ProductResponse(BaseModel):
    """Product as returned by ``GET /products/{id}`` (snake_case timestamps)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: Optional[int] = None
    sku: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StockLockItemDTO(InventoryDTO):
    product_id: int = Field(ge=1)
    quantity: int = Field(ge=1)


class StockLockRequest(InventoryDTO):
    items: List[StockLockItemDTO]


class StockLockResponse(InventoryDTO):
    success: bool = False
    message: str = ""
