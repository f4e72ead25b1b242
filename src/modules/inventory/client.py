"""HTTP client for the inventory service.

One ``httpx.Client`` is shared per process (see ``get_inventory_client``).
Transport errors and non-2xx responses surface as ``httpx`` exceptions; the
services in ``modules.inventory.services`` classify them.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

import httpx
import structlog
from django.conf import settings

from modules.inventory.dtos import ProductResponse, StockLockRequest, StockLockResponse

logger = structlog.get_logger(__name__)


class InventoryClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, transport: Optional[httpx.BaseTransport] = None
    ) -> InventoryClient:
        return cls(
            settings.INVENTORY_SERVICE_URL,
            timeout=settings.INVENTORY_SERVICE_TIMEOUT,
            transport=transport,
        )

    def get_product(self, product_id: int) -> ProductResponse:
        """``GET /products/{id}``. A missing product raises ``httpx.HTTPStatusError`` (404)."""
        response = self._http.get(f"/products/{product_id}")
        response.raise_for_status()
        return ProductResponse.model_validate(response.json())

    def lock_stock(self, request: StockLockRequest) -> StockLockResponse:
        """``POST /stock/lock`` with every (productId, quantity) pair of one order."""
        response = self._http.post(
            "/stock/lock",
            json=request.model_dump(mode="json", by_alias=True),
        )
        response.raise_for_status()
        return StockLockResponse.model_validate(response.json())

    def close(self) -> None:
        self._http.close()


@lru_cache(maxsize=1)
def get_inventory_client() -> InventoryClient:
    logger.info("inventory.client_created", base_url=settings.INVENTORY_SERVICE_URL)
    return InventoryClient.from_settings()
