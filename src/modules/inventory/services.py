"""Inventory-facing services used during order creation.

- ``ProductValidationService`` checks that every referenced product exists.
  Only an explicit 404 marks a product as invalid; any other failure is
  logged and the product is let through (fail open).
- ``StockLockingService`` reserves stock for all items of one order in a
  single request and classifies the outcome into a domain error.

Neither service retries.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import httpx
import structlog
from rest_framework import status

from modules.core.errors import ErrorKind, OrderManagementError
from modules.inventory.client import InventoryClient, get_inventory_client
from modules.inventory.dtos import StockLockItemDTO, StockLockRequest

logger = structlog.get_logger(__name__)


class ProductValidationService:
    def __init__(self, client: Optional[InventoryClient] = None) -> None:
        self._client = client

    @property
    def client(self) -> InventoryClient:
        if self._client is None:
            self._client = get_inventory_client()
        return self._client

    def validate_products_exist(self, product_ids: Optional[Iterable[int]]) -> None:
        """Raise ``invalid_order`` listing every product the inventory reports missing."""
        ids: List[int] = list(dict.fromkeys(product_ids or ()))
        if not ids:
            logger.warning("product_validation.empty_product_list")
            return

        invalid = [product_id for product_id in ids if self._is_product_invalid(product_id)]
        if invalid:
            message = f"The following products do not exist in inventory: {invalid}"
            logger.error("product_validation.failed", invalid_product_ids=invalid)
            raise OrderManagementError.invalid_order(message)

        logger.info("product_validation.succeeded", product_ids=ids)

    def _is_product_invalid(self, product_id: int) -> bool:
        try:
            self.client.get_product(product_id)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == status.HTTP_404_NOT_FOUND:
                logger.warning("product_validation.product_not_found", product_id=product_id)
                return True
            logger.error(
                "product_validation.inventory_error",
                product_id=product_id,
                status_code=exc.response.status_code,
            )
            return False
        except Exception as exc:
            # Inventory unreachable: let the product through.
            logger.error(
                "product_validation.inventory_unreachable",
                product_id=product_id,
                error=str(exc),
            )
            return False
        return False


class StockLockingService:
    def __init__(self, client: Optional[InventoryClient] = None) -> None:
        self._client = client

    @property
    def client(self) -> InventoryClient:
        if self._client is None:
            self._client = get_inventory_client()
        return self._client

    def lock_stock_for_order(self, items: Optional[Sequence]) -> None:
        """Lock stock for ``items`` (objects with ``product_id`` and ``quantity``).

        Raises ``OrderManagementError``:
        - ``CONFLICT`` when the inventory answers ``success=false``;
        - ``UNPROCESSABLE`` when the inventory rejects the request with 422;
        - ``SERVICE_UNAVAILABLE`` for any other failure.
        """
        if not items:
            logger.warning("stock_lock.empty_item_list")
            return

        log = logger.bind(item_count=len(items))

        try:
            request = StockLockRequest(
                items=[
                    StockLockItemDTO(product_id=item.product_id, quantity=item.quantity)
                    for item in items
                ]
            )
            response = self.client.lock_stock(request)
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY:
                log.error("stock_lock.insufficient_stock")
                raise OrderManagementError(
                    ErrorKind.UNPROCESSABLE,
                    "Insufficient stock for order",
                    recovery_suggestion="Reduce quantities or wait for inventory to be restocked",
                    cause=exc,
                ) from exc
            log.error("stock_lock.inventory_error", status_code=exc.response.status_code)
            raise self._unavailable(exc) from exc
        except Exception as exc:
            log.error("stock_lock.inventory_unreachable", error=str(exc))
            raise self._unavailable(exc) from exc

        if not response.success:
            message = f"Stock locking failed: {response.message}"
            log.error("stock_lock.rejected", reason=response.message)
            raise OrderManagementError(
                ErrorKind.CONFLICT,
                message,
                recovery_suggestion="Check inventory availability and try again",
            )

        log.info("stock_lock.succeeded")

    @staticmethod
    def _unavailable(cause: Exception) -> OrderManagementError:
        return OrderManagementError(
            ErrorKind.SERVICE_UNAVAILABLE,
            "Error locking stock",
            recovery_suggestion=(
                "The inventory service is currently unavailable. Please try again later."
            ),
            cause=cause,
        )
