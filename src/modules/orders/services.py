"""Order service layer (use cases).

Orchestrates order creation against the customer store, the inventory
service and the order store:

1. customer must exist (``NOT_FOUND`` otherwise);
2. the item list must not be empty (``INVALID``);
3. every referenced product must exist in inventory (``INVALID``);
4. each line is priced through the injected ``PriceSource``;
5. the order is persisted as ``Pending``;
6. stock is locked; a failure marks the order ``Stock Lock Error``
   instead of failing the request.

Steps run strictly in this order.  Step 5 is committed before step 6 so a
created order survives a stock-lock failure; ``create_order`` is therefore
not wrapped in a single transaction.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

from modules.core.errors import OrderManagementError
from modules.orders.constants import EMPTY_ORDER_MESSAGE, MAX_ORDER_AMOUNT, OrderStatus
from modules.orders.dtos import UpdateOrderDTO

if TYPE_CHECKING:
    from modules.customers.repositories.interfaces import ICustomerRepository
    from modules.inventory.services import ProductValidationService, StockLockingService
    from modules.orders.dtos import CreateOrderDTO
    from modules.orders.models import Order
    from modules.orders.pricing import PriceSource
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use cases.

    Collaborators are injected through the constructor; see
    ``build_order_service`` for the production wiring.
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        customer_repository: ICustomerRepository,
        product_validation_service: ProductValidationService,
        stock_locking_service: StockLockingService,
        price_source: PriceSource,
    ) -> None:
        self._order_repo = order_repository
        self._customer_repo = customer_repository
        self._product_validation = product_validation_service
        self._stock_locking = stock_locking_service
        self._price_source = price_source

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, dto: CreateOrderDTO) -> Order:
        """Create an order and try to lock its stock.

        Raises:
            OrderManagementError: ``NOT_FOUND`` for an unknown customer,
                ``INVALID`` for an empty item list, unknown products or a
                total above ``MAX_ORDER_AMOUNT``.
                Stock-lock failures are never raised.
        """
        log = logger.bind(customer_id=dto.customer_id)
        log.info("order.creation_started", item_count=len(dto.items))

        # 1. Customer
        customer = self._customer_repo.get_by_id(dto.customer_id)
        if not customer:
            log.warning("order.customer_not_found")
            raise OrderManagementError.not_found("Customer", dto.customer_id)

        # 2. Items
        if not dto.items:
            log.warning("order.empty_items")
            raise OrderManagementError.invalid_order(EMPTY_ORDER_MESSAGE)

        # 3. Products
        self._product_validation.validate_products_exist(dto.product_ids)

        # 4. Prices
        repo_items: List[Dict[str, Any]] = []
        total = Decimal("0.00")
        for item in dto.items:
            price = self._price_source.price_for(item.product_id)
            total += price * item.quantity
            repo_items.append(
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity,
                    "price": price,
                }
            )
        if total > MAX_ORDER_AMOUNT:
            log.warning("order.total_out_of_range", total_amount=str(total))
            raise OrderManagementError.invalid_order(
                f"Order total {total} exceeds the maximum of {MAX_ORDER_AMOUNT}"
            )

        # 5. Persist (durability checkpoint)
        order = self._order_repo.create(
            {
                "customer_id": customer.pk,
                "status": OrderStatus.PENDING,
                "total_amount": total,
                "items": repo_items,
            }
        )
        log = log.bind(order_id=order.pk)
        log.info("order.created", total_amount=str(total))

        # 6. Stock lock
        try:
            self._stock_locking.lock_stock_for_order(dto.items)
        except Exception as exc:
            if isinstance(exc, OrderManagementError):
                log.error(
                    "order.stock_lock_failed",
                    error_id=exc.error_id,
                    error_kind=exc.kind.value,
                    detail=exc.message,
                )
            else:
                log.error("order.stock_lock_failed", error=repr(exc), exc_info=exc)
            order.status = OrderStatus.STOCK_LOCK_ERROR
            order = self._order_repo.save(order)

        return order

    @transaction.atomic
    def update_order(self, order_id: Any, dto: UpdateOrderDTO) -> Order:
        """Apply the supplied fields of ``dto`` to an existing order.

        Only ``status`` is written.  A non-empty ``items`` list is checked
        against the inventory but not persisted; ``shipping_address`` is
        accepted and ignored.

        Raises:
            OrderManagementError: ``NOT_FOUND`` for an unknown order,
                ``INVALID`` for unknown products.
        """
        order = self._get_or_raise(order_id)
        log = logger.bind(order_id=order.pk)

        if dto.status is not None:
            log.info("order.status_changing", old_status=order.status, new_status=dto.status)
            order.status = dto.status

        if dto.shipping_address is not None:
            log.info("order.shipping_address_ignored")

        if dto.items:
            self._product_validation.validate_products_exist(
                [item.product_id for item in dto.items]
            )
            log.info("order.items_validated", item_count=len(dto.items))

        order = self._order_repo.save(order)
        log.info("order.updated")
        return order

    def update_status(self, order_id: Any, new_status: str) -> Order:
        """Set the order status.  Transitions between statuses are not restricted."""
        return self.update_order(order_id, UpdateOrderDTO(status=new_status))

    def delete_order(self, order_id: Any) -> None:
        """Delete an order and, by cascade, its items, payments and shipments."""
        if not self._order_repo.exists(order_id):
            raise OrderManagementError.not_found("Order", order_id)
        self._order_repo.delete(order_id)
        logger.info("order.removed", order_id=order_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: Any) -> Order:
        return self._get_or_raise(order_id)

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_or_raise(self, order_id: Any) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderManagementError.not_found("Order", order_id)
        return order


def build_order_service() -> OrderService:
    """Wire ``OrderService`` with the Django repositories and inventory client."""
    from modules.customers.repositories.django_repository import CustomerDjangoRepository
    from modules.inventory.services import ProductValidationService, StockLockingService
    from modules.orders.repositories.django_repository import OrderDjangoRepository

    price_source_class = import_string(settings.ORDER_PRICE_SOURCE)
    return OrderService(
        order_repository=OrderDjangoRepository(),
        customer_repository=CustomerDjangoRepository(),
        product_validation_service=ProductValidationService(),
        stock_locking_service=StockLockingService(),
        price_source=price_source_class(),
    )
