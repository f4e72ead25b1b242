"""Django ORM implementations of the Order aggregate repositories.

Order creation persists the order and its items in one
``transaction.atomic()`` block.  Look-ups return ``None`` / ``False`` for
missing or malformed IDs; the service layer raises the not-found error.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.orders.constants import OrderStatus, PaymentStatus
from modules.orders.filters import OrderFilter
from modules.orders.models import Order, OrderItem, Payment, Shipment
from modules.orders.repositories.interfaces import (
    IOrderItemRepository,
    IOrderRepository,
    IPaymentRepository,
    IShipmentRepository,
)

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    def _queryset(self) -> models.QuerySet[Order]:
        return Order.objects.prefetch_related("items")

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Persist an order and its items; ``total_amount`` is stored as given."""
        items = data.get("items", [])
        order = Order(
            customer_id=data["customer_id"],
            status=data.get("status", OrderStatus.PENDING),
            total_amount=data["total_amount"],
        )
        order.save()

        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                    price=item["price"],
                )
                for item in items
            ]
        )

        logger.info("order.persisted", order_id=order.pk, item_count=len(items))
        return self.get_by_id(order.pk) or order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_by_id(self, id: int) -> Optional[Order]:
        """Order with prefetched items, or ``None`` for unknown or malformed IDs."""
        try:
            return self._queryset().filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders filtered by ``status``, ``customer``, ``start_date``, ``end_date``.

        Invalid filter values raise ``django.core.exceptions.ValidationError``
        with the per-field messages.
        """
        queryset = self._queryset()
        if filters:
            filterset = OrderFilter(data=filters, queryset=queryset)
            if not filterset.is_valid():
                raise ValidationError(
                    {
                        field: [error["message"] for error in errors]
                        for field, errors in filterset.errors.get_json_data().items()
                    }
                )
            queryset = filterset.qs
        return list(queryset)

    def exists(self, id: int) -> bool:
        try:
            return Order.objects.filter(id=id).exists()
        except (ValueError, TypeError, ValidationError):
            return False

    def find_by_customer(self, customer_id: int) -> List[Order]:
        return list(self._queryset().filter(customer_id=customer_id))

    def find_by_status(self, status: str) -> List[Order]:
        return list(self._queryset().filter(status=status))

    def find_by_order_date_between(self, start: datetime, end: datetime) -> List[Order]:
        return list(self._queryset().filter(order_date__range=(start, end)))

    def count_by_status(self, status: str) -> int:
        return Order.objects.filter(status=status).count()

    # ------------------------------------------------------------------
    # Save / Delete
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=entity.pk, status=entity.status)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete an order; items, payments and shipments cascade."""
        order = self.get_by_id(id)
        if not order:
            return False
        _, deleted = order.delete()
        logger.info("order.deleted", order_id=id, deleted=deleted)
        return True


class OrderItemDjangoRepository(IOrderItemRepository):
    def find_by_order(self, order_id: int) -> List[OrderItem]:
        return list(OrderItem.objects.filter(order_id=order_id))

    def find_by_product(self, product_id: int) -> List[OrderItem]:
        return list(OrderItem.objects.filter(product_id=product_id))

    def count_by_product(self, product_id: int) -> int:
        return OrderItem.objects.filter(product_id=product_id).count()

    def total_quantity_for_product(self, product_id: int) -> int:
        result = OrderItem.objects.filter(product_id=product_id).aggregate(
            total=models.Sum("quantity")
        )
        return result["total"] or 0


class PaymentDjangoRepository(IPaymentRepository):
    def find_by_order(self, order_id: int) -> List[Payment]:
        return list(Payment.objects.filter(order_id=order_id))

    def get_by_transaction_id(self, transaction_id: str) -> Optional[Payment]:
        return Payment.objects.filter(transaction_id=transaction_id).first()

    def completed_total_for_order(self, order_id: int) -> Decimal:
        result = Payment.objects.filter(
            order_id=order_id, status=PaymentStatus.COMPLETED
        ).aggregate(total=models.Sum("amount"))
        return result["total"] or Decimal("0.00")


class ShipmentDjangoRepository(IShipmentRepository):
    def find_by_order(self, order_id: int) -> List[Shipment]:
        return list(Shipment.objects.filter(order_id=order_id))

    def get_by_tracking_number(self, tracking_number: str) -> Optional[Shipment]:
        return Shipment.objects.filter(tracking_number=tracking_number).first()
