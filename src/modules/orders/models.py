"""Order aggregate: Order, OrderItem, Payment and Shipment.

- ``Order.customer`` uses PROTECT: a customer with orders cannot be removed.
- Items, payments and shipments are owned by their order and are removed
  with it (``on_delete=CASCADE``).
- ``OrderItem.price`` is the unit price captured at order creation.
- ``product_id`` references the inventory service; there is no local
  product table.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from modules.core.models import BaseModel
from modules.orders.constants import OrderStatus, PaymentStatus, ShipmentStatus


class Order(BaseModel):
    customer: models.ForeignKey = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="orders",
    )
    order_date: models.DateTimeField = models.DateTimeField(default=timezone.now)
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    total_amount: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    class Meta:
        db_table = "orders"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(fields=["order_date"], name="orders_order_date_idx"),
        ]

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.status})"


class OrderItem(BaseModel):
    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product_id: models.PositiveBigIntegerField = models.PositiveBigIntegerField()
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    class Meta:
        db_table = "order_items"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self) -> str:
        return f"product {self.product_id} x{self.quantity} @ {self.price}"


class Payment(BaseModel):
    """Payment recorded against an order; ``transaction_id`` is its business key."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="payments",
    )
    payment_date: models.DateTimeField = models.DateTimeField(default=timezone.now)
    amount: models.DecimalField = models.DecimalField(max_digits=10, decimal_places=2)
    payment_method: models.CharField = models.CharField(max_length=50, blank=True, default="")
    transaction_id: models.CharField = models.CharField(
        max_length=100, null=True, blank=True, db_index=True
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )

    class Meta:
        db_table = "payments"
        ordering = ["id"]

    def has_same_business_key(self, other: object) -> bool:
        if not isinstance(other, Payment):
            return False
        return self.transaction_id is not None and self.transaction_id == other.transaction_id

    def __str__(self) -> str:
        return f"Payment {self.transaction_id or self.pk} ({self.status})"


class Shipment(BaseModel):
    """Shipment of an order; ``tracking_number`` is its business key."""

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="shipments",
    )
    shipment_date: models.DateTimeField = models.DateTimeField(null=True, blank=True)
    carrier: models.CharField = models.CharField(max_length=100, blank=True, default="")
    tracking_number: models.CharField = models.CharField(
        max_length=100, null=True, blank=True, db_index=True
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=ShipmentStatus.choices,
        default=ShipmentStatus.PENDING,
    )

    class Meta:
        db_table = "shipments"
        ordering = ["id"]

    def has_same_business_key(self, other: object) -> bool:
        if not isinstance(other, Shipment):
            return False
        return self.tracking_number is not None and self.tracking_number == other.tracking_number

    def __str__(self) -> str:
        return f"Shipment {self.tracking_number or self.pk} ({self.status})"
