"""Order domain constants.

Order status is a fixed string enumeration.  ``STOCK_LOCK_ERROR`` is an
operational status set automatically when stock locking fails after the
order was persisted; it cannot be requested through the API.  Transitions
between the requestable statuses are not restricted.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    ALLOCATED = "Allocated", "Allocated"
    PROCESSING = "Processing", "Processing"
    SHIPPED = "Shipped", "Shipped"
    DELIVERED = "Delivered", "Delivered"
    CANCELLED = "Cancelled", "Cancelled"
    STOCK_LOCK_ERROR = "Stock Lock Error", "Stock Lock Error"


REQUESTABLE_STATUSES: tuple[str, ...] = (
    OrderStatus.PENDING,
    OrderStatus.ALLOCATED,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
)

EMPTY_ORDER_MESSAGE = "Order with empty item list is not a valid order to create"

# Bounded by the money columns: DecimalField(max_digits=10, decimal_places=2).
MAX_ORDER_AMOUNT = Decimal("99999999.99")
MAX_ITEM_QUANTITY = 100_000


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    COMPLETED = "Completed", "Completed"
    FAILED = "Failed", "Failed"
    REFUNDED = "Refunded", "Refunded"


class ShipmentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    SHIPPED = "Shipped", "Shipped"
    IN_TRANSIT = "In Transit", "In Transit"
    DELIVERED = "Delivered", "Delivered"
