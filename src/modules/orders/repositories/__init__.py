"""Order repositories package."""

from modules.orders.repositories.django_repository import (
    OrderDjangoRepository,
    OrderItemDjangoRepository,
    PaymentDjangoRepository,
    ShipmentDjangoRepository,
)
from modules.orders.repositories.interfaces import (
    IOrderItemRepository,
    IOrderRepository,
    IPaymentRepository,
    IShipmentRepository,
)

__all__ = [
    "IOrderItemRepository",
    "IOrderRepository",
    "IPaymentRepository",
    "IShipmentRepository",
    "OrderDjangoRepository",
    "OrderItemDjangoRepository",
    "PaymentDjangoRepository",
    "ShipmentDjangoRepository",
]
