"""Order aggregate repository interfaces.

``IOrderRepository`` covers the aggregate root; the item, payment and
shipment interfaces expose the read-side queries over the children.
The service layer depends on these contracts only.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem, Payment, Shipment


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items atomically.

        ``data`` must include ``customer_id``, ``status``, ``total_amount``
        (computed by the service) and ``items`` (list of dicts with
        ``product_id``, ``quantity``, ``price``).
        """

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders; ``filters`` uses the ``OrderFilter`` parameters."""

    @abstractmethod
    def find_by_customer(self, customer_id: int) -> List[Order]:
        """Orders placed by ``customer_id``."""

    @abstractmethod
    def find_by_status(self, status: str) -> List[Order]:
        """Orders currently in ``status``."""

    @abstractmethod
    def find_by_order_date_between(self, start: datetime, end: datetime) -> List[Order]:
        """Orders whose order date falls in ``[start, end]``."""

    @abstractmethod
    def count_by_status(self, status: str) -> int:
        """Number of orders in ``status``."""


class IOrderItemRepository(ABC):
    @abstractmethod
    def find_by_order(self, order_id: int) -> Sequence[OrderItem]: ...

    @abstractmethod
    def find_by_product(self, product_id: int) -> Sequence[OrderItem]: ...

    @abstractmethod
    def count_by_product(self, product_id: int) -> int: ...

    @abstractmethod
    def total_quantity_for_product(self, product_id: int) -> int: ...


class IPaymentRepository(ABC):
    @abstractmethod
    def find_by_order(self, order_id: int) -> Sequence[Payment]: ...

    @abstractmethod
    def get_by_transaction_id(self, transaction_id: str) -> Optional[Payment]: ...

    @abstractmethod
    def completed_total_for_order(self, order_id: int) -> Decimal: ...


class IShipmentRepository(ABC):
    @abstractmethod
    def find_by_order(self, order_id: int) -> Sequence[Shipment]: ...

    @abstractmethod
    def get_by_tracking_number(self, tracking_number: str) -> Optional[Shipment]: ...
