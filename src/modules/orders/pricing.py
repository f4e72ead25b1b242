"""Unit price sources for order lines.

``OrderService`` receives a ``PriceSource``; the configured class is read
from ``settings.ORDER_PRICE_SOURCE``.  ``SimulatedPriceSource`` stands in
until a priced catalog is available; tests inject ``FixedPriceSource``.
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional

CENT = Decimal("0.01")


class PriceSource(ABC):
    @abstractmethod
    def price_for(self, product_id: int) -> Decimal:
        """Return the unit price for ``product_id`` (positive, two decimals)."""


class SimulatedPriceSource(PriceSource):
    """Random unit price between 1.00 and 1000.00."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def price_for(self, product_id: int) -> Decimal:
        value = Decimal(str(self._rng.uniform(1.0, 1000.0)))
        return max(value.quantize(CENT, rounding=ROUND_HALF_UP), Decimal("1.00"))


class FixedPriceSource(PriceSource):
    """Prices from a mapping, with ``default`` for unlisted products."""

    def __init__(
        self,
        prices: Optional[Mapping[int, Decimal]] = None,
        default: Decimal = Decimal("10.00"),
    ) -> None:
        self._prices = dict(prices or {})
        self._default = default

    def price_for(self, product_id: int) -> Decimal:
        return Decimal(self._prices.get(product_id, self._default)).quantize(CENT)
