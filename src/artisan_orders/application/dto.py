"""Data Transfer Objects: plain containers that cross layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from artisan_orders.domain.model.order import (
    DEFAULT_CURRENCY,
    DEFAULT_ORDER_STATUS,
    DEFAULT_PAYMENT_STATUS,
)
from artisan_orders.domain.model.value_objects import Money


@dataclass(frozen=True)
class PlaceOrderParams:
    """Input: caller-supplied overrides for a new order.

    Monetary overrides default to zero; labels default to the values a
    fresh order starts with.
    """

    tax: str | int | float | Decimal = 0
    shipping_cost: str | int | float | Decimal = 0
    currency: str = DEFAULT_CURRENCY
    status: str = DEFAULT_ORDER_STATUS
    payment_status: str = DEFAULT_PAYMENT_STATUS
    notes: str | None = None

    @property
    def tax_amount(self) -> Money:
        return Money.of(self.tax)

    @property
    def shipping_amount(self) -> Money:
        return Money.of(self.shipping_cost)

    @staticmethod
    def from_mapping(raw: Mapping[str, Any]) -> PlaceOrderParams:
        """Build params from a request body, ignoring unknown keys.

        Every field is accepted in snake_case and camelCase; a key whose
        value is None counts as absent.
        """
        return PlaceOrderParams(
            tax=_pick(raw, "tax") or 0,
            shipping_cost=_pick(raw, "shipping_cost", "shippingCost") or 0,
            currency=_pick(raw, "currency") or DEFAULT_CURRENCY,
            status=_pick(raw, "status") or DEFAULT_ORDER_STATUS,
            payment_status=(
                _pick(raw, "payment_status", "paymentStatus") or DEFAULT_PAYMENT_STATUS
            ),
            notes=_pick(raw, "notes"),
        )


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None:
            return value
    return None


@dataclass(frozen=True)
class StockLineDTO:
    """Output: the stock of one product."""

    product_id: int
    stock: int
