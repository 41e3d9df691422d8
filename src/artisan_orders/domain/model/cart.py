"""Cart snapshot: the read-only view of a cart taken at checkout time.

Prices on a cart line are the *current* catalog prices; they become
frozen only once copied into an order line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from artisan_orders.domain.model.value_objects import Money, Quantity


class CartStatus(Enum):
    OPEN = "open"
    CONVERTED = "converted"
    ABANDONED = "abandoned"


@dataclass(frozen=True)
class CartSnapshot:
    cart_id: int
    customer_id: int | None
    status: CartStatus

    @property
    def is_open(self) -> bool:
        return self.status == CartStatus.OPEN


@dataclass(frozen=True)
class CartLine:
    """One product/quantity pair priced at the current catalog price."""

    product_id: int
    quantity: Quantity
    name: str
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return (self.unit_price * self.quantity.value).rounded()
