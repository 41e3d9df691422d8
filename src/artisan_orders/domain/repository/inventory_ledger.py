"""Abstract inventory ledger.

The ledger owns per-product stock and the movement log.  Every
operation runs inside the caller's transaction and touches a single
product row.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from artisan_orders.domain.model.inventory import MovementKind


class InventoryLedger(ABC):

    @abstractmethod
    def check_and_reserve(self, product_id: int, quantity: int, label: str) -> None:
        """Lock the product row, verify stock and decrement it.

        The row lock is held until the enclosing transaction ends.
        Raises EntityNotFoundError for unknown products and
        InsufficientStockError when ``stock < quantity``.
        """

    @abstractmethod
    def log_movement(
        self,
        product_id: int,
        quantity: int,
        kind: MovementKind,
        reference: str,
        note: str | None = None,
    ) -> None:
        """Append one movement; the stored delta is ``kind.signed(quantity)``."""

    @abstractmethod
    def restock(self, product_id: int, quantity: int) -> None:
        """Unconditionally add *quantity* to the product's stock."""

    @abstractmethod
    def get_stock(self, product_id: int) -> int:
        """Return current stock, or raise EntityNotFoundError."""
