"""Abstract unit of work: one connection, one transaction.

Entering the context begins the transaction and exposes the
transactional collaborators bound to it.  Leaving without ``commit()``
rolls everything back; exceptions propagate unchanged.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from artisan_orders.domain.repository.cart_repository import CartRepository
from artisan_orders.domain.repository.inventory_ledger import InventoryLedger
from artisan_orders.domain.repository.order_repository import OrderRepository


class UnitOfWork(ABC):

    carts: CartRepository
    inventory: InventoryLedger
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes.  A no-op after ``commit()``."""
