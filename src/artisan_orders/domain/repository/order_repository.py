"""Abstract repository for orders."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from artisan_orders.domain.exceptions import OrderNumberGenerationError
from artisan_orders.domain.model.order import (
    OrderDetails,
    OrderHeader,
    OrderLine,
    ReversalTarget,
    format_order_number,
)

MAX_ORDER_NUMBER_ATTEMPTS = 20


class OrderRepository(ABC):

    @abstractmethod
    def order_number_exists(self, order_number: str) -> bool:
        """Return True if an order already uses *order_number*."""

    @abstractmethod
    def create_order(self, header: OrderHeader) -> int:
        """Insert the order row and return its identity."""

    @abstractmethod
    def add_line(self, order_id: int, line: OrderLine) -> None:
        """Insert one order line, copying prices verbatim."""

    @abstractmethod
    def get_order_details(self, order_id: int) -> OrderDetails:
        """Return order + customer + lines, or raise EntityNotFoundError."""

    @abstractmethod
    def lock_for_reversal(self, order_id: int) -> ReversalTarget:
        """Read and lock the order row, or raise EntityNotFoundError."""

    @abstractmethod
    def list_lines(self, order_id: int) -> list[OrderLine]:
        """Return the persisted lines of an order."""

    @abstractmethod
    def delete_order(self, order_id: int) -> None:
        """Delete the order together with its lines."""

    # --- Order numbers --------------------------------------------------------

    def next_order_number(self) -> str:
        """Return an order number not yet present in the store.

        Gives up after MAX_ORDER_NUMBER_ATTEMPTS collisions.
        """
        for _ in range(MAX_ORDER_NUMBER_ATTEMPTS):
            candidate = self._order_number_candidate()
            if not self.order_number_exists(candidate):
                return candidate
        raise OrderNumberGenerationError(
            f"Could not generate a unique order number after "
            f"{MAX_ORDER_NUMBER_ATTEMPTS} attempts"
        )

    def _order_number_candidate(self) -> str:
        return format_order_number(datetime.now(timezone.utc), random.randint(100, 999))
