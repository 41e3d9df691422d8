"""Abstract cart snapshot reader.

Implementations read and flip cart status inside the caller's
transaction; they never begin or end one themselves.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from artisan_orders.domain.exceptions import (
    CartNotOpenError,
    EmptyCartError,
    MissingCustomerError,
)
from artisan_orders.domain.model.cart import CartLine, CartSnapshot


class CartRepository(ABC):

    @abstractmethod
    def get_cart(self, cart_id: int) -> CartSnapshot:
        """Return the cart's status and owner, locking the cart row.

        The lock lasts until the caller's transaction ends, so two
        checkouts of the same cart serialize and the second sees the
        status the first left behind.  Raises EntityNotFoundError if the
        cart does not exist.
        """

    @abstractmethod
    def get_cart_lines(self, cart_id: int) -> list[CartLine]:
        """Return the cart lines in insertion order, priced at current catalog prices."""

    @abstractmethod
    def close_cart(self, cart_id: int) -> None:
        """Mark the cart as converted."""

    @abstractmethod
    def reopen_cart(self, cart_id: int) -> None:
        """Mark the cart as open again."""

    def validate_for_checkout(self, cart: CartSnapshot, lines: list[CartLine]) -> None:
        """Pure checks that must hold before a cart can become an order."""
        if not cart.is_open:
            raise CartNotOpenError(
                f"Cart #{cart.cart_id} is not open (status is {cart.status.value})"
            )
        if cart.customer_id is None:
            raise MissingCustomerError(f"Cart #{cart.cart_id} has no customer assigned")
        if not lines:
            raise EmptyCartError(f"Cart #{cart.cart_id} is empty")
