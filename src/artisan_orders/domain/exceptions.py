"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so callers (the CLI, an HTTP layer) can catch them uniformly.  Each class
carries the HTTP status an outer layer should answer with.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    http_status = 400


class ValidationError(DomainException):
    """An input value violated a value-object invariant."""


class EntityNotFoundError(DomainException):
    """A referenced cart, product or order does not exist."""

    http_status = 404


class InvalidStateError(DomainException):
    """The cart cannot be checked out in its current state."""

    http_status = 409


class CartNotOpenError(InvalidStateError):
    pass


class MissingCustomerError(InvalidStateError):
    pass


class EmptyCartError(InvalidStateError):
    pass


class InsufficientStockError(DomainException):
    """Requested quantity exceeds the stock available for a product."""

    http_status = 409

    def __init__(
        self,
        product_id: int,
        product_name: str,
        available: int,
        requested: int,
    ) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(current stock: {available}, requested: {requested})"
        )
        self.product_id = product_id
        self.product_name = product_name
        self.available = available
        self.requested = requested


class OrderNumberGenerationError(DomainException):
    """No collision-free order number could be produced."""

    http_status = 500


class NotificationError(DomainException):
    """Publishing an integration event failed.

    Raised and caught inside notification emitters only.
    """

    http_status = 500


def status_for(exc: BaseException) -> int:
    """Return the HTTP status an outer layer should map *exc* to."""
    if isinstance(exc, DomainException):
        return exc.http_status
    return 500
