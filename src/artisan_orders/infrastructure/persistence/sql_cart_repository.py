"""SQLAlchemy-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.engine import Connection

from artisan_orders.domain.exceptions import EntityNotFoundError
from artisan_orders.domain.model.cart import CartLine, CartSnapshot, CartStatus
from artisan_orders.domain.model.value_objects import Money, Quantity
from artisan_orders.domain.repository.cart_repository import CartRepository
from artisan_orders.infrastructure.persistence.schema import cart_items, carts, products


class SqlCartRepository(CartRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def get_cart(self, cart_id: int) -> CartSnapshot:
        row = self._conn.execute(
            select(carts.c.cart_id, carts.c.customer_id, carts.c.status)
            .where(carts.c.cart_id == cart_id)
            .with_for_update()
        ).first()
        if row is None:
            raise EntityNotFoundError(f"Cart #{cart_id} not found")
        return CartSnapshot(
            cart_id=row.cart_id,
            customer_id=row.customer_id,
            status=CartStatus(row.status),
        )

    def get_cart_lines(self, cart_id: int) -> list[CartLine]:
        rows = self._conn.execute(
            select(
                cart_items.c.product_id,
                cart_items.c.quantity,
                products.c.name,
                products.c.price,
            )
            .join(products, products.c.product_id == cart_items.c.product_id)
            .where(cart_items.c.cart_id == cart_id)
            .order_by(cart_items.c.cart_item_id)
        ).all()
        return [
            CartLine(
                product_id=row.product_id,
                quantity=Quantity(row.quantity),
                name=row.name,
                unit_price=Money(Decimal(row.price)),
            )
            for row in rows
        ]

    def close_cart(self, cart_id: int) -> None:
        self._set_status(cart_id, CartStatus.CONVERTED)

    def reopen_cart(self, cart_id: int) -> None:
        self._set_status(cart_id, CartStatus.OPEN)

    def _set_status(self, cart_id: int, status: CartStatus) -> None:
        self._conn.execute(
            update(carts).where(carts.c.cart_id == cart_id).values(status=status.value)
        )
