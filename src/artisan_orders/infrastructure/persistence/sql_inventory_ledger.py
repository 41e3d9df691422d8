"""SQLAlchemy-backed implementation of InventoryLedger."""

from __future__ import annotations

import logging

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Connection

from artisan_orders.domain.exceptions import EntityNotFoundError, InsufficientStockError
from artisan_orders.domain.model.inventory import InventoryMovement, MovementKind
from artisan_orders.domain.repository.inventory_ledger import InventoryLedger
from artisan_orders.infrastructure.persistence.schema import inventory_movements, products

logger = logging.getLogger(__name__)


class SqlInventoryLedger(InventoryLedger):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def check_and_reserve(self, product_id: int, quantity: int, label: str) -> None:
        stock = self._conn.execute(
            select(products.c.stock)
            .where(products.c.product_id == product_id)
            .with_for_update()
        ).scalar_one_or_none()
        if stock is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        if stock < quantity:
            raise InsufficientStockError(
                product_id=product_id,
                product_name=label,
                available=stock,
                requested=quantity,
            )
        self._conn.execute(
            update(products)
            .where(products.c.product_id == product_id)
            .values(stock=products.c.stock - quantity)
        )
        logger.debug("Product #%s stock %d -> %d", product_id, stock, stock - quantity)

    def log_movement(
        self,
        product_id: int,
        quantity: int,
        kind: MovementKind,
        reference: str,
        note: str | None = None,
    ) -> None:
        movement = InventoryMovement.record(product_id, quantity, kind, reference, note)
        self._conn.execute(
            insert(inventory_movements).values(
                product_id=movement.product_id,
                quantity_change=movement.quantity_change,
                movement_type=movement.kind.value,
                reference=movement.reference,
                note=movement.note,
                created_at=movement.created_at,
            )
        )

    def restock(self, product_id: int, quantity: int) -> None:
        self._conn.execute(
            update(products)
            .where(products.c.product_id == product_id)
            .values(stock=products.c.stock + quantity)
        )

    def get_stock(self, product_id: int) -> int:
        stock = self._conn.execute(
            select(products.c.stock).where(products.c.product_id == product_id)
        ).scalar_one_or_none()
        if stock is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return stock
