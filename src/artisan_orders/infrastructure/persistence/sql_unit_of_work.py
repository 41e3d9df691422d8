"""SQLAlchemy unit of work: one Connection, one transaction."""

from __future__ import annotations

from sqlalchemy.engine import Connection, Engine, RootTransaction

from artisan_orders.domain.repository.unit_of_work import UnitOfWork
from artisan_orders.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from artisan_orders.infrastructure.persistence.sql_inventory_ledger import (
    SqlInventoryLedger,
)
from artisan_orders.infrastructure.persistence.sql_order_repository import (
    SqlOrderRepository,
)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._connection = self._engine.connect()
        try:
            self._transaction = self._connection.begin()
            self.carts = SqlCartRepository(self._connection)
            self.inventory = SqlInventoryLedger(self._connection)
            self.orders = SqlOrderRepository(self._connection)
        except BaseException:
            # __exit__ will not run, so the pooled connection goes back here.
            self._connection.close()
            self._connection = None
            self._transaction = None
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._connection.close()
            self._connection = None
            self._transaction = None

    def commit(self) -> None:
        self._transaction.commit()

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()
