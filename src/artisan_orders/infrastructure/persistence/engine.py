"""Engine construction.

SQLite has no ``SELECT ... FOR UPDATE``.  On SQLite every transaction
is therefore started with ``BEGIN IMMEDIATE``, which takes the database
write lock up front and serializes writers the way a row lock would.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from artisan_orders.infrastructure.config import DatabaseConfig


def build_engine(config: DatabaseConfig) -> Engine:
    engine = create_engine(config.url, echo=config.echo)
    if engine.dialect.name == "sqlite":
        _use_immediate_transactions(engine)
    return engine


def _use_immediate_transactions(engine: Engine) -> None:

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        # Hand transaction control to the "begin" hook below.
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN IMMEDIATE")
