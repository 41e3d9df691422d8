"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from sqlalchemy.engine import Engine

from artisan_orders.application.order_orchestrator import OrderOrchestrator
from artisan_orders.application.show_stock import ShowStockHandler
from artisan_orders.infrastructure.config import Settings
from artisan_orders.infrastructure.messaging.rabbitmq_emitter import (
    RabbitMqNotificationEmitter,
)
from artisan_orders.infrastructure.persistence.engine import build_engine
from artisan_orders.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


def engine(settings: Settings) -> Engine:
    _ensure_sqlite_directory(settings.database.url)
    return build_engine(settings.database)


def unit_of_work_factory(db_engine: Engine) -> Callable[[], SqlUnitOfWork]:
    return lambda: SqlUnitOfWork(db_engine)


def order_orchestrator(settings: Settings, db_engine: Engine) -> OrderOrchestrator:
    return OrderOrchestrator(
        uow_factory=unit_of_work_factory(db_engine),
        notifier=RabbitMqNotificationEmitter(settings.broker),
    )


def show_stock_handler(db_engine: Engine) -> ShowStockHandler:
    return ShowStockHandler(unit_of_work_factory(db_engine))


def _ensure_sqlite_directory(url: str) -> None:
    # sqlite:///relative/path.db or sqlite:////absolute/path.db
    prefix = "sqlite:///"
    if url.startswith(prefix) and url != "sqlite:///:memory:":
        Path(url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)
