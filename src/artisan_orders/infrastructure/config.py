"""Runtime configuration.

Settings are plain frozen dataclasses built once from the environment
and passed explicitly to whatever needs them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DatabaseConfig:
    url: str = "sqlite:///data/artisan_orders.db"
    echo: bool = False


@dataclass(frozen=True)
class BrokerConfig:
    """RabbitMQ connection and routing for order events."""

    enabled: bool = True
    host: str = "localhost"
    port: int = 5672
    user: str = "admin"
    password: str = field(default="admin", repr=False)
    vhost: str = "/"
    exchange: str = "orders.events"
    routing_key: str = "order.created"
    timeout_seconds: float = 5.0


@dataclass(frozen=True)
class Settings:
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    broker: BrokerConfig = field(default_factory=BrokerConfig)
    log_level: str = "WARNING"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        db_defaults = DatabaseConfig()
        broker_defaults = BrokerConfig()
        return Settings(
            database=DatabaseConfig(
                url=env.get("DATABASE_URL", db_defaults.url),
                echo=_as_bool(env.get("DATABASE_ECHO"), db_defaults.echo),
            ),
            broker=BrokerConfig(
                enabled=_as_bool(env.get("RABBITMQ_ENABLED"), broker_defaults.enabled),
                host=env.get("RABBITMQ_HOST", broker_defaults.host),
                port=int(env.get("RABBITMQ_PORT", broker_defaults.port)),
                user=env.get("RABBITMQ_USER", broker_defaults.user),
                password=env.get("RABBITMQ_PASS", broker_defaults.password),
                vhost=env.get("RABBITMQ_VHOST", broker_defaults.vhost),
                exchange=env.get("RABBITMQ_EXCHANGE_ORDERS", broker_defaults.exchange),
                routing_key=env.get(
                    "RABBITMQ_RK_ORDER_CREATED", broker_defaults.routing_key
                ),
                timeout_seconds=float(
                    env.get("RABBITMQ_TIMEOUT", broker_defaults.timeout_seconds)
                ),
            ),
            log_level=env.get("ARTISAN_LOG_LEVEL", "WARNING").upper(),
        )


def _as_bool(raw: str | None, default: bool) -> bool:
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES
