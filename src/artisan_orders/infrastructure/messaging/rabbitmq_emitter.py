"""RabbitMQ implementation of NotificationEmitter.

Publishes ``order-created`` events as persistent JSON messages on a
durable topic exchange.  Nothing raised here ever reaches the caller:
broker outages, serialization problems and a missing ``pika`` install
are logged and dropped.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from artisan_orders.domain.exceptions import NotificationError
from artisan_orders.domain.model.order import OrderDetails
from artisan_orders.domain.service.notification_emitter import (
    NotificationEmitter,
    build_order_created_event,
)
from artisan_orders.infrastructure.config import BrokerConfig

logger = logging.getLogger(__name__)

PERSISTENT_DELIVERY_MODE = 2


def _load_pika():
    # pika is only needed once an event is actually published.
    import pika

    return pika


def open_blocking_connection(config: BrokerConfig) -> Any:
    """Open a short-lived blocking connection with bounded timeouts."""
    pika = _load_pika()
    parameters = pika.ConnectionParameters(
        host=config.host,
        port=config.port,
        virtual_host=config.vhost,
        credentials=pika.PlainCredentials(config.user, config.password),
        connection_attempts=1,
        socket_timeout=config.timeout_seconds,
        stack_timeout=config.timeout_seconds,
        blocked_connection_timeout=config.timeout_seconds,
    )
    return pika.BlockingConnection(parameters)


class RabbitMqNotificationEmitter(NotificationEmitter):

    def __init__(
        self,
        config: BrokerConfig,
        connection_factory: Callable[[BrokerConfig], Any] = open_blocking_connection,
    ) -> None:
        self._config = config
        self._connection_factory = connection_factory

    def publish_order_created(self, order: OrderDetails) -> None:
        if not self._config.enabled:
            logger.info(
                "Broker disabled, order-created event for %s not sent",
                order.order_number,
            )
            return
        try:
            self._publish(self._encode(order))
        except Exception:
            logger.exception(
                "Failed to publish order-created event for %s (non-blocking)",
                order.order_number,
            )
            return
        logger.info(
            "Published order-created event for %s to %s/%s",
            order.order_number,
            self._config.exchange,
            self._config.routing_key,
        )

    def _encode(self, order: OrderDetails) -> bytes:
        payload = build_order_created_event(order)
        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise NotificationError(
                f"Cannot serialize order-created event for {order.order_number}"
            ) from exc

    def _publish(self, body: bytes) -> None:
        pika = _load_pika()
        connection = self._connection_factory(self._config)
        try:
            channel = connection.channel()
            channel.exchange_declare(
                exchange=self._config.exchange,
                exchange_type="topic",
                passive=False,
                durable=True,
                auto_delete=False,
            )
            channel.basic_publish(
                exchange=self._config.exchange,
                routing_key=self._config.routing_key,
                body=body,
                properties=pika.BasicProperties(
                    content_type="application/json",
                    delivery_mode=PERSISTENT_DELIVERY_MODE,
                ),
            )
        finally:
            connection.close()
