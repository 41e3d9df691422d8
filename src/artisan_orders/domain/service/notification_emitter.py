"""Domain service: order-created integration event.

``build_order_created_event`` turns a persisted order into the JSON-ready
payload consumed downstream.  Every field is read null-safely because
upstream rows (customer, product) may be partially populated.

``NotificationEmitter`` is the port the orchestrator publishes through.
Implementations must swallow and log their own failures: a sale that
has been committed is never undone by a notification problem.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from artisan_orders.domain.model.order import OrderDetails
from artisan_orders.domain.model.value_objects import Money

ORDER_CREATED_EVENT = "order-created"


class NotificationEmitter(ABC):

    @abstractmethod
    def publish_order_created(self, order: OrderDetails) -> None:
        """Hand an order-created event to the broker.  Must not raise."""


def build_order_created_event(
    order: OrderDetails,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    moment = generated_at or datetime.now(timezone.utc)
    customer = order.customer
    return {
        "event_type": ORDER_CREATED_EVENT,
        "generated_at": moment.isoformat(),
        "order_id": order.order_id,
        "order_number": order.order_number,
        "total": _amount(order.total),
        "subtotal": _amount(order.subtotal),
        "tax": _amount(order.tax),
        "shipping": _amount(order.shipping_cost),
        "currency": order.currency,
        "status": order.status,
        "payment_status": order.payment_status,
        "customer_email": customer.email if customer else None,
        "customer": {
            "id": customer.customer_id if customer else None,
            "first_name": customer.first_name if customer else None,
            "last_name": customer.last_name if customer else None,
            "email": customer.email if customer else None,
        },
        "items": [
            {
                "product_id": item.product_id,
                "sku": item.sku,
                "name": item.name,
                "quantity": item.quantity,
                "unit_price": _amount(item.unit_price),
                "line_total": _amount(item.line_total),
            }
            for item in order.items or []
        ],
    }


def _amount(money: Money | None) -> float | None:
    if money is None:
        return None
    return float(money.amount)
