"""Order model: header, lines and the fully joined read view.

An order is an immutable, priced snapshot of a cart.  ``OrderHeader`` and
``OrderLine`` are what the orchestrator writes; ``OrderDetails`` is what
the repository reads back after commit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime

from artisan_orders.domain.model.cart import CartLine
from artisan_orders.domain.model.value_objects import Money, Quantity

ORDER_NUMBER_PATTERN = re.compile(r"^ORD-\d{14}-\d{3}$")

DEFAULT_ORDER_STATUS = "pending"
DEFAULT_PAYMENT_STATUS = "pending"
DEFAULT_CURRENCY = "USD"


def format_order_number(moment: datetime, suffix: int) -> str:
    """Build ``ORD-<YYYYmmddHHMMSS>-<3 digits>``."""
    return f"ORD-{moment:%Y%m%d%H%M%S}-{suffix:03d}"


@dataclass(frozen=True)
class OrderLine:
    """A purchased line with the price locked at purchase time."""

    product_id: int
    quantity: Quantity
    unit_price: Money
    line_total: Money

    @staticmethod
    def from_cart_line(line: CartLine) -> OrderLine:
        return OrderLine(
            product_id=line.product_id,
            quantity=line.quantity,
            unit_price=line.unit_price,
            line_total=line.line_total,
        )


@dataclass(frozen=True)
class OrderHeader:
    """Every derived field of a new order, computed before it is written.

    Use ``OrderHeader.build()`` so that ``total`` is computed exactly once.
    """

    customer_id: int
    cart_id: int | None
    order_number: str
    subtotal: Money
    tax: Money
    shipping_cost: Money
    total: Money
    status: str = DEFAULT_ORDER_STATUS
    payment_status: str = DEFAULT_PAYMENT_STATUS
    currency: str = DEFAULT_CURRENCY
    notes: str | None = None

    @staticmethod
    def build(
        customer_id: int,
        cart_id: int | None,
        order_number: str,
        subtotal: Money,
        tax: Money,
        shipping_cost: Money,
        status: str = DEFAULT_ORDER_STATUS,
        payment_status: str = DEFAULT_PAYMENT_STATUS,
        currency: str = DEFAULT_CURRENCY,
        notes: str | None = None,
    ) -> OrderHeader:
        return OrderHeader(
            customer_id=customer_id,
            cart_id=cart_id,
            order_number=order_number,
            subtotal=subtotal.rounded(),
            tax=tax.rounded(),
            shipping_cost=shipping_cost.rounded(),
            total=(subtotal + tax + shipping_cost).rounded(),
            status=status,
            payment_status=payment_status,
            currency=currency,
            notes=notes,
        )


@dataclass(frozen=True)
class ReversalTarget:
    """The locked order row a cancellation works from."""

    order_id: int
    cart_id: int | None
    order_number: str


# ---------------------------------------------------------------------------
# Read view
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CustomerSummary:
    customer_id: int | None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class OrderLineDetails:
    """A persisted line joined with its product.

    ``unit_price`` is the frozen purchase price; ``current_price`` is the
    catalog price right now and may differ.
    """

    order_item_id: int
    product_id: int
    quantity: int
    unit_price: Money
    line_total: Money
    sku: str | None = None
    name: str | None = None
    current_price: Money | None = None


@dataclass(frozen=True)
class OrderDetails:
    order_id: int
    order_number: str
    customer: CustomerSummary
    cart_id: int | None
    status: str
    payment_status: str
    subtotal: Money
    tax: Money
    shipping_cost: Money
    total: Money
    currency: str
    notes: str | None = None
    placed_at: datetime | None = None
    updated_at: datetime | None = None
    items: list[OrderLineDetails] = field(default_factory=list)
