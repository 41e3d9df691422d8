"""Relational schema (SQLAlchemy Core).

Money columns are ``Numeric(12, 2)`` and round-trip as Decimal.
``inventory_movements`` is append-only.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


customers = Table(
    "customers",
    metadata,
    Column("customer_id", Integer, primary_key=True),
    Column("first_name", String(100)),
    Column("last_name", String(100)),
    Column("email", String(255), unique=True),
)

products = Table(
    "products",
    metadata,
    Column("product_id", Integer, primary_key=True),
    Column("sku", String(64), unique=True),
    Column("name", String(200), nullable=False),
    Column("price", Numeric(12, 2), nullable=False),
    Column("stock", Integer, nullable=False, default=0),
    CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
)

carts = Table(
    "carts",
    metadata,
    Column("cart_id", Integer, primary_key=True),
    Column("customer_id", Integer, ForeignKey("customers.customer_id"), nullable=True),
    Column("status", String(20), nullable=False, default="open"),
    Column("created_at", DateTime(timezone=True), default=_utcnow),
    Column("updated_at", DateTime(timezone=True), default=_utcnow, onupdate=_utcnow),
)

cart_items = Table(
    "cart_items",
    metadata,
    Column("cart_item_id", Integer, primary_key=True),
    Column(
        "cart_id",
        Integer,
        ForeignKey("carts.cart_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    CheckConstraint("quantity > 0", name="ck_cart_items_quantity_positive"),
)

orders = Table(
    "orders",
    metadata,
    Column("order_id", Integer, primary_key=True),
    Column("customer_id", Integer, ForeignKey("customers.customer_id"), nullable=False),
    Column(
        "cart_id",
        Integer,
        ForeignKey("carts.cart_id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column("order_number", String(32), nullable=False, unique=True),
    Column("status", String(30), nullable=False, default="pending"),
    Column("payment_status", String(30), nullable=False, default="pending"),
    Column("subtotal", Numeric(12, 2), nullable=False),
    Column("tax", Numeric(12, 2), nullable=False),
    Column("shipping_cost", Numeric(12, 2), nullable=False),
    Column("total", Numeric(12, 2), nullable=False),
    Column("currency", String(3), nullable=False, default="USD"),
    Column("notes", Text),
    Column("placed_at", DateTime(timezone=True), default=_utcnow),
    Column("updated_at", DateTime(timezone=True), default=_utcnow, onupdate=_utcnow),
)

order_items = Table(
    "order_items",
    metadata,
    Column("order_item_id", Integer, primary_key=True),
    Column(
        "order_id",
        Integer,
        ForeignKey("orders.order_id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity", Integer, nullable=False),
    Column("unit_price", Numeric(12, 2), nullable=False),
    Column("line_total", Numeric(12, 2), nullable=False),
)

inventory_movements = Table(
    "inventory_movements",
    metadata,
    Column("movement_id", Integer, primary_key=True),
    Column("product_id", Integer, ForeignKey("products.product_id"), nullable=False),
    Column("quantity_change", Integer, nullable=False),
    Column("movement_type", String(20), nullable=False),
    Column("reference", String(64)),
    Column("note", String(255)),
    Column("created_at", DateTime(timezone=True), default=_utcnow),
)


def create_schema(engine: Engine) -> None:
    metadata.create_all(engine)
