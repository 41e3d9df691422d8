"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError

from artisan_orders.domain.exceptions import EntityNotFoundError, OrderNumberGenerationError
from artisan_orders.domain.model.order import (
    CustomerSummary,
    OrderDetails,
    OrderHeader,
    OrderLine,
    OrderLineDetails,
    ReversalTarget,
)
from artisan_orders.domain.model.value_objects import Money, Quantity
from artisan_orders.domain.repository.order_repository import OrderRepository
from artisan_orders.infrastructure.persistence.schema import (
    customers,
    order_items,
    orders,
    products,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def order_number_exists(self, order_number: str) -> bool:
        found = self._conn.execute(
            select(orders.c.order_id).where(orders.c.order_number == order_number).limit(1)
        ).first()
        return found is not None

    def create_order(self, header: OrderHeader) -> int:
        # Savepoint: the transaction must stay usable for the lookup below.
        try:
            with self._conn.begin_nested():
                result = self._conn.execute(
                    insert(orders).values(
                        customer_id=header.customer_id,
                        cart_id=header.cart_id,
                        order_number=header.order_number,
                        status=header.status,
                        payment_status=header.payment_status,
                        subtotal=header.subtotal.amount,
                        tax=header.tax.amount,
                        shipping_cost=header.shipping_cost.amount,
                        total=header.total.amount,
                        currency=header.currency,
                        notes=header.notes,
                    )
                )
        except IntegrityError as exc:
            if self.order_number_exists(header.order_number):
                raise OrderNumberGenerationError(
                    f"Order number {header.order_number} was taken concurrently"
                ) from exc
            raise
        return int(result.inserted_primary_key[0])

    def add_line(self, order_id: int, line: OrderLine) -> None:
        self._conn.execute(
            insert(order_items).values(
                order_id=order_id,
                product_id=line.product_id,
                quantity=line.quantity.value,
                unit_price=line.unit_price.amount,
                line_total=line.line_total.amount,
            )
        )

    def get_order_details(self, order_id: int) -> OrderDetails:
        row = self._conn.execute(
            select(
                orders,
                customers.c.first_name,
                customers.c.last_name,
                customers.c.email,
            )
            .select_from(
                orders.outerjoin(customers, customers.c.customer_id == orders.c.customer_id)
            )
            .where(orders.c.order_id == order_id)
        ).first()
        if row is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")

        item_rows = self._conn.execute(
            select(
                order_items.c.order_item_id,
                order_items.c.product_id,
                order_items.c.quantity,
                order_items.c.unit_price,
                order_items.c.line_total,
                products.c.sku,
                products.c.name,
                products.c.price.label("current_price"),
            )
            .select_from(
                order_items.outerjoin(
                    products, products.c.product_id == order_items.c.product_id
                )
            )
            .where(order_items.c.order_id == order_id)
            .order_by(order_items.c.order_item_id)
        ).all()

        return OrderDetails(
            order_id=row.order_id,
            order_number=row.order_number,
            customer=CustomerSummary(
                customer_id=row.customer_id,
                first_name=row.first_name,
                last_name=row.last_name,
                email=row.email,
            ),
            cart_id=row.cart_id,
            status=row.status,
            payment_status=row.payment_status,
            subtotal=_money(row.subtotal),
            tax=_money(row.tax),
            shipping_cost=_money(row.shipping_cost),
            total=_money(row.total),
            currency=row.currency,
            notes=row.notes,
            placed_at=row.placed_at,
            updated_at=row.updated_at,
            items=[
                OrderLineDetails(
                    order_item_id=item.order_item_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=_money(item.unit_price),
                    line_total=_money(item.line_total),
                    sku=item.sku,
                    name=item.name,
                    current_price=(
                        _money(item.current_price)
                        if item.current_price is not None
                        else None
                    ),
                )
                for item in item_rows
            ],
        )

    def lock_for_reversal(self, order_id: int) -> ReversalTarget:
        row = self._conn.execute(
            select(orders.c.order_id, orders.c.cart_id, orders.c.order_number)
            .where(orders.c.order_id == order_id)
            .with_for_update()
        ).first()
        if row is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return ReversalTarget(
            order_id=row.order_id,
            cart_id=row.cart_id,
            order_number=row.order_number,
        )

    def list_lines(self, order_id: int) -> list[OrderLine]:
        rows = self._conn.execute(
            select(
                order_items.c.product_id,
                order_items.c.quantity,
                order_items.c.unit_price,
                order_items.c.line_total,
            )
            .where(order_items.c.order_id == order_id)
            .order_by(order_items.c.order_item_id)
        ).all()
        return [
            OrderLine(
                product_id=r.product_id,
                quantity=Quantity(r.quantity),
                unit_price=_money(r.unit_price),
                line_total=_money(r.line_total),
            )
            for r in rows
        ]

    def delete_order(self, order_id: int) -> None:
        # Lines go first so engines without FK cascade behave the same.
        self._conn.execute(delete(order_items).where(order_items.c.order_id == order_id))
        self._conn.execute(delete(orders).where(orders.c.order_id == order_id))


def _money(value) -> Money:
    return Money(Decimal(value))
