"""Application service: order placement and reversal.

The orchestrator is the only place allowed to span carts, stock,
movements and orders in one unit of work.  It sequences the cart
reader, the inventory ledger and the order repository inside a single
transaction, and publishes the order-created event only after commit.

Placement protocol:
  1. Read and validate the cart.
  2. Reserve stock for every line (row-locked), accumulating the subtotal.
  3. Price the order and persist the header.
  4. Persist each line and its sale movement.
  5. Close the cart and commit.
  6. Re-read the order and publish it, best effort.

Any error in 1-5 rolls the whole transaction back and is re-raised as is.
"""

from __future__ import annotations

import logging
from typing import Callable

from artisan_orders.application.dto import PlaceOrderParams
from artisan_orders.domain.model.inventory import (
    REVERSAL_NOTE,
    SALE_NOTE,
    MovementKind,
)
from artisan_orders.domain.model.order import OrderDetails, OrderHeader, OrderLine
from artisan_orders.domain.model.value_objects import Money
from artisan_orders.domain.repository.unit_of_work import UnitOfWork
from artisan_orders.domain.service.notification_emitter import NotificationEmitter

logger = logging.getLogger(__name__)


class OrderOrchestrator:

    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        notifier: NotificationEmitter,
    ) -> None:
        self._uow_factory = uow_factory
        self._notifier = notifier

    # --- Placement ------------------------------------------------------------

    def place_order(
        self,
        cart_id: int,
        params: PlaceOrderParams | None = None,
    ) -> OrderDetails:
        """Convert an open cart into an order, all or nothing."""
        params = params or PlaceOrderParams()

        try:
            with self._uow_factory() as uow:
                order_id = self._place(uow, cart_id, params)
                uow.commit()
        except Exception as exc:
            logger.warning("Placement of cart #%s rolled back: %s", cart_id, exc)
            raise

        with self._uow_factory() as uow:
            details = uow.orders.get_order_details(order_id)

        logger.info(
            "Order %s (#%s) placed from cart #%s, total %s %s",
            details.order_number,
            details.order_id,
            cart_id,
            details.total,
            details.currency,
        )
        self._notify(details)
        return details

    def _place(self, uow: UnitOfWork, cart_id: int, params: PlaceOrderParams) -> int:
        cart = uow.carts.get_cart(cart_id)
        lines = uow.carts.get_cart_lines(cart_id)
        uow.carts.validate_for_checkout(cart, lines)

        subtotal = Money.zero()
        for line in lines:
            logger.debug(
                "Reserving %s x product #%s for cart #%s",
                line.quantity,
                line.product_id,
                cart_id,
            )
            uow.inventory.check_and_reserve(line.product_id, line.quantity.value, line.name)
            subtotal = subtotal + line.line_total

        header = OrderHeader.build(
            customer_id=cart.customer_id,  # type: ignore[arg-type]
            cart_id=cart_id,
            order_number=uow.orders.next_order_number(),
            subtotal=subtotal,
            tax=params.tax_amount,
            shipping_cost=params.shipping_amount,
            status=params.status,
            payment_status=params.payment_status,
            currency=params.currency,
            notes=params.notes,
        )
        order_id = uow.orders.create_order(header)

        # Same lines, same order as the reservation loop.
        for line in lines:
            uow.orders.add_line(order_id, OrderLine.from_cart_line(line))
            uow.inventory.log_movement(
                line.product_id,
                line.quantity.value,
                MovementKind.SALE,
                header.order_number,
                SALE_NOTE,
            )

        uow.carts.close_cart(cart_id)
        return order_id

    def _notify(self, details: OrderDetails) -> None:
        try:
            self._notifier.publish_order_created(details)
        except Exception:
            logger.exception(
                "Notification for order %s failed; the order stands",
                details.order_number,
            )

    # --- Reversal -------------------------------------------------------------

    def cancel_order(self, order_id: int) -> None:
        """Delete an order, restore its stock and reopen its cart, all or nothing."""
        try:
            with self._uow_factory() as uow:
                target = uow.orders.lock_for_reversal(order_id)
                lines = uow.orders.list_lines(order_id)

                for line in lines:
                    uow.inventory.restock(line.product_id, line.quantity.value)
                    uow.inventory.log_movement(
                        line.product_id,
                        line.quantity.value,
                        MovementKind.ADJUSTMENT,
                        target.order_number,
                        REVERSAL_NOTE,
                    )

                uow.orders.delete_order(order_id)
                if target.cart_id is not None:
                    uow.carts.reopen_cart(target.cart_id)
                uow.commit()
        except Exception as exc:
            logger.warning("Reversal of order #%s rolled back: %s", order_id, exc)
            raise

        logger.info(
            "Order %s (#%s) cancelled, %d line(s) restocked",
            target.order_number,
            order_id,
            len(lines),
        )

    # --- Queries --------------------------------------------------------------

    def get_order_details(self, order_id: int) -> OrderDetails:
        with self._uow_factory() as uow:
            return uow.orders.get_order_details(order_id)
