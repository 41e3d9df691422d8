"""CLI commands for order placement and reversal."""

from __future__ import annotations

import click

from artisan_orders.application.dto import PlaceOrderParams
from artisan_orders.domain.exceptions import DomainException
from artisan_orders.domain.model.order import OrderDetails
from artisan_orders.infrastructure.bootstrap import engine, order_orchestrator
from artisan_orders.infrastructure.cli.errors import to_click_exception


def _display_order(details: OrderDetails) -> None:
    """Shared formatting for displaying an order."""
    customer = details.customer
    name = " ".join(p for p in (customer.first_name, customer.last_name) if p)
    click.echo(
        f"Order {details.order_number} (#{details.order_id})  "
        f"status={details.status}  payment={details.payment_status}"
    )
    click.echo(f"Customer: {name or '-'} <{customer.email or '-'}>")
    if details.placed_at is not None:
        click.echo(f"Placed:   {details.placed_at:%Y-%m-%d %H:%M}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Now':>10} {'Total':>10}")
    click.echo(f"  {'-'*58}")
    for item in details.items:
        current = str(item.current_price) if item.current_price is not None else "-"
        click.echo(
            f"  {(item.name or '?'):<20} {item.quantity:>5} "
            f"{str(item.unit_price):>10} {current:>10} {str(item.line_total):>10}"
        )
    click.echo(f"  {'-'*58}")
    click.echo(f"  {'Subtotal':<27} {str(details.subtotal):>31}")
    click.echo(f"  {'Tax':<27} {str(details.tax):>31}")
    click.echo(f"  {'Shipping':<27} {str(details.shipping_cost):>31}")
    click.echo(f"  {'Order Total (' + details.currency + ')':<27} {str(details.total):>31}")


@click.command("place")
@click.option("--cart", "cart_id", required=True, type=int, help="Cart to check out.")
@click.option("--tax", default="0", help="Tax amount (e.g. 12.50).")
@click.option("--shipping", "shipping_cost", default="0", help="Shipping cost.")
@click.option("--currency", default="USD", help="Currency label.")
@click.option("--status", default="pending", help="Initial order status.")
@click.option("--payment-status", default="pending", help="Initial payment status.")
@click.option("--notes", default=None, help="Free-text notes.")
@click.pass_obj
def order_place(
    settings,
    cart_id: int,
    tax: str,
    shipping_cost: str,
    currency: str,
    status: str,
    payment_status: str,
    notes: str | None,
) -> None:
    """Convert an open cart into an order."""
    params = PlaceOrderParams(
        tax=tax,
        shipping_cost=shipping_cost,
        currency=currency,
        status=status,
        payment_status=payment_status,
        notes=notes,
    )
    orchestrator = order_orchestrator(settings, engine(settings))

    try:
        details = orchestrator.place_order(cart_id, params)
    except DomainException as exc:
        raise to_click_exception(exc)

    _display_order(details)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(settings, order_id: int) -> None:
    """Cancel an order: restock its items and reopen its cart."""
    orchestrator = order_orchestrator(settings, engine(settings))

    try:
        orchestrator.cancel_order(order_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Order #{order_id} cancelled, stock restored.")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(settings, order_id: int) -> None:
    """Show details of an existing order."""
    orchestrator = order_orchestrator(settings, engine(settings))

    try:
        details = orchestrator.get_order_details(order_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    _display_order(details)
