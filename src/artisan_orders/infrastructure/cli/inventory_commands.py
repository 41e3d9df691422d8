"""CLI commands for inventory inspection."""

from __future__ import annotations

import click

from artisan_orders.domain.exceptions import DomainException
from artisan_orders.infrastructure.bootstrap import engine, show_stock_handler
from artisan_orders.infrastructure.cli.errors import to_click_exception


@click.command("show")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def inventory_show(settings, product_id: int) -> None:
    """Show the current stock of a product."""
    handler = show_stock_handler(engine(settings))

    try:
        line = handler.handle(product_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"{'Product':<10} {'Stock':>8}")
    click.echo("-" * 19)
    click.echo(f"{line.product_id:<10} {line.stock:>8}")
