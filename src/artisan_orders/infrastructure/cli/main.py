import logging

import click

from artisan_orders.infrastructure.cli.db_commands import db_init
from artisan_orders.infrastructure.cli.inventory_commands import inventory_show
from artisan_orders.infrastructure.cli.order_commands import (
    order_cancel,
    order_place,
    order_show,
)
from artisan_orders.infrastructure.config import Settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Artisan Orders: order placement and reversal"""
    settings = ctx.obj if isinstance(ctx.obj, Settings) else Settings.from_env()
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = settings


@cli.group()
def order() -> None:
    """Place, cancel and show orders."""


@cli.group()
def inventory() -> None:
    """Inspect stock."""


@cli.group()
def db() -> None:
    """Manage the database."""


# Register subcommands
order.add_command(order_place)
order.add_command(order_cancel)
order.add_command(order_show)
inventory.add_command(inventory_show)
db.add_command(db_init)
