"""CLI commands for database setup."""

from __future__ import annotations

import click

from artisan_orders.infrastructure.bootstrap import engine
from artisan_orders.infrastructure.persistence.schema import create_schema


@click.command("init")
@click.pass_obj
def db_init(settings) -> None:
    """Create all tables."""
    create_schema(engine(settings))
    click.echo("Database schema created.")
