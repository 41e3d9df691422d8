import click

from artisan_orders.domain.exceptions import DomainException, status_for


def to_click_exception(exc: DomainException) -> click.ClickException:
    """Render a domain error with the HTTP status it maps to."""
    return click.ClickException(f"[{status_for(exc)}] {exc}")
