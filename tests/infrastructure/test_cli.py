"""CLI tests through click's CliRunner against a SQLite file."""

import pytest
from click.testing import CliRunner

from artisan_orders.infrastructure.bootstrap import engine as build_engine
from artisan_orders.infrastructure.cli.main import cli
from artisan_orders.infrastructure.config import BrokerConfig, DatabaseConfig, Settings
from tests.sql_fixtures import seed_cart, seed_customer, seed_product, stock_of


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'cli' / 'orders.db'}"),
        broker=BrokerConfig(enabled=False),
    )


@pytest.fixture
def seeded(settings):
    result = CliRunner().invoke(cli, ["db", "init"], obj=settings)
    assert result.exit_code == 0, result.output
    engine = build_engine(settings)
    seed_customer(engine)
    seed_product(engine, 1, "Clay pot", "50.00", stock=10)
    seed_cart(engine, 7, customer_id=1, lines=[(1, 2)])
    yield engine
    engine.dispose()


class TestOrderCommands:

    def test_place_show_cancel(self, settings, seeded):
        runner = CliRunner()

        placed = runner.invoke(
            cli, ["order", "place", "--cart", "7", "--tax", "5"], obj=settings
        )
        assert placed.exit_code == 0, placed.output
        assert "Clay pot" in placed.output
        assert "105.00" in placed.output
        assert stock_of(seeded, 1) == 8

        shown = runner.invoke(cli, ["order", "show", "--id", "1"], obj=settings)
        assert shown.exit_code == 0, shown.output
        assert "ana@example.com" in shown.output

        cancelled = runner.invoke(cli, ["order", "cancel", "--id", "1"], obj=settings)
        assert cancelled.exit_code == 0, cancelled.output
        assert "Order #1 cancelled" in cancelled.output
        assert stock_of(seeded, 1) == 10

    def test_business_error_reports_status(self, settings, seeded):
        runner = CliRunner()
        runner.invoke(cli, ["order", "place", "--cart", "7"], obj=settings)

        again = runner.invoke(cli, ["order", "place", "--cart", "7"], obj=settings)

        assert again.exit_code == 1
        assert "[409]" in again.output
        assert "not open" in again.output

    @pytest.mark.parametrize("tax", ["Infinity", "1e30"])
    def test_unrepresentable_tax_reports_400(self, settings, seeded, tax):
        result = CliRunner().invoke(
            cli, ["order", "place", "--cart", "7", "--tax", tax], obj=settings
        )
        assert result.exit_code == 1
        assert "[400]" in result.output
        assert stock_of(seeded, 1) == 10

    def test_missing_order_reports_404(self, settings, seeded):
        result = CliRunner().invoke(cli, ["order", "show", "--id", "99"], obj=settings)
        assert result.exit_code == 1
        assert "[404] Order #99 not found" in result.output


class TestInventoryCommands:

    def test_show_stock(self, settings, seeded):
        result = CliRunner().invoke(cli, ["inventory", "show", "--product", "1"], obj=settings)
        assert result.exit_code == 0, result.output
        assert "10" in result.output

    def test_unknown_product(self, settings, seeded):
        result = CliRunner().invoke(cli, ["inventory", "show", "--product", "9"], obj=settings)
        assert result.exit_code == 1
        assert "[404]" in result.output
