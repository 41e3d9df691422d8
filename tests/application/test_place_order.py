"""Integration tests for order placement.

Uses in-memory fakes: no database, no broker.
"""

import logging
from decimal import Decimal

import pytest

from artisan_orders.application.dto import PlaceOrderParams
from artisan_orders.application.order_orchestrator import OrderOrchestrator
from artisan_orders.domain.exceptions import (
    CartNotOpenError,
    EmptyCartError,
    EntityNotFoundError,
    InsufficientStockError,
    MissingCustomerError,
    OrderNumberGenerationError,
    ValidationError,
)
from artisan_orders.domain.model.cart import CartStatus
from artisan_orders.domain.model.inventory import MovementKind
from artisan_orders.domain.model.order import ORDER_NUMBER_PATTERN
from artisan_orders.domain.model.value_objects import Money
from tests.fakes import ExplodingNotifier, FakeStore, FakeUnitOfWork, RecordingNotifier


def _setup(notifier=None, candidates=None):
    """Store with one customer, three products and an open cart #7."""
    store = FakeStore()
    store.add_customer(1, "Ana", "Quispe", "ana@example.com")
    store.add_product(1, "Clay pot", "50.00", stock=10)
    store.add_product(2, "Woven basket", "12.35", stock=5)
    store.add_product(3, "Alpaca scarf", "80.00", stock=1)
    store.add_cart(7, customer_id=1, lines=[(1, 2)])
    notifier = notifier or RecordingNotifier()
    orchestrator = OrderOrchestrator(lambda: FakeUnitOfWork(store, candidates), notifier)
    return orchestrator, store, notifier


def _assert_untouched(store: FakeStore, stock: dict[int, int], cart_id: int) -> None:
    for product_id, expected in stock.items():
        assert store.stock_of(product_id) == expected
    assert store.orders == {}
    assert store.order_lines == {}
    assert store.movements == []
    assert store.carts[cart_id].status == CartStatus.OPEN


class TestPlaceOrderHappyPath:

    def test_single_line_order(self):
        orchestrator, store, notifier = _setup()

        details = orchestrator.place_order(7)

        assert details.total == Money.of("100.00")
        assert details.subtotal == Money.of("100.00")
        assert details.status == "pending"
        assert details.payment_status == "pending"
        assert details.currency == "USD"
        assert details.customer.email == "ana@example.com"
        assert store.stock_of(1) == 8
        assert store.carts[7].status == CartStatus.CONVERTED
        assert notifier.published == [details]

    def test_order_number_format(self):
        orchestrator, _, _ = _setup()
        details = orchestrator.place_order(7)
        assert ORDER_NUMBER_PATTERN.match(details.order_number)

    def test_overrides_flow_into_header(self):
        orchestrator, _, _ = _setup()
        params = PlaceOrderParams(
            tax="16.00",
            shipping_cost="7.50",
            currency="PEN",
            status="processing",
            payment_status="paid",
            notes="gift wrap",
        )

        details = orchestrator.place_order(7, params)

        assert details.tax == Money.of("16.00")
        assert details.shipping_cost == Money.of("7.50")
        assert details.total == Money.of("123.50")
        assert details.currency == "PEN"
        assert details.status == "processing"
        assert details.payment_status == "paid"
        assert details.notes == "gift wrap"

    def test_monetary_identity_across_lines(self):
        orchestrator, store, _ = _setup()
        store.add_cart(8, customer_id=1, lines=[(1, 1), (2, 3)])

        details = orchestrator.place_order(8, PlaceOrderParams(tax="1.11", shipping_cost="2.22"))

        line_sum = sum((item.line_total.amount for item in details.items), Decimal("0"))
        assert details.subtotal.amount == line_sum == Decimal("87.05")
        assert details.total.amount == details.subtotal.amount + Decimal("3.33")
        for item in details.items:
            assert item.line_total.amount == (item.unit_price.amount * item.quantity).quantize(
                Decimal("0.01")
            )

    def test_lines_and_sale_movements_follow_cart_order(self):
        orchestrator, store, _ = _setup()
        store.add_cart(8, customer_id=1, lines=[(2, 1), (1, 3)])

        details = orchestrator.place_order(8)

        assert [item.product_id for item in details.items] == [2, 1]
        assert [(m.product_id, m.quantity_change) for m in store.movements] == [(2, -1), (1, -3)]
        assert all(m.kind == MovementKind.SALE for m in store.movements)
        assert all(m.reference == details.order_number for m in store.movements)


class TestPlaceOrderPriceLock:

    def test_purchase_price_survives_catalog_change(self):
        orchestrator, store, _ = _setup()
        details = orchestrator.place_order(7)

        store.products[1].price = Decimal("99.00")
        reread = orchestrator.get_order_details(details.order_id)

        assert reread.items[0].unit_price == Money.of("50.00")
        assert reread.items[0].current_price == Money.of("99.00")
        assert reread.total == Money.of("100.00")


class TestPlaceOrderValidation:

    def test_unknown_cart_rejected(self):
        orchestrator, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Cart #99 not found"):
            orchestrator.place_order(99)

    def test_empty_cart_rejected_before_any_mutation(self):
        orchestrator, store, notifier = _setup()
        store.add_cart(8, customer_id=1, lines=[])

        with pytest.raises(EmptyCartError):
            orchestrator.place_order(8)

        _assert_untouched(store, {1: 10, 2: 5, 3: 1}, cart_id=8)
        assert notifier.published == []

    def test_cart_without_customer_rejected(self):
        orchestrator, store, _ = _setup()
        store.add_cart(8, customer_id=None, lines=[(1, 1)])
        with pytest.raises(MissingCustomerError):
            orchestrator.place_order(8)
        assert store.stock_of(1) == 10

    def test_converted_cart_cannot_be_placed_twice(self):
        orchestrator, store, _ = _setup()
        orchestrator.place_order(7)

        with pytest.raises(CartNotOpenError):
            orchestrator.place_order(7)

        assert store.stock_of(1) == 8
        assert len(store.orders) == 1

    def test_negative_tax_rejected_and_rolled_back(self):
        orchestrator, store, _ = _setup()
        with pytest.raises(ValidationError, match="cannot be negative"):
            orchestrator.place_order(7, PlaceOrderParams(tax="-1"))
        _assert_untouched(store, {1: 10}, cart_id=7)

    @pytest.mark.parametrize("amount", ["Infinity", "1e30"])
    def test_unrepresentable_amounts_rejected_as_validation_errors(self, amount):
        orchestrator, store, _ = _setup()
        with pytest.raises(ValidationError):
            orchestrator.place_order(7, PlaceOrderParams(tax=amount))
        with pytest.raises(ValidationError):
            orchestrator.place_order(7, PlaceOrderParams(shipping_cost=amount))
        _assert_untouched(store, {1: 10}, cart_id=7)


class TestPlaceOrderAtomicity:

    @pytest.mark.parametrize("failing_position", [0, 1, 2])
    def test_failure_at_any_line_reserves_nothing(self, failing_position):
        orchestrator, store, _ = _setup()
        lines = [(1, 2), (2, 1)]
        lines.insert(failing_position, (3, 5))  # only 1 scarf in stock
        store.add_cart(8, customer_id=1, lines=lines)

        with pytest.raises(InsufficientStockError) as exc_info:
            orchestrator.place_order(8)

        assert exc_info.value.product_name == "Alpaca scarf"
        assert exc_info.value.available == 1
        assert exc_info.value.requested == 5
        _assert_untouched(store, {1: 10, 2: 5, 3: 1}, cart_id=8)

    def test_exhausted_order_numbers_roll_back_reservations(self):
        taken = "ORD-20260101000000-100"
        orchestrator, store, _ = _setup(candidates=[taken] * 40)
        store.add_cart(8, customer_id=1, lines=[(2, 1)])
        orchestrator.place_order(8)  # first order takes the only number

        with pytest.raises(OrderNumberGenerationError):
            orchestrator.place_order(7)

        assert store.stock_of(1) == 10
        assert store.carts[7].status == CartStatus.OPEN
        assert len(store.orders) == 1

    def test_original_error_is_reraised_unwrapped(self):
        orchestrator, store, _ = _setup()
        store.add_cart(8, customer_id=1, lines=[(3, 2)])
        with pytest.raises(InsufficientStockError):
            orchestrator.place_order(8)


class TestNotificationIsolation:

    def test_failing_broker_does_not_fail_placement(self, caplog):
        orchestrator, store, _ = _setup(notifier=ExplodingNotifier())

        with caplog.at_level(logging.ERROR):
            details = orchestrator.place_order(7, PlaceOrderParams())

        assert details.total == Money.of("100.00")
        assert store.stock_of(1) == 8
        assert len(store.orders) == 1
        assert "Notification for order" in caplog.text

    def test_nothing_published_when_placement_fails(self):
        orchestrator, store, notifier = _setup()
        store.add_cart(8, customer_id=1, lines=[(3, 2)])
        with pytest.raises(InsufficientStockError):
            orchestrator.place_order(8)
        assert notifier.published == []


class TestPlaceOrderParams:

    def test_from_mapping_defaults(self):
        params = PlaceOrderParams.from_mapping({})
        assert params.tax_amount == Money.zero()
        assert params.shipping_amount == Money.zero()
        assert params.currency == "USD"
        assert params.status == "pending"
        assert params.payment_status == "pending"
        assert params.notes is None

    def test_from_mapping_accepts_both_shipping_spellings(self):
        assert PlaceOrderParams.from_mapping({"shipping_cost": "4"}).shipping_amount == Money.of("4")
        assert PlaceOrderParams.from_mapping({"shippingCost": 6}).shipping_amount == Money.of("6")

    def test_from_mapping_accepts_camel_case_payment_status(self):
        assert PlaceOrderParams.from_mapping({"paymentStatus": "paid"}).payment_status == "paid"
        assert PlaceOrderParams.from_mapping({"payment_status": "paid"}).payment_status == "paid"

    def test_explicit_none_does_not_hide_the_other_spelling(self):
        params = PlaceOrderParams.from_mapping(
            {
                "shipping_cost": None,
                "shippingCost": "3.50",
                "payment_status": None,
                "paymentStatus": "paid",
            }
        )
        assert params.shipping_amount == Money.of("3.50")
        assert params.payment_status == "paid"
