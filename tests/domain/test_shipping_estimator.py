"""Unit tests for shipping cost estimation."""

from decimal import Decimal

from marketplace.domain.model.value_objects import Money
from marketplace.domain.service.shipping_estimator import (
    ShippingParcelLine,
    estimate,
    resolve_method,
)


def _line(weight: str = "1.0", price: str = "10.00", qty: int = 1) -> ShippingParcelLine:
    return ShippingParcelLine(weight_kg=Decimal(weight), unit_price=Money.of(price), quantity=qty)


class TestEstimate:

    def test_standard_rate(self):
        quote = estimate("standard", [_line("2.0", "10.00")])
        assert quote.cost == Money.of("10.99")  # 5.99 + 2.50 * 2
        assert quote.estimated_days == 7
        assert not quote.free_shipping

    def test_express_and_overnight(self):
        assert estimate("express", [_line("1.0")]).cost == Money.of("16.99")
        assert estimate("overnight", [_line("1.0")]).cost == Money.of("30.99")

    def test_weight_multiplies_by_quantity(self):
        quote = estimate("standard", [_line("0.5", "5.00", qty=4)])
        assert quote.total_weight_kg == Decimal("2.0")
        assert quote.subtotal == Money.of("20.00")

    def test_free_over_fifty(self):
        quote = estimate("overnight", [_line("3.0", "30.00", qty=2)])
        assert quote.free_shipping
        assert quote.cost.is_zero

    def test_exactly_fifty_is_not_free(self):
        assert not estimate("standard", [_line(price="50.00")]).free_shipping

    def test_unknown_method_falls_back_to_standard(self):
        assert resolve_method("teleport").id == "standard"
        assert resolve_method(None).id == "standard"
