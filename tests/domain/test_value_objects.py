"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from marketplace.domain.exceptions import ValidationError
from marketplace.domain.model.value_objects import Address, Money, Percentage, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_goes_through_str(self):
        assert Money.of(0.1).amount == Decimal("0.1")

    def test_of_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_arithmetic(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")
        assert Money.of("10") - Money.of("3") == Money.of("7")
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "USD") + Money(Decimal("1"), "EUR")

    def test_to_plain_has_two_decimals(self):
        assert Money.of("15").to_plain() == "15.00"
        assert str(Money.of("15")) == "$15.00"

    def test_rounded_half_up(self):
        assert Money.of("10.005").rounded().amount == Decimal("10.01")
        assert Money.of("10.004").rounded().amount == Decimal("10.00")
        assert Money.of("0.001").rounded().is_zero


class TestMoneyDiscount:

    def test_no_offer_keeps_price(self):
        assert Money.of("19.99").discounted(Percentage.of(0)) == Money.of("19.99")

    def test_ten_percent_off(self):
        assert Money.of("10.00").discounted(Percentage.of(10)) == Money.of("9.00")

    def test_rounds_half_up_to_the_cent(self):
        # 9.99 * 0.85 = 8.4915 -> 8.49 ; 0.05 * 0.5 = 0.025 -> 0.03
        assert Money.of("9.99").discounted(Percentage.of(15)).amount == Decimal("8.49")
        assert Money.of("0.05").discounted(Percentage.of(50)).amount == Decimal("0.03")

    def test_full_discount_is_free(self):
        assert Money.of("12.34").discounted(Percentage.of(100)).is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    @pytest.mark.parametrize("value", [1.5, "2", True])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(value)


# ── Percentage ───────────────────────────────────────────────────────────────


class TestPercentage:

    def test_bounds_inclusive(self):
        assert Percentage.of(0).value == 0
        assert Percentage.of(100).value == 100

    @pytest.mark.parametrize("value", [-1, "100.01"])
    def test_out_of_range_rejected(self, value):
        with pytest.raises(ValidationError, match="between 0 and 100"):
            Percentage.of(value)


# ── Address ──────────────────────────────────────────────────────────────────


class TestAddress:

    def test_missing_field_rejected(self):
        with pytest.raises(ValidationError, match="All address fields are required"):
            Address(street="1 Main St", city="", state="CA", zip_code="90001", country="US")

    def test_phone_is_optional(self):
        address = Address("1 Main St", "LA", "CA", "90001", "US")
        assert address.phone is None

    def test_dict_form(self):
        address = Address("1 Main St", "LA", "CA", "90001", "US", phone="555")
        assert Address.from_dict(address.to_dict()) == address
