"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, ShippingAddress


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "VND"

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        m = Money.of(10)
        assert m.amount == Decimal("10")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        result = Money.of("10") + Money.of("5.50")
        assert result == Money.of("15.50")

    def test_multiplication_by_int(self):
        result = Money.of("7.50") * 3
        assert result == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "VND") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("350000")) == "350,000.00 VND"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-3)

    @pytest.mark.parametrize("raw", ["2", 1.5, None, True])
    def test_non_integer_rejected(self, raw):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(raw)


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_defaults_applied(self):
        addr = ShippingAddress.of("12 Le Loi", "Hanoi")
        assert addr.postal_code == ""
        assert addr.country == "Vietnam"

    def test_explicit_values_kept(self):
        addr = ShippingAddress.of(" 1 Main St ", "Paris", "75001", "France")
        assert addr.address == "1 Main St"
        assert addr.postal_code == "75001"
        assert addr.country == "France"

    def test_blank_country_falls_back_to_default(self):
        assert ShippingAddress.of("a", "b", None, "  ").country == "Vietnam"

    @pytest.mark.parametrize(
        "address, city",
        [("", "Hanoi"), ("12 Le Loi", ""), (None, "Hanoi"), ("12 Le Loi", "   ")],
    )
    def test_address_and_city_required(self, address, city):
        with pytest.raises(ValidationError, match="address and city"):
            ShippingAddress.of(address, city)
