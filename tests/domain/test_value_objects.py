"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from stockcore.domain.exceptions import ValidationError
from stockcore.domain.model.value_objects import Money, Quantity, format_quantity, to_decimal


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_omr(self):
        m = Money(Decimal("10.500"))
        assert m.amount == Decimal("10.500")
        assert m.currency == "OMR"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_multiply_by_decimal_quantity(self):
        assert Money.of("0.250") * Decimal("850") == Money.of("212.5")

    def test_different_currencies_cannot_combine(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("1") + Money.of("1", currency="USD")

    def test_display_uses_three_decimals(self):
        assert str(Money.of("3.5")) == "OMR 3.500"

    def test_invalid_string_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_zero_allowed(self):
        assert Quantity(Decimal("0")).value == Decimal("0")

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Quantity(Decimal("-1"))

    def test_infinity_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Quantity(Decimal("Infinity"))


class TestHelpers:

    def test_to_decimal_rejects_bool(self):
        with pytest.raises(ValidationError):
            to_decimal(True)

    def test_to_decimal_avoids_float_artefacts(self):
        assert to_decimal(0.1) == Decimal("0.1")

    def test_format_whole_quantity(self):
        assert format_quantity(Decimal("850.000")) == "850"

    def test_format_fractional_quantity(self):
        assert format_quantity(Decimal("12.50")) == "12.5"
