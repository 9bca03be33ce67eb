"""
Amount normalization tests
"""

from decimal import Decimal

import pytest
from ledgerbook.utils.normalization import normalize_amount, to_decimal


class TestNormalizeAmount:
    def test_trailing_five_rounds_up(self):
        """A trailing 5 past the first decimal always rounds up"""
        assert normalize_amount(12.35) == Decimal("12.4")
        assert normalize_amount(1.005) == Decimal("1.0")
        assert normalize_amount(0.05) == Decimal("0.1")
        assert normalize_amount(2.45) == Decimal("2.5")

    def test_nearest_tenth(self):
        """Plain round-to-nearest otherwise"""
        assert normalize_amount(12.34) == Decimal("12.3")
        assert normalize_amount(12.36) == Decimal("12.4")
        assert normalize_amount(7.96) == Decimal("8.0")

    def test_already_normalized(self):
        """One decimal place or fewer is left alone"""
        assert normalize_amount(12.3) == Decimal("12.3")
        assert normalize_amount(12.5) == Decimal("12.5")
        assert normalize_amount(125) == Decimal("125.0")
        assert normalize_amount("40") == Decimal("40.0")

    @pytest.mark.parametrize("raw", [12.35, 12.34, 0.05, 99.99, 125, "3.14159", Decimal("12.350")])
    def test_idempotent(self, raw):
        """Normalizing twice equals normalizing once"""
        once = normalize_amount(raw)
        assert normalize_amount(once) == once

    def test_trailing_zeros_ignored(self):
        """12.350 is treated like 12.35"""
        assert normalize_amount("12.350") == Decimal("12.4")
        assert normalize_amount(Decimal("12.3400")) == Decimal("12.3")

    def test_negative_keeps_sign(self):
        """Magnitude is normalized, sign preserved"""
        assert normalize_amount(-12.35) == Decimal("-12.4")
        assert normalize_amount(-12.34) == Decimal("-12.3")
        assert normalize_amount(-0.01) == Decimal("0.0")

    def test_rejects_non_numbers(self):
        """Non-finite and non-numeric input is an error"""
        for bad in ("abc", float("nan"), float("inf"), True):
            with pytest.raises(ValueError):
                normalize_amount(bad)

    def test_huge_amount_is_value_error(self):
        """Values beyond the decimal context fail as ValueError"""
        for huge in (1e30, "1e40", Decimal("-1E+29")):
            with pytest.raises(ValueError):
                normalize_amount(huge)


class TestToDecimal:
    def test_float_uses_shortest_text(self):
        """Floats keep their printed digits"""
        assert to_decimal(12.35) == Decimal("12.35")
        assert to_decimal(1e30) == Decimal("1E+30")

    def test_passthrough_and_strings(self):
        """Decimals pass through, strings are trimmed"""
        d = Decimal("4.25")
        assert to_decimal(d) is d
        assert to_decimal(" 7.5 ") == Decimal("7.5")
        assert to_decimal(3) == Decimal("3")

    def test_rejects_garbage(self):
        """Non-numeric text and booleans are errors"""
        for bad in ("12,5", "", False):
            with pytest.raises(ValueError):
                to_decimal(bad)
