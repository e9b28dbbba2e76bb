"""
Tests for sparecore.units
"""

from decimal import Decimal

import pytest

from sparecore.constants import MAX_MOJOS
from sparecore.units import coin_to_mojo, is_numeric, mojo_to_coin, mojo_to_coin_string


@pytest.mark.parametrize("value", ["1", "1.5", ".5", "2.", "-2", "+3", " 0.25 "])
def test_is_numeric_accepts(value):
    assert is_numeric(value)


@pytest.mark.parametrize("value", ["", " ", "abc", "1e5", "1,5", "1.2.3", "0x10", None])
def test_is_numeric_rejects(value):
    assert not is_numeric(value)


class TestCoinToMojo:
    def test_whole_and_fractional(self):
        assert coin_to_mojo("1") == 1_000_000_000_000
        assert coin_to_mojo("1.5") == 1_500_000_000_000
        assert coin_to_mojo("0.1") == 100_000_000_000
        assert coin_to_mojo("0.000000000007") == 7

    def test_truncates_below_one_mojo(self):
        assert coin_to_mojo("0.0000000000079") == 7
        assert coin_to_mojo("1.000000000000999999999999999999") == 1_000_000_000_000
        assert coin_to_mojo("18446744.0737095516159999") == MAX_MOJOS

    def test_rejects_beyond_uint64(self):
        with pytest.raises(ValueError, match="out of range"):
            coin_to_mojo("18446744.073709551616")
        with pytest.raises(ValueError, match="out of range"):
            coin_to_mojo("12345678901234567")

    def test_rejects_non_finite(self):
        with pytest.raises(ValueError, match="Not a numeric amount"):
            coin_to_mojo(Decimal("NaN"))

    def test_accepts_numbers(self):
        assert coin_to_mojo(2) == 2_000_000_000_000
        assert coin_to_mojo(Decimal("0.5")) == 500_000_000_000

    def test_rejects_non_numeric(self):
        with pytest.raises(ValueError, match="Not a numeric amount"):
            coin_to_mojo("abc")


class TestMojoToCoin:
    def test_string_rendering(self):
        assert mojo_to_coin_string(7) == "0.000000000007"
        assert mojo_to_coin_string(1_500_000_000_000) == "1.5"
        assert mojo_to_coin_string(2_000_000_000_000) == "2"
        assert mojo_to_coin_string(0) == "0"

    def test_decimal(self):
        assert mojo_to_coin(250_000_000_000) == Decimal("0.25")
