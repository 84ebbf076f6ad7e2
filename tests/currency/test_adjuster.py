"""Tests for multiplier cost adjustment."""

from decimal import Decimal
from fractions import Fraction

import pytest

from coinpurse.currency.adjuster import adjust
from coinpurse.errors import InvalidArgument


class TestAdjust:
    """Test adjust()."""

    def test_zero_multiplier_overrides_base(self):
        """Test a zero multiplier always yields zero."""
        assert adjust(10000, 0) == 0
        assert adjust(10000, 0.0) == 0
        assert adjust(0, 0) == 0

    def test_zero_base(self):
        """Test a zero base stays zero for any multiplier."""
        assert adjust(0, 2.0) == 0

    def test_plain_multiplication(self):
        """Test exact products."""
        assert adjust(1000, 1.0) == 1000
        assert adjust(1000, 0.5) == 500
        assert adjust(150, 2) == 300

    def test_rounds_half_away_from_zero(self):
        """Test halves always round up for non-negative products."""
        assert adjust(5, 0.5) == 3
        assert adjust(15, 0.5) == 8
        assert adjust(3, 0.5) == 2
        assert adjust(5, 0.3) == 2

    def test_rounds_to_nearest(self):
        """Test non-half products round to the nearest integer."""
        assert adjust(7, 0.3) == 2
        assert adjust(9, 0.3) == 3
        assert adjust(10, Fraction(1, 3)) == 3
        assert adjust(20, Fraction(1, 3)) == 7

    def test_float_multiplier_read_as_decimal(self):
        """Test binary float noise does not push a half below the boundary."""
        # 0.15 * 10 is 1.4999999999999998 in binary floating point
        assert adjust(10, 0.15) == 2

    def test_decimal_multiplier(self):
        """Test Decimal multipliers."""
        assert adjust(100, Decimal("1.25")) == 125

    @pytest.mark.parametrize("base_value,multiplier", [(-1, 1.0), (10, -0.5)])
    def test_negative_arguments(self, base_value, multiplier):
        """Test negative base values and multipliers are rejected."""
        with pytest.raises(InvalidArgument):
            adjust(base_value, multiplier)

    def test_negative_multiplier_argument_name(self):
        """Test the offending argument is reported."""
        with pytest.raises(InvalidArgument) as exc_info:
            adjust(10, -1)
        assert exc_info.value.argument == "multiplier"
        assert exc_info.value.value == -1

    @pytest.mark.parametrize("multiplier", ["0.5", None, True, float("nan"), float("inf")])
    def test_non_numeric_multiplier(self, multiplier):
        """Test non-numbers and non-finite values are rejected."""
        with pytest.raises(InvalidArgument):
            adjust(10, multiplier)
