"""Tests for the rational numeric layer."""

import math
from fractions import Fraction

import pytest

from mathcat import rational
from mathcat.errors import DivisionByZeroError, EvalArithmeticError


class TestConversions:
    """Tests for parsing and coercion."""

    def test_parse_decimal_exact(self):
        """Decimal literals are parsed exactly, not through float."""
        assert rational.parse_decimal("0.1") == Fraction(1, 10)
        assert rational.parse_decimal("1.5e-3") == Fraction(3, 2000)
        assert rational.parse_decimal(".5") == Fraction(1, 2)

    def test_parse_integer(self):
        """Prefixed literals in their base."""
        assert rational.parse_integer("0xA", 16) == 10
        assert rational.parse_integer("0b110011", 2) == 51
        assert rational.parse_integer("0o666", 8) == 438

    def test_from_float(self):
        """Floats are lifted to the rational they represent."""
        assert rational.from_float(0.5) == Fraction(1, 2)
        assert rational.from_float(0.1) == Fraction(0.1)

    def test_from_float_rejects_non_finite(self):
        """NaN and infinity are arithmetic errors."""
        with pytest.raises(EvalArithmeticError):
            rational.from_float(math.nan)
        with pytest.raises(EvalArithmeticError):
            rational.from_float(math.inf)

    def test_to_integer_floors(self):
        """Integer coercion rounds toward negative infinity."""
        assert rational.to_integer(Fraction(7, 2)) == 3
        assert rational.to_integer(Fraction(-7, 2)) == -4

    def test_is_integral(self):
        """Integral means denominator 1."""
        assert rational.is_integral(Fraction(4, 2))
        assert not rational.is_integral(Fraction(5, 2))

    def test_booleans(self):
        """Canonical true and false."""
        assert rational.from_bool(True) == rational.RAT_TRUE == 1
        assert rational.from_bool(False) == rational.RAT_FALSE == 0


class TestDerivedOperations:
    """Tests for floor, ceil, mod, gcd, factorial, power."""

    def test_floor_ceil(self):
        """Floor and ceil of positive and negative values."""
        assert rational.floor(Fraction(5, 2)) == 2
        assert rational.ceil(Fraction(5, 2)) == 3
        assert rational.floor(Fraction(-5, 2)) == -3
        assert rational.ceil(Fraction(-5, 2)) == -2
        assert rational.ceil(Fraction(3)) == 3

    def test_mod_sign_of_divisor(self):
        """Modulo follows the sign of the divisor."""
        assert rational.mod(Fraction(7), Fraction(3)) == 1
        assert rational.mod(Fraction(-7), Fraction(3)) == 2
        assert rational.mod(Fraction(7), Fraction(-3)) == -2
        assert rational.mod(Fraction(7, 2), Fraction(1)) == Fraction(1, 2)

    def test_mod_by_zero(self):
        """Modulo by zero is an error."""
        with pytest.raises(DivisionByZeroError):
            rational.mod(Fraction(1), Fraction(0))

    def test_divide_by_zero(self):
        """Division by zero is an error."""
        with pytest.raises(DivisionByZeroError):
            rational.divide(Fraction(1), Fraction(0))

    def test_gcd_floors(self):
        """GCD works on the floored operands."""
        assert rational.gcd(Fraction(12), Fraction(18)) == 6
        assert rational.gcd(Fraction(25, 2), Fraction(18)) == 6

    def test_factorial(self):
        """Factorial of floor(n); 1 for n < 1."""
        assert rational.factorial(Fraction(5)) == 120
        assert rational.factorial(Fraction(11, 2)) == 120
        assert rational.factorial(Fraction(0)) == 1
        assert rational.factorial(Fraction(-3)) == 1
        assert rational.factorial(Fraction(25)) == math.factorial(25)

    def test_power_exact_for_integers(self):
        """Integral operands give exact big results."""
        assert rational.power(Fraction(2), Fraction(100)) == 2 ** 100
        assert rational.power(Fraction(2), Fraction(-2)) == Fraction(1, 4)

    def test_power_zero_negative(self):
        """Zero to a negative power is a division by zero."""
        with pytest.raises(DivisionByZeroError):
            rational.power(Fraction(0), Fraction(-1))

    def test_power_approximate_for_fractions(self):
        """Non-integral operands go through float."""
        assert rational.power(Fraction(4), Fraction(1, 2)) == 2
        assert rational.power(Fraction(1, 2), Fraction(2)) == Fraction(1, 4)

    def test_power_domain_error(self):
        """Negative base with fractional exponent has no real result."""
        with pytest.raises(EvalArithmeticError):
            rational.power(Fraction(-8), Fraction(1, 3))

    def test_compare(self):
        """Three-way comparison."""
        assert rational.compare(Fraction(1, 3), Fraction(1, 2)) == -1
        assert rational.compare(Fraction(1, 2), Fraction(2, 4)) == 0
        assert rational.compare(Fraction(1), Fraction(1, 2)) == 1


class TestFormatting:
    """Tests for rendering results."""

    def test_integral_as_integer(self):
        """Integral values print without a decimal point."""
        assert rational.format_decimal(Fraction(10)) == "10"
        assert rational.format_decimal(Fraction(-3)) == "-3"
        assert rational.format_decimal(Fraction(2 ** 80)) == str(2 ** 80)

    def test_fixed_precision(self):
        """Non-integral values are rounded half away from zero."""
        assert rational.format_decimal(Fraction(2, 3), 3) == "0.667"
        assert rational.format_decimal(Fraction(1, 8), 2) == "0.13"
        assert rational.format_decimal(Fraction(-1, 8), 2) == "-0.13"
        assert rational.format_decimal(Fraction(1, 3)) == "0.333333"
        assert rational.format_decimal(Fraction(21, 2), 0) == "11"

    def test_tiny_negative_rounds_to_zero(self):
        """No '-0.00' for values that round to zero."""
        assert rational.format_decimal(Fraction(-1, 1000), 2) == "0.00"

    def test_integer_modes(self):
        """Hex, binary and octal rendering."""
        assert rational.format_integer(Fraction(255), "hex") == "0xff"
        assert rational.format_integer(Fraction(5), "binary") == "0b101"
        assert rational.format_integer(Fraction(8), "octal") == "0o10"
        assert rational.format_integer(Fraction(7, 2), "decimal") == "3"

    def test_unknown_mode(self):
        """Unknown modes are rejected."""
        with pytest.raises(ValueError):
            rational.format_integer(Fraction(1), "roman")

    def test_format_result(self):
        """Dispatch by mode."""
        assert rational.format_result(Fraction(1, 2), "decimal", 2) == "0.50"
        assert rational.format_result(Fraction(16), "hex") == "0x10"

    def test_integral_literal_round_trip(self):
        """Re-lexing a rendered integer gives the same value."""
        from mathcat import evaluate
        for value in (Fraction(0), Fraction(42), Fraction(2 ** 70)):
            assert evaluate(rational.format_decimal(value)) == value
            assert evaluate(rational.format_integer(value, "hex")) == value
            assert evaluate(rational.format_integer(value, "binary")) == value
            assert evaluate(rational.format_integer(value, "octal")) == value
