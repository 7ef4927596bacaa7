"""
Rational numeric layer for MATHCAT.

Values are fractions.Fraction: exact, always in lowest terms with a positive
denominator. This module adds the integer coercions, the float round-trip
used by transcendental functions, and the result formatting used by the REPL.
"""

import math
from fractions import Fraction
from typing import Union

from .errors import DivisionByZeroError, EvalArithmeticError

Rational = Fraction
NumericType = Union[int, float, Fraction]

RAT_TRUE = Fraction(1)
RAT_FALSE = Fraction(0)

# Output modes understood by format_integer
MODES = ("decimal", "hex", "binary", "octal")


# ============================================================
# Conversions
# ============================================================

def from_bool(flag: bool) -> Fraction:
    return RAT_TRUE if flag else RAT_FALSE


def from_float(x: float) -> Fraction:
    """
    Lift a float to the exact rational it represents.

    Raises:
        EvalArithmeticError: if x is NaN or infinite
    """
    if not math.isfinite(x):
        raise EvalArithmeticError(f"result is not a finite number: {x}")
    return Fraction(x)


def to_float(x: Fraction) -> float:
    try:
        return float(x)
    except OverflowError:
        raise EvalArithmeticError("value too large to convert to float")


def parse_decimal(text: str) -> Fraction:
    """Parse a decimal literal such as '42', '.5' or '1.5e-3' exactly."""
    return Fraction(text)


def parse_integer(text: str, base: int) -> Fraction:
    """Parse a prefixed literal such as '0x1F' in the given base."""
    return Fraction(int(text[2:], base))


def is_integral(x: Fraction) -> bool:
    return x.denominator == 1


def to_integer(x: Fraction) -> int:
    """Floor of x as a Python int."""
    return x.numerator // x.denominator


# ============================================================
# Derived operations
# ============================================================

def floor(x: Fraction) -> Fraction:
    return Fraction(to_integer(x))


def ceil(x: Fraction) -> Fraction:
    return -floor(-x)


def mod(x: Fraction, y: Fraction) -> Fraction:
    """
    True modulo: x - floor(x / y) * y. The result has the sign of y.

    Raises:
        DivisionByZeroError: if y is zero
    """
    if y == 0:
        raise DivisionByZeroError("division by zero")
    return x - floor(x / y) * y


def divide(x: Fraction, y: Fraction) -> Fraction:
    if y == 0:
        raise DivisionByZeroError("division by zero")
    return x / y


def gcd(x: Fraction, y: Fraction) -> Fraction:
    """Greatest common divisor of floor(x) and floor(y)."""
    return Fraction(math.gcd(to_integer(x), to_integer(y)))


def factorial(n: Fraction) -> Fraction:
    """Product of the integers in [1, floor(n)]; 1 when floor(n) < 1."""
    return Fraction(math.prod(range(1, to_integer(n) + 1)))


def power(base: Fraction, exp: Fraction) -> Fraction:
    """
    base ** exp.

    Exact when both operands are integral. Otherwise both are converted to
    float and the float result is lifted back, so the value is approximate.
    """
    if is_integral(base) and is_integral(exp):
        if base == 0 and exp < 0:
            raise DivisionByZeroError("zero raised to a negative power")
        return base ** exp.numerator

    try:
        result = math.pow(to_float(base), to_float(exp))
    except ValueError:
        raise EvalArithmeticError(f"math domain error in {base} ** {exp}")
    except OverflowError:
        raise EvalArithmeticError(f"overflow in {base} ** {exp}")
    return from_float(result)


def compare(a: Fraction, b: Fraction) -> int:
    """Return -1, 0 or 1 as a is less than, equal to or greater than b."""
    return (a > b) - (a < b)


# ============================================================
# Formatting
# ============================================================

def format_decimal(x: Fraction, precision: int = 6) -> str:
    """
    Render x as an integer when it is integral, otherwise as a fixed-point
    string with `precision` digits, rounding half away from zero.

    Examples:
        format_decimal(Fraction(10)) -> "10"
        format_decimal(Fraction(2, 3), 3) -> "0.667"
        format_decimal(Fraction(-1, 8), 2) -> "-0.13"
    """
    if is_integral(x):
        return str(x.numerator)

    precision = max(precision, 0)
    scaled = abs(x.numerator) * 10 ** precision
    quotient, remainder = divmod(scaled, x.denominator)
    if 2 * remainder >= x.denominator:
        quotient += 1

    sign = "-" if x < 0 and quotient != 0 else ""
    digits = str(quotient)
    if precision == 0:
        return sign + digits

    digits = digits.rjust(precision + 1, "0")
    return f"{sign}{digits[:-precision]}.{digits[-precision:]}"


def format_integer(x: Fraction, mode: str = "decimal") -> str:
    """
    Render floor(x) in a non-decimal base.

    Examples:
        format_integer(Fraction(255), "hex") -> "0xff"
        format_integer(Fraction(5), "binary") -> "0b101"
        format_integer(Fraction(8), "octal") -> "0o10"
    """
    value = to_integer(x)
    if mode == "decimal":
        return str(value)
    if mode == "hex":
        return hex(value)
    if mode == "binary":
        return bin(value)
    if mode == "octal":
        return oct(value)
    raise ValueError(f"Unknown mode: {mode}. Options: {', '.join(MODES)}")


def format_result(x: Fraction, mode: str = "decimal", precision: int = 6) -> str:
    """Format an evaluation result for display."""
    if mode == "decimal":
        return format_decimal(x, precision)
    return format_integer(x, mode)
