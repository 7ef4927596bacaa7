"""
Built-in function registry for MATHCAT.

Every function has a fixed arity that the evaluator checks exactly before
calling it. Implementations receive their arguments as a list of Fractions
in left-to-right order and return a Fraction.

Transcendental functions go through float: the argument is converted, the
math module computes the result, and the float is lifted back to the exact
rational it represents.
"""

import math
import random
from fractions import Fraction
from types import MappingProxyType
from typing import Callable, List, Mapping, NamedTuple

from . import rational
from .errors import EvalArithmeticError
from .rational import RAT_TRUE

FunctionImpl = Callable[[List[Fraction]], Fraction]


class Function(NamedTuple):
    arity: int
    fn: FunctionImpl


# ============================================================
# Function builders
# ============================================================

def exact(arity: int, f: Callable[..., Fraction]) -> Function:
    """Wrap an exact rational function taking `arity` positional arguments."""
    def handler(args: List[Fraction]) -> Fraction:
        return f(*args)
    return Function(arity, handler)


def float_unary(f: Callable[[float], float]) -> Function:
    """Wrap a float function of one argument (e.g., sin, sqrt, log)."""
    def handler(args: List[Fraction]) -> Fraction:
        return _call_float(f, args[0])
    return Function(1, handler)


def float_binary(f: Callable[[float, float], float]) -> Function:
    """Wrap a float function of two arguments."""
    def handler(args: List[Fraction]) -> Fraction:
        return _call_float(f, args[0], args[1])
    return Function(2, handler)


def _call_float(f: Callable[..., float], *args: Fraction) -> Fraction:
    floats = [rational.to_float(a) for a in args]
    try:
        result = f(*floats)
    except (ValueError, ZeroDivisionError):
        raise EvalArithmeticError(
            f"math domain error in {f.__name__}({', '.join(str(a) for a in args)})"
        )
    except OverflowError:
        raise EvalArithmeticError(f"overflow in {f.__name__}")
    return rational.from_float(result)


# ============================================================
# Implementations
# ============================================================

def logn(base: float, value: float) -> float:
    return math.log10(value) / math.log10(base)


def _max(a: Fraction, b: Fraction) -> Fraction:
    return a if rational.compare(a, b) == 1 else b


def _min(a: Fraction, b: Fraction) -> Fraction:
    return a if rational.compare(a, b) == -1 else b


def _rand() -> Fraction:
    return rational.from_float(random.random())


def _list() -> Fraction:
    print(" ".join(function_names()))
    return RAT_TRUE


def _build_registry() -> Mapping[str, Function]:
    funcs = {
        "abs": exact(1, abs),
        "ceil": exact(1, rational.ceil),
        "floor": exact(1, rational.floor),
        "sin": float_unary(math.sin),
        "cos": float_unary(math.cos),
        "tan": float_unary(math.tan),
        "asin": float_unary(math.asin),
        "acos": float_unary(math.acos),
        "atan": float_unary(math.atan),
        "ln": float_unary(math.log),
        "log": float_unary(math.log10),
        "logn": float_binary(logn),
        "max": exact(2, _max),
        "min": exact(2, _min),
        "sqrt": float_unary(math.sqrt),
        "rand": exact(0, _rand),
        "fact": exact(1, rational.factorial),
        "gcd": exact(2, rational.gcd),
        "list": exact(0, _list),
    }
    return MappingProxyType(funcs)


FUNCTIONS: Mapping[str, Function] = _build_registry()


def function_names() -> List[str]:
    """Names of all registered functions, in registration order."""
    return list(FUNCTIONS)


def lookup(name: str):
    """Return the Function registered under name, or None."""
    return FUNCTIONS.get(name)
