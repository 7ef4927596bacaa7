"""
Exception hierarchy for MATHCAT.

Every error raised while lexing or evaluating an expression derives from
MathcatError, so embedding code can catch a single class:

    try:
        value = evaluate(text)
    except MathcatError as e:
        print(f"Error: {e}")

Errors carry the offending lexeme and its source offset when they are known.
"""

from typing import Optional


class MathcatError(Exception):
    """Base class for all lexing and evaluation errors."""

    def __init__(self, message: str, pos: Optional[int] = None,
                 token: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.token = token

    def __str__(self) -> str:
        if self.pos is None:
            return self.message
        return f"{self.message} (at position {self.pos})"


class LexError(MathcatError):
    """Unrecognized character or malformed literal/operator."""


class ParseError(MathcatError):
    """Unbalanced parentheses, misplaced comma, missing or leftover operands."""


class UndefinedNameError(MathcatError):
    """Unknown variable used as a value, or unknown function called."""

    def __init__(self, message: str, name: str, pos: Optional[int] = None):
        super().__init__(message, pos, name)
        self.name = name


class ArityError(MathcatError, TypeError):
    """Function called with the wrong number of arguments."""

    def __init__(self, name: str, expected: int, actual: int,
                 pos: Optional[int] = None):
        super().__init__(
            f"function '{name}' expects {expected} argument(s), got {actual}",
            pos, name,
        )
        self.name = name
        self.expected = expected
        self.actual = actual


class OperandTypeError(MathcatError, TypeError):
    """Bitwise operator applied to a non-integral operand."""

    def __init__(self, operator: str, pos: Optional[int] = None):
        super().__init__(
            f"operator '{operator}' requires integer operands", pos, operator
        )
        self.operator = operator


class EvalArithmeticError(MathcatError, ArithmeticError):
    """Arithmetic failure: math domain error, overflow, non-finite result."""


class DivisionByZeroError(EvalArithmeticError, ZeroDivisionError):
    """Division or remainder by zero."""


class AssignmentError(MathcatError):
    """Assignment target is not a plain identifier."""


class InvalidVariableNameError(MathcatError, ValueError):
    """Caller-supplied variable name does not match the identifier grammar."""

    def __init__(self, name: str):
        super().__init__(f"invalid variable name '{name}'", None, name)
        self.name = name


class InvalidVariableValueError(MathcatError, TypeError):
    """Caller-supplied variable value is not an int, float or Fraction."""

    def __init__(self, value):
        super().__init__(
            f"invalid variable value {value!r}: expected int, float or Fraction"
        )
        self.value = value
