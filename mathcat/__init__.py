"""
MATHCAT - exact rational expression evaluation

An embeddable arithmetic-expression language. Expressions are evaluated in a
single pass to exact fractions, against a variable environment that can
persist across calls.

Quick Start:
    from mathcat import Evaluator, evaluate

    evaluate("2 ** 3 ** 2")     # => Fraction(512, 1)
    evaluate("0xff & 0b1010")   # => Fraction(10, 1)

    calc = Evaluator()
    calc.run("a = 1 / 3")
    calc.run("a * 3")           # => Fraction(1, 1)

Expression Syntax:
    1 + 2 * 3                   - arithmetic: + - * / % **
    a = 5, a += 1, a <<= 2      - assignment and compound assignment
    & | ^ ~ << >>               - bitwise, integer operands only
    == != < <= > >=             - comparison, yields 1 (true) or 0 (false)
    0x1F 0b101 0o17 1.5e-3      - literals
    max(a, 3)                   - function call
    # comment                   - rest of line ignored

Predefined variables: pi, tau, phi, e, true, false
"""

__version__ = "0.1.0"

from .errors import (
    MathcatError,
    LexError,
    ParseError,
    UndefinedNameError,
    ArityError,
    OperandTypeError,
    EvalArithmeticError,
    DivisionByZeroError,
    AssignmentError,
    InvalidVariableNameError,
    InvalidVariableValueError,
)

from .tokens import Token, TokenKind
from .lexer import lex, is_identifier
from .operators import OPERATORS, Operator, Assoc, Arity
from .functions import FUNCTIONS, Function, function_names
from .rational import (
    Rational,
    RAT_TRUE,
    RAT_FALSE,
    format_decimal,
    format_integer,
    format_result,
)
from .evaluator import Evaluator, evaluate, exec_with, CONSTANTS

# Public API
__all__ = [
    # Version
    "__version__",
    # Evaluation
    "Evaluator",
    "evaluate",
    "exec_with",
    "CONSTANTS",
    # Lexing
    "lex",
    "is_identifier",
    "Token",
    "TokenKind",
    # Tables
    "OPERATORS",
    "Operator",
    "Assoc",
    "Arity",
    "FUNCTIONS",
    "Function",
    "function_names",
    # Numbers
    "Rational",
    "RAT_TRUE",
    "RAT_FALSE",
    "format_decimal",
    "format_integer",
    "format_result",
    # Errors
    "MathcatError",
    "LexError",
    "ParseError",
    "UndefinedNameError",
    "ArityError",
    "OperandTypeError",
    "EvalArithmeticError",
    "DivisionByZeroError",
    "AssignmentError",
    "InvalidVariableNameError",
    "InvalidVariableValueError",
]
