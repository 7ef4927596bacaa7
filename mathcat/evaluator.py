"""
Expression evaluator for MATHCAT.

Evaluates a token sequence in a single left-to-right pass using the
shunting-yard algorithm, applying each operator as soon as precedence allows
instead of building a syntax tree. Three stacks are kept:

    operands   - Pending(token) for unresolved literals/identifiers,
                 Value(fraction) for computed results
    operators  - operator tokens, '(' and function-call markers
                 (the identifier token of a call)
    arities    - argument count and operand-stack height of each open
                 function call

Usage:
    from mathcat import Evaluator, evaluate

    evaluate("2 ** 3 ** 2")        # => Fraction(512, 1)

    calc = Evaluator()
    calc.run("a = 150")
    calc.run("b = 715")
    calc.run("a ** 2 - (a / b)")   # exact rational result

Assignments are committed to the environment as soon as they are reduced. If
a later part of the expression fails, earlier assignments are kept:

    calc.run("x = 1")
    calc.run("(x = 2) + undefined")  # raises UndefinedNameError
    calc.get_variable("x")           # => Fraction(2, 1)
"""

import logging
import math
from fractions import Fraction
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Union

from . import functions, rational
from .errors import (
    ArityError, AssignmentError, EvalArithmeticError, InvalidVariableNameError,
    InvalidVariableValueError, MathcatError, OperandTypeError, ParseError,
    UndefinedNameError,
)
from .lexer import is_identifier, lex
from .operators import OPERATORS, should_reduce
from .rational import NumericType, from_bool
from .tokens import COMPOUND_ASSIGNMENT, Token, TokenKind

logger = logging.getLogger(__name__)


# Predefined variables; they can be overwritten per evaluator
CONSTANTS: Mapping[str, Fraction] = MappingProxyType({
    "pi": rational.from_float(math.pi),
    "tau": rational.from_float(math.tau),
    "phi": rational.from_float((1 + math.sqrt(5)) / 2),
    "e": rational.from_float(math.e),
    "true": rational.RAT_TRUE,
    "false": rational.RAT_FALSE,
})

_INTEGER_BASES = {
    TokenKind.HEX: 16,
    TokenKind.BINARY: 2,
    TokenKind.OCTAL: 8,
}


def _int_op(f):
    """Lift an int operation to integral Fractions."""
    def handler(a: Fraction, b: Fraction) -> Fraction:
        return Fraction(f(a.numerator, b.numerator))
    return handler


_BINARY_OPS = {
    TokenKind.ADD: lambda a, b: a + b,
    TokenKind.SUB: lambda a, b: a - b,
    TokenKind.MUL: lambda a, b: a * b,
    TokenKind.DIV: rational.divide,
    TokenKind.POW: rational.power,
    TokenKind.REM: rational.mod,

    TokenKind.AND: _int_op(lambda a, b: a & b),
    TokenKind.OR: _int_op(lambda a, b: a | b),
    TokenKind.XOR: _int_op(lambda a, b: a ^ b),
    TokenKind.LSH: _int_op(lambda a, b: a << abs(b)),
    TokenKind.RSH: _int_op(lambda a, b: a >> abs(b)),

    TokenKind.EQ_EQ: lambda a, b: from_bool(a == b),
    TokenKind.BANG_EQ: lambda a, b: from_bool(a != b),
    TokenKind.GT: lambda a, b: from_bool(a > b),
    TokenKind.GT_EQ: lambda a, b: from_bool(a >= b),
    TokenKind.LT: lambda a, b: from_bool(a < b),
    TokenKind.LT_EQ: lambda a, b: from_bool(a <= b),
}


class Pending(NamedTuple):
    """Operand not yet resolved to a value: a number literal or identifier."""

    token: Token


class Value(NamedTuple):
    """Operand that has already been computed."""

    value: Fraction


Operand = Union[Pending, Value]


def to_rational(value: NumericType) -> Fraction:
    """Convert a caller-supplied number to a Fraction."""
    if not isinstance(value, (int, float, Fraction)):
        raise InvalidVariableValueError(value)
    if isinstance(value, float):
        return rational.from_float(value)
    return Fraction(value)


class Evaluator:
    """
    Persistent evaluator: the variable environment survives across run()
    calls, the parse state is reset for each one.

    Not thread-safe. Use one instance per thread, or lock around run().
    """

    def __init__(self, variables: Optional[Dict[str, NumericType]] = None):
        self.variables: Dict[str, Fraction] = dict(CONSTANTS)
        if variables:
            for name, value in variables.items():
                self.set_variable(name, value)
        self._reset_state()

    def __len__(self) -> int:
        return len(self.variables)

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def __repr__(self) -> str:
        return f"Evaluator({len(self.variables)} variables)"

    # ------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------

    def run(self, expression: str) -> Fraction:
        """
        Evaluate an expression against this evaluator's variables.

        Returns:
            The exact result; 0 for an empty expression.

        Raises:
            MathcatError: any lexing or evaluation error
        """
        tokens = lex(expression)
        self._reset_state()
        self.tokens = tokens
        try:
            return self._parse()
        finally:
            self._reset_state()

    def get_variable(self, name: str) -> Fraction:
        """Get an existing variable. Raises UndefinedNameError if absent."""
        try:
            return self.variables[name]
        except KeyError:
            raise UndefinedNameError(f"undefined variable '{name}'", name)

    def set_variable(self, name: str, value: NumericType) -> None:
        """Set a variable from Python code. The name must be an identifier."""
        if not is_identifier(name):
            raise InvalidVariableNameError(name)
        self.variables[name] = to_rational(value)

    def reset(self) -> None:
        """Forget all assignments, keeping only the predefined constants."""
        self.variables.clear()
        self.variables.update(CONSTANTS)
        logger.debug("Variables reset to constants")

    # ------------------------------------------------------------
    # Parse loop
    # ------------------------------------------------------------

    def _reset_state(self):
        self.tokens: List[Token] = []
        self.pos = 0
        self.tok: Optional[Token] = None
        self.operands: List[Operand] = []
        self.operators: List[Token] = []
        self.arities: List[List[int]] = []

    def peek(self, ahead: int = 0) -> Token:
        return self.tokens[self.pos + ahead]

    def eat(self) -> Token:
        self.tok = self.peek()
        self.pos += 1
        return self.tok

    def _parse(self) -> Fraction:
        while self.eat().kind is not TokenKind.EOL:
            tok = self.tok

            if tok.is_literal():
                if self.peek().kind is TokenKind.LPAREN:
                    # Function call: the name waits on the operator stack
                    self.operators.append(tok)
                    empty = self.peek(1).kind is TokenKind.RPAREN
                    self.arities.append([0 if empty else 1, len(self.operands)])
                else:
                    self.operands.append(Pending(tok))

            elif tok.kind is TokenKind.LPAREN:
                self.operators.append(tok)

            elif tok.kind is TokenKind.COMMA:
                self._handle_comma(tok)

            elif tok.is_operator():
                self._handle_operator(tok)

            elif tok.kind is TokenKind.RPAREN:
                self._handle_rparen(tok)

        # Apply whatever is left
        while self.operators:
            top = self.operators.pop()
            if top.kind is TokenKind.LPAREN:
                raise ParseError("unmatched '('", top.offset, top.lexeme)
            self._reduce(top)

        if not self.operands:
            return Fraction(0)

        if len(self.operands) > 1:
            extra = self.operands[1]
            if isinstance(extra, Pending):
                raise ParseError(
                    f"unexpected token '{extra.token.lexeme}'",
                    extra.token.offset, extra.token.lexeme,
                )
            raise ParseError("unexpected token: missing operator")

        return self._resolve(self.operands[0])

    def _handle_comma(self, tok: Token):
        while self.operators and self.operators[-1].kind is not TokenKind.LPAREN:
            self._reduce(self.operators.pop())

        # The exposed '(' must open a function call
        if (len(self.operators) < 2 or not self.operators[-2].is_literal()
                or not self.arities):
            raise ParseError("misplaced comma", tok.offset, tok.lexeme)

        self.arities[-1][0] += 1

    def _handle_operator(self, tok: Token):
        incoming = OPERATORS[tok.kind]

        while self.operators:
            top = self.operators[-1]
            if top.kind is TokenKind.LPAREN:
                break
            # A completed function call binds tighter than any operator
            if not top.is_literal() and not should_reduce(incoming, OPERATORS[top.kind]):
                break
            self._reduce(self.operators.pop())

        self.operators.append(tok)

    def _handle_rparen(self, tok: Token):
        while True:
            if not self.operators:
                raise ParseError("unmatched ')'", tok.offset, tok.lexeme)
            top = self.operators.pop()
            if top.kind is TokenKind.LPAREN:
                return
            self._reduce(top)

    # ------------------------------------------------------------
    # Reduction
    # ------------------------------------------------------------

    def _pop_operand(self, tok: Token) -> Operand:
        if not self.operands:
            raise ParseError(
                f"missing operand for '{tok.lexeme}'", tok.offset, tok.lexeme
            )
        return self.operands.pop()

    def _reduce(self, tok: Token):
        if tok.is_literal():
            self._call(tok)
            return

        op = OPERATORS[tok.kind]
        if not op.unary and len(self.operands) < 2:
            raise ParseError(
                f"missing operand for '{tok.lexeme}'", tok.offset, tok.lexeme
            )
        right = self._resolve(self._pop_operand(tok))

        if op.unary:
            self.operands.append(Value(self._apply_unary(tok, right)))
            return

        left = self._pop_operand(tok)

        if tok.is_assignment():
            result = self._assign(tok, left, right)
        else:
            result = self._apply_binary(tok.kind, tok, self._resolve(left), right)

        self.operands.append(Value(result))

    def _assign(self, tok: Token, target: Operand, value: Fraction) -> Fraction:
        if not (isinstance(target, Pending) and target.token.kind is TokenKind.IDENT):
            raise AssignmentError("cannot assign to literal", tok.offset, tok.lexeme)

        name = target.token.lexeme
        if tok.kind is not TokenKind.EQ:
            value = self._apply_binary(
                COMPOUND_ASSIGNMENT[tok.kind], tok, self._resolve(target), value
            )

        self.variables[name] = value
        logger.debug("Assigned %s = %s", name, value)
        return value

    def _call(self, tok: Token):
        name = tok.lexeme
        argc, base = self.arities.pop()

        func = functions.lookup(name)
        if func is None:
            raise UndefinedNameError(f"undefined function '{name}'", name, tok.offset)
        if argc != func.arity:
            raise ArityError(name, func.arity, argc, tok.offset)
        # Only operands produced inside the call's parentheses count
        found = len(self.operands) - base
        if found < argc:
            raise ParseError(
                f"missing argument for '{name}'", tok.offset, tok.lexeme
            )
        if found > argc:
            raise ParseError(
                f"missing operator in call to '{name}'", tok.offset, tok.lexeme
            )

        popped = [self.operands.pop() for _ in range(argc)]
        args = [self._resolve(operand) for operand in reversed(popped)]
        try:
            result = func.fn(args)
        except MathcatError as e:
            if e.pos is None:
                e.pos, e.token = tok.offset, name
            raise
        self.operands.append(Value(result))

    def _resolve(self, operand: Operand) -> Fraction:
        if isinstance(operand, Value):
            return operand.value

        tok = operand.token
        if tok.kind is TokenKind.DECIMAL:
            return rational.parse_decimal(tok.lexeme)
        if tok.kind in _INTEGER_BASES:
            return rational.parse_integer(tok.lexeme, _INTEGER_BASES[tok.kind])
        if tok.kind is TokenKind.IDENT:
            try:
                return self.variables[tok.lexeme]
            except KeyError:
                raise UndefinedNameError(
                    f"undefined variable '{tok.lexeme}'", tok.lexeme, tok.offset
                )

        raise ParseError(f"unexpected token '{tok.lexeme}'", tok.offset, tok.lexeme)

    def _apply_unary(self, tok: Token, x: Fraction) -> Fraction:
        if tok.kind is TokenKind.UNARY_MIN:
            return -x
        # Bitwise not
        if not rational.is_integral(x):
            raise OperandTypeError(tok.lexeme, tok.offset)
        return Fraction(~x.numerator)

    def _apply_binary(self, kind: TokenKind, tok: Token, a: Fraction,
                      b: Fraction) -> Fraction:
        if kind.bitwise and not (rational.is_integral(a) and rational.is_integral(b)):
            raise OperandTypeError(tok.lexeme, tok.offset)
        try:
            return _BINARY_OPS[kind](a, b)
        except MathcatError as e:
            if e.pos is None:
                e.pos, e.token = tok.offset, tok.lexeme
            raise
        except (OverflowError, MemoryError):
            raise EvalArithmeticError(
                f"result of '{tok.lexeme}' is too large", tok.offset, tok.lexeme
            )


# ============================================================
# One-shot evaluation
# ============================================================

def evaluate(expression: str) -> Fraction:
    """
    Evaluate an expression with only the predefined constants.

    Example:
        evaluate("2 * 2 * 2")  # => Fraction(8, 1)
    """
    return Evaluator().run(expression)


def exec_with(expression: str, variables: Dict[str, NumericType]) -> Fraction:
    """
    Evaluate an expression with extra variables on top of the constants.

    Raises:
        InvalidVariableNameError: if a key is not a valid identifier; raised
            before anything is evaluated
    """
    return Evaluator(variables).run(expression)
