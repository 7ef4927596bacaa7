"""
Operator table for MATHCAT.

Maps every operator TokenKind to its precedence, associativity and arity.
Precedence runs from 0 (assignment) to 10 (unary minus).
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .tokens import TokenKind


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


class Arity(Enum):
    UNARY = 1
    BINARY = 2


class Operator(NamedTuple):
    """Static description of an operator."""

    prec: int
    assoc: Assoc
    arity: Arity = Arity.BINARY

    @property
    def unary(self) -> bool:
        return self.arity is Arity.UNARY


def _build_table() -> Mapping[TokenKind, Operator]:
    table = {}

    # Assignment operators
    for kind in (
        TokenKind.EQ, TokenKind.ADD_EQ, TokenKind.SUB_EQ, TokenKind.DIV_EQ,
        TokenKind.MUL_EQ, TokenKind.POW_EQ, TokenKind.REM_EQ,
        TokenKind.AND_EQ, TokenKind.OR_EQ, TokenKind.XOR_EQ,
        TokenKind.LSH_EQ, TokenKind.RSH_EQ,
    ):
        table[kind] = Operator(0, Assoc.RIGHT)

    # Relational operators
    for kind in (
        TokenKind.EQ_EQ, TokenKind.BANG_EQ, TokenKind.GT, TokenKind.GT_EQ,
        TokenKind.LT, TokenKind.LT_EQ,
    ):
        table[kind] = Operator(1, Assoc.RIGHT)

    # Bitwise operators
    table[TokenKind.OR] = Operator(2, Assoc.RIGHT)
    table[TokenKind.XOR] = Operator(3, Assoc.RIGHT)
    table[TokenKind.AND] = Operator(4, Assoc.RIGHT)
    table[TokenKind.LSH] = Operator(5, Assoc.RIGHT)
    table[TokenKind.RSH] = Operator(5, Assoc.RIGHT)
    table[TokenKind.NOT] = Operator(9, Assoc.LEFT, Arity.UNARY)

    # Mathematical operators
    table[TokenKind.ADD] = Operator(6, Assoc.LEFT)
    table[TokenKind.SUB] = Operator(6, Assoc.LEFT)
    table[TokenKind.MUL] = Operator(7, Assoc.LEFT)
    table[TokenKind.DIV] = Operator(7, Assoc.LEFT)
    table[TokenKind.REM] = Operator(7, Assoc.LEFT)
    table[TokenKind.POW] = Operator(8, Assoc.RIGHT)
    table[TokenKind.UNARY_MIN] = Operator(10, Assoc.LEFT, Arity.UNARY)

    return MappingProxyType(table)


OPERATORS: Mapping[TokenKind, Operator] = _build_table()


def should_reduce(incoming: Operator, top: Operator) -> bool:
    """
    Decide whether the operator on top of the stack is applied before the
    incoming one is pushed.

    The top reduces when it binds tighter, or binds equally and is
    left-associative. Prefix operators reduce nothing when they arrive,
    since no complete operand precedes them.
    """
    if incoming.unary:
        return False
    if top.prec > incoming.prec:
        return True
    return top.prec == incoming.prec and top.assoc is Assoc.LEFT
