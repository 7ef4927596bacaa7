"""
Token model for MATHCAT.

Each TokenKind carries its category (literal, operator or structural) and
its bitwise/assignment flags as part of its value, so classification does not
depend on the order in which the members are declared.
"""

from enum import Enum
from typing import NamedTuple


# Token categories
LITERAL = "literal"
OPERATOR = "operator"
STRUCTURAL = "structural"


class TokenKind(Enum):
    """Closed set of token kinds: (name, category, bitwise, assignment)."""

    # Literals
    IDENT = ("identifier", LITERAL, False, False)
    DECIMAL = ("decimal", LITERAL, False, False)
    HEX = ("hex", LITERAL, False, False)
    BINARY = ("binary", LITERAL, False, False)
    OCTAL = ("octal", LITERAL, False, False)

    # Arithmetic operators
    ADD = ("+", OPERATOR, False, False)
    SUB = ("-", OPERATOR, False, False)
    MUL = ("*", OPERATOR, False, False)
    DIV = ("/", OPERATOR, False, False)
    POW = ("**", OPERATOR, False, False)
    REM = ("%", OPERATOR, False, False)
    UNARY_MIN = ("unary -", OPERATOR, False, False)

    # Bitwise operators
    AND = ("&", OPERATOR, True, False)
    OR = ("|", OPERATOR, True, False)
    XOR = ("^", OPERATOR, True, False)
    LSH = ("<<", OPERATOR, True, False)
    RSH = (">>", OPERATOR, True, False)
    NOT = ("~", OPERATOR, True, False)

    # Relational operators
    EQ_EQ = ("==", OPERATOR, False, False)
    BANG_EQ = ("!=", OPERATOR, False, False)
    GT = (">", OPERATOR, False, False)
    GT_EQ = (">=", OPERATOR, False, False)
    LT = ("<", OPERATOR, False, False)
    LT_EQ = ("<=", OPERATOR, False, False)

    # Assignment operators
    EQ = ("=", OPERATOR, False, True)
    ADD_EQ = ("+=", OPERATOR, False, True)
    SUB_EQ = ("-=", OPERATOR, False, True)
    DIV_EQ = ("/=", OPERATOR, False, True)
    MUL_EQ = ("*=", OPERATOR, False, True)
    POW_EQ = ("**=", OPERATOR, False, True)
    REM_EQ = ("%=", OPERATOR, False, True)
    AND_EQ = ("&=", OPERATOR, True, True)
    OR_EQ = ("|=", OPERATOR, True, True)
    XOR_EQ = ("^=", OPERATOR, True, True)
    LSH_EQ = ("<<=", OPERATOR, True, True)
    RSH_EQ = (">>=", OPERATOR, True, True)

    # Structural
    LPAREN = ("(", STRUCTURAL, False, False)
    RPAREN = (")", STRUCTURAL, False, False)
    COMMA = (",", STRUCTURAL, False, False)
    EOL = ("end of input", STRUCTURAL, False, False)

    def __init__(self, label: str, category: str, bitwise: bool,
                 assignment: bool):
        self.label = label
        self.category = category
        self.bitwise = bitwise
        self.assignment = assignment

    def __str__(self) -> str:
        return self.label


# Compound assignment -> the binary operator it applies before storing
COMPOUND_ASSIGNMENT = {
    TokenKind.ADD_EQ: TokenKind.ADD,
    TokenKind.SUB_EQ: TokenKind.SUB,
    TokenKind.DIV_EQ: TokenKind.DIV,
    TokenKind.MUL_EQ: TokenKind.MUL,
    TokenKind.POW_EQ: TokenKind.POW,
    TokenKind.REM_EQ: TokenKind.REM,
    TokenKind.AND_EQ: TokenKind.AND,
    TokenKind.OR_EQ: TokenKind.OR,
    TokenKind.XOR_EQ: TokenKind.XOR,
    TokenKind.LSH_EQ: TokenKind.LSH,
    TokenKind.RSH_EQ: TokenKind.RSH,
}


class Token(NamedTuple):
    """A lexeme with its kind and source offset."""

    kind: TokenKind
    lexeme: str
    offset: int

    def is_literal(self) -> bool:
        return self.kind.category == LITERAL

    def is_operator(self) -> bool:
        return self.kind.category == OPERATOR

    def is_bitwise(self) -> bool:
        return self.kind.bitwise

    def is_assignment(self) -> bool:
        return self.kind.assignment

    def __str__(self) -> str:
        return f"{self.offset}: '{self.lexeme}' ({self.kind})"
