"""
Lexer for MATHCAT expressions.

Converts a source string into a list of tokens in one forward pass:

    lex("a += 0x1F # note")
    # => [IDENT 'a', ADD_EQ '+=', HEX '0x1F', EOL '']

Unary minus is decided here rather than in the evaluator: a '-' is unary when
nothing precedes it, or when it follows '(', ',' or another operator, and it
is not the start of '-='.
"""

import unicodedata
from typing import List, Optional

from .errors import LexError
from .tokens import Token, TokenKind

# Sentinel appended to the input so peeking one character ahead is always safe
EOL = ""

# Single-character operators that may be followed by '=' to form a sibling
_SWITCH_EQ = {
    "+": (TokenKind.ADD, TokenKind.ADD_EQ),
    "/": (TokenKind.DIV, TokenKind.DIV_EQ),
    "%": (TokenKind.REM, TokenKind.REM_EQ),
    "&": (TokenKind.AND, TokenKind.AND_EQ),
    "|": (TokenKind.OR, TokenKind.OR_EQ),
    "^": (TokenKind.XOR, TokenKind.XOR_EQ),
    "=": (TokenKind.EQ, TokenKind.EQ_EQ),
    "!": (None, TokenKind.BANG_EQ),
}

# Doubled operators: (single, single=, double, double=)
_DOUBLED = {
    "*": (TokenKind.MUL, TokenKind.MUL_EQ, TokenKind.POW, TokenKind.POW_EQ),
    "<": (TokenKind.LT, TokenKind.LT_EQ, TokenKind.LSH, TokenKind.LSH_EQ),
    ">": (TokenKind.GT, TokenKind.GT_EQ, TokenKind.RSH, TokenKind.RSH_EQ),
}

_STRUCTURAL = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
    "~": TokenKind.NOT,
}

# Prefix letter -> (token kind, valid digits)
_BASES = {
    "x": (TokenKind.HEX, "0123456789abcdefABCDEF"),
    "b": (TokenKind.BINARY, "01"),
    "o": (TokenKind.OCTAL, "01234567"),
}


def is_ident_start(c: str) -> bool:
    return c == "_" or c.isalpha()


def is_digit(c: str) -> bool:
    return "0" <= c <= "9" if c else False


def is_ident_part(c: str) -> bool:
    return is_ident_start(c) or is_digit(c)


def is_whitespace(c: str) -> bool:
    if not c:
        return False
    return c in " \t\r\n" or unicodedata.category(c) == "Zs"


def is_identifier(name: str) -> bool:
    """Check that a name matches the identifier grammar."""
    if not isinstance(name, str) or not name:
        return False
    if not is_ident_start(name[0]):
        return False
    return all(is_ident_part(c) for c in name[1:])


class Lexer:
    """Scanner state for a single expression."""

    def __init__(self, source: str):
        self.source = source
        self.chars = list(source) + [EOL]
        self.pos = 0        # index of the next unread character
        self.start = 0      # offset of the lexeme being scanned
        self.ch = None      # last character read
        self.tokens: List[Token] = []

    def lex(self) -> List[Token]:
        """Scan the whole input. Raises LexError on the first bad character."""
        while self.ch != EOL:
            self.start = self.pos
            self.eat()

            if self.ch == EOL:
                self.emit(TokenKind.EOL)
            elif self.ch == "#":
                # Comment: the rest of the line is ignored
                self.start = len(self.source)
                self.emit(TokenKind.EOL)
                break
            elif is_whitespace(self.ch):
                self.skip_whitespace()
            elif is_ident_start(self.ch):
                self.read_ident()
            elif is_digit(self.ch) or self.ch == ".":
                self.read_number()
            elif self.ch == "-":
                self.read_minus()
            elif self.ch in _SWITCH_EQ:
                single, double = _SWITCH_EQ[self.ch]
                if single is None and self.peek() != "=":
                    raise LexError(
                        f"expected '{self.ch}=', got '{self.ch}'",
                        self.start, self.ch,
                    )
                self.switch_eq(single, double)
            elif self.ch in _DOUBLED:
                single, single_eq, double, double_eq = _DOUBLED[self.ch]
                if self.peek() == self.ch:
                    self.eat()
                    self.switch_eq(double, double_eq)
                else:
                    self.switch_eq(single, single_eq)
            elif self.ch in _STRUCTURAL:
                self.emit(_STRUCTURAL[self.ch])
            else:
                raise LexError(
                    f"unexpected character '{self.ch}'", self.start, self.ch
                )

        return self.tokens

    def peek(self) -> str:
        return self.chars[self.pos]

    def eat(self) -> str:
        self.ch = self.peek()
        self.pos += 1
        return self.ch

    def emit(self, kind: TokenKind):
        lexeme = "".join(self.chars[self.start:self.pos]) if kind != TokenKind.EOL else ""
        self.tokens.append(Token(kind, lexeme, self.start))

    def previous(self) -> Optional[Token]:
        return self.tokens[-1] if self.tokens else None

    def switch_eq(self, kind: TokenKind, kind_eq: TokenKind):
        """Emit kind, or kind_eq when the next character is '='."""
        if self.peek() == "=":
            self.eat()
            self.emit(kind_eq)
        else:
            self.emit(kind)

    def skip_whitespace(self):
        while is_whitespace(self.peek()):
            self.eat()

    def read_ident(self):
        while is_ident_part(self.peek()):
            self.eat()
        self.emit(TokenKind.IDENT)

    def read_minus(self):
        prev = self.previous()
        unary = (
            prev is None
            or prev.kind in (TokenKind.LPAREN, TokenKind.COMMA)
            or prev.is_operator()
        )
        if unary and self.peek() != "=":
            self.emit(TokenKind.UNARY_MIN)
        else:
            self.switch_eq(TokenKind.SUB, TokenKind.SUB_EQ)

    def read_number(self):
        if self.ch == "0" and self.peek().lower() in _BASES:
            self.read_prefixed()
            return

        seen_dot = self.ch == "."
        while is_digit(self.peek()) or self.peek() == ".":
            if self.eat() == ".":
                if seen_dot:
                    raise LexError(
                        "malformed number: more than one '.'",
                        self.pos - 1, ".",
                    )
                seen_dot = True

        if self.pos - self.start == 1 and self.ch == ".":
            raise LexError("malformed number '.'", self.start, ".")

        # Exponent only when digits follow: 2e5, 2e-5
        if self.peek() in ("e", "E"):
            after = self.chars[self.pos + 1] if self.pos + 1 < len(self.chars) else EOL
            after_sign = self.chars[self.pos + 2] if self.pos + 2 < len(self.chars) else EOL
            if is_digit(after) or (after == "-" and is_digit(after_sign)):
                self.eat()
                if self.peek() == "-":
                    self.eat()
                while is_digit(self.peek()):
                    self.eat()

        self.emit(TokenKind.DECIMAL)

    def read_prefixed(self):
        kind, digits = _BASES[self.eat().lower()]
        count = 0
        while self.peek() and self.peek() in digits:
            self.eat()
            count += 1

        nxt = self.peek()
        if count == 0 or is_ident_part(nxt) or nxt == ".":
            bad = nxt if nxt else "end of input"
            raise LexError(
                f"invalid digit '{bad}' in {kind} literal", self.pos, nxt
            )

        self.emit(kind)


def lex(source: str) -> List[Token]:
    """
    Convert an expression into tokens, ending with an EOL token.

    Raises:
        LexError: on an unrecognized character or malformed literal
    """
    return Lexer(source).lex()
