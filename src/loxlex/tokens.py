"""
Lox Token Vocabulary
====================

This module defines the closed set of token kinds produced by the
scanner, the reserved word table, and the immutable Token value.

Token Categories
----------------
- Single-character punctuation: ( ) { } , . - + ; * /
- One or two character operators: ! != = == < <= > >=
- Literals: identifiers, "strings", numbers (32-bit floats)
- Keywords: and class else false fun for if nil or print return
  super this true var while

Only IDENTIFIER, STRING and NUMBER carry a value; every other kind is a
unit marker whose value is None. Tokens carry no line or column
information.

Example:
    >>> Token(TokenType.IDENTIFIER, "a")
    Token(IDENTIFIER, 'a')
    >>> Token(TokenType.NUMBER, 1.0)
    Token(NUMBER, 1.0)
    >>> Token(TokenType.LEFT_PAREN)
    Token(LEFT_PAREN)
"""

import math
import struct
from dataclasses import dataclass
from enum import Enum, auto
from fractions import Fraction
from typing import Optional, Union


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Lox language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Single-character Punctuation ===
    LEFT_PAREN = auto()     # (
    RIGHT_PAREN = auto()    # )
    LEFT_BRACE = auto()     # {
    RIGHT_BRACE = auto()    # }
    COMMA = auto()          # ,
    DOT = auto()            # .
    MINUS = auto()          # -
    PLUS = auto()           # +
    SEMICOLON = auto()      # ;
    STAR = auto()           # *
    SLASH = auto()          # /

    # === One or Two Character Operators ===
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    EQUAL = auto()          # =
    EQUAL_EQUAL = auto()    # ==
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=

    # === Literals ===
    IDENTIFIER = auto()     # Variable/function/class names
    STRING = auto()         # "..."
    NUMBER = auto()         # 123 or 1.5

    # === Keywords ===
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()


# =============================================================================
# Lexeme Tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# Punctuation that never needs lookahead. "/" is absent because it may
# start a comment.
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ";": TokenType.SEMICOLON,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
}

# First character -> (one-character kind, kind when followed by "=")
EQUAL_SUFFIX_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

PAYLOAD_TYPES = frozenset({
    TokenType.IDENTIFIER,
    TokenType.STRING,
    TokenType.NUMBER,
})

_FIXED_LEXEMES: dict[TokenType, str] = {
    **{kind: text for text, kind in SINGLE_CHAR_TOKENS.items()},
    **{kind: text for text, kind in KEYWORDS.items()},
    **{one: text for text, (one, _) in EQUAL_SUFFIX_TOKENS.items()},
    **{two: text + "=" for text, (_, two) in EQUAL_SUFFIX_TOKENS.items()},
    TokenType.SLASH: "/",
}


# =============================================================================
# Numeric Helpers
# =============================================================================

# Largest finite single precision value, as raw bits
_FLOAT32_MAX_BITS = 0x7F7FFFFF

# Halfway between the largest finite value and the next power of two;
# anything at or above it rounds to infinity
_FLOAT32_OVERFLOW = Fraction(2**128 - 2**103)


def to_float32(value: float) -> float:
    """
    Round a Python float to the nearest IEEE-754 single precision value.

    Number literals are 32-bit floats. Values too large for single
    precision become infinity with the sign preserved.
    """
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def parse_float32(text: str) -> float:
    """
    Parse non-negative decimal text to the nearest single precision value.

    Rounds the exact decimal value once, ties to even. Going through a
    64-bit float first would round twice and can land on the wrong
    neighbour when the 64-bit value sits exactly halfway.

    Raises:
        ValueError: If text is not a decimal number
    """
    exact = Fraction(text)
    if exact >= _FLOAT32_OVERFLOW:
        return math.inf

    bits = struct.unpack("<I", struct.pack("<f", to_float32(float(exact))))[0]
    candidates = [b for b in (bits - 1, bits, bits + 1) if 0 <= b <= _FLOAT32_MAX_BITS]

    def distance(candidate_bits: int) -> tuple[Fraction, int]:
        value = struct.unpack("<f", struct.pack("<I", candidate_bits))[0]
        return abs(Fraction(value) - exact), candidate_bits & 1

    best = min(candidates, key=distance)
    return struct.unpack("<f", struct.pack("<I", best))[0]


def format_float32(value: float) -> str:
    """
    Return the shortest decimal text that reads back as the same
    single precision value.

    >>> format_float32(to_float32(3.14))
    '3.14'
    >>> format_float32(42.0)
    '42'
    """
    if not math.isfinite(value):
        return repr(value)
    text = repr(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if to_float32(float(text)) == value:
            break
    return text


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single classified lexical unit.

    Attributes:
        type: The TokenType classification
        value: Identifier text, string contents, float value, or None
    """
    type: TokenType
    value: Optional[Union[str, float]] = None

    def __repr__(self) -> str:
        """Structural representation, as printed by the token dumper."""
        if self.type is TokenType.NUMBER:
            text = format_float32(self.value)
            if math.isfinite(self.value) and not any(c in text for c in ".e"):
                text += ".0"
            return f"Token(NUMBER, {text})"
        if self.type in PAYLOAD_TYPES:
            return f"Token({self.type.name}, {self.value!r})"
        return f"Token({self.type.name})"

    @property
    def has_payload(self) -> bool:
        """Return True for IDENTIFIER, STRING and NUMBER tokens."""
        return self.type in PAYLOAD_TYPES

    @property
    def lexeme(self) -> str:
        """
        Reconstruct the source text this token was scanned from.

        Numbers are rendered from their value, so "1.50" comes back as
        "1.5" and "007" as "7".
        """
        if self.type is TokenType.IDENTIFIER:
            return self.value
        if self.type is TokenType.STRING:
            return f'"{self.value}"'
        if self.type is TokenType.NUMBER:
            return format_float32(self.value)
        return _FIXED_LEXEMES[self.type]

    def is_keyword(self) -> bool:
        """Return True if this token is a reserved word."""
        return self.type in KEYWORDS.values()
