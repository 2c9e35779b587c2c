"""
loxlex - Scanner for the Lox Scripting Language
===============================================

This package implements the lexical analysis stage for Lox, a small,
dynamically-typed scripting language. It converts raw source text into
a sequence of classified tokens for a parser to consume.

Main Components
---------------
- **tokens**: the closed TokenType vocabulary and the immutable Token
- **scanner**: the pull-based Scanner with error recovery
- **errors**: lexical diagnostics and the Diagnostics collector
- **config**: ScannerOptions
- **cli**: the ``loxlex`` token dumper / REPL

Quick Start
-----------
Tokenize a string:
    >>> from loxlex import tokenize
    >>> tokenize("var a = 1;")
    [Token(VAR), Token(IDENTIFIER, 'a'), Token(EQUAL), Token(NUMBER, 1.0), Token(SEMICOLON)]

Pull tokens one at a time:
    >>> from loxlex import Scanner
    >>> scanner = Scanner("a != b")
    >>> scanner.scan_token()
    Token(IDENTIFIER, 'a')

Or use the command-line tool:
    $ loxlex script.lox
    $ loxlex            # interactive prompt
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from loxlex.config import ScannerOptions
from loxlex.errors import (
    Diagnostics,
    InternalScannerError,
    LoxLexError,
    ScanError,
    SourceLocation,
    UnexpectedCharacterError,
    UnterminatedStringError,
)
from loxlex.scanner import Scanner, scan, tokenize
from loxlex.tokens import KEYWORDS, Token, TokenType, parse_float32, to_float32

__all__ = [
    # Version info
    "__version__",
    # Scanner
    "Scanner",
    "scan",
    "tokenize",
    "ScannerOptions",
    # Tokens
    "Token",
    "TokenType",
    "KEYWORDS",
    "parse_float32",
    "to_float32",
    # Errors
    "LoxLexError",
    "ScanError",
    "UnterminatedStringError",
    "UnexpectedCharacterError",
    "InternalScannerError",
    "SourceLocation",
    "Diagnostics",
]
