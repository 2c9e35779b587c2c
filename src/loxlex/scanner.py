"""
Lox Scanner (Tokenizer)
=======================

This module implements the lexical analysis stage for Lox. It converts
source text into a stream of tokens for the parser, one token per call.

Scanning Rules
--------------
- Whitespace (anything str.isspace() accepts) is skipped; each newline
  skipped this way advances the line counter used in diagnostics.
- Comments run from // to the end of the line and produce no token.
- ! = < > become != == <= >= when the next character is "=".
- Numbers are ASCII digits with at most one embedded ".", stored as
  32-bit floats. A second "." ends the number: 1.2.3 is 1.2 . 3
- Strings run to the next double quote. There are no escape sequences
  and strings may span lines.
- Identifiers start with a letter and continue with letters, digits
  and underscores. Exact matches against the keyword table become
  keyword tokens.

Error Recovery
--------------
Neither lexical error stops the scan. An unterminated string consumes
the rest of the input and produces no token. An unexpected character is
consumed on its own and scanning resumes after it. Both are reported to
the scanner's Diagnostics collector (and, by default, logged).

Example Usage
-------------
>>> from loxlex.scanner import Scanner
>>> scanner = Scanner('print "hi";')
>>> for token in scanner:
...     print(token)
Token(PRINT)
Token(STRING, 'hi')
Token(SEMICOLON)
"""

import logging
import string
from typing import Callable, Iterator, Optional

from loxlex.config import ScannerOptions
from loxlex.errors import (
    Diagnostics,
    InternalScannerError,
    ScanError,
    SourceLocation,
    UnexpectedCharacterError,
    UnterminatedStringError,
)
from loxlex.tokens import (
    EQUAL_SUFFIX_TOKENS,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    Token,
    TokenType,
    parse_float32,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Pull-based tokenizer over a single source string.

    Each call to scan_token() consumes exactly the characters of one
    token (plus any whitespace, comments and invalid input before it)
    and returns it. None means the source is exhausted; once exhausted,
    every further call returns None again.

    Usage:
        scanner = Scanner(source_text)
        while (token := scanner.scan_token()) is not None:
            handle(token)

    A Scanner is single-use. Create one per source string (one line in
    interactive mode, one whole file in batch mode).

    Attributes:
        options: ScannerOptions for this session
        diagnostics: Collector receiving every lexical error
        on_error: Optional callback invoked with each lexical error
    """

    DIGITS = string.digits

    def __init__(
        self,
        source: str,
        options: Optional[ScannerOptions] = None,
        diagnostics: Optional[Diagnostics] = None,
        on_error: Optional[Callable[[ScanError], None]] = None,
    ):
        """
        Initialize the scanner with source code.

        Args:
            source: The Lox source text to tokenize
            options: Session options (defaults to ScannerOptions())
            diagnostics: Collector for lexical errors (a new one if omitted)
            on_error: Callback invoked once per lexical error
        """
        self._source = source
        self.options = options or ScannerOptions()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.on_error = on_error

        # Current position in source
        self._pos = 0
        self._line = self.options.line_number

        # Start of the current line, for diagnostic columns
        self._line_start_pos = 0

        # One-token lookahead buffer for peek_token()
        self._peeked: Optional[Token] = None
        self._has_peeked = False

        logger.debug(
            "Scanning %s (%d characters)", self.options.filename, len(source)
        )

    # =========================================================================
    # Public State
    # =========================================================================

    @property
    def source(self) -> str:
        """The full source text. Fixed for the scanner's lifetime."""
        return self._source

    @property
    def position(self) -> int:
        """Offset of the cursor into source (never decreases)."""
        return self._pos

    @property
    def line(self) -> int:
        """Current line number used in diagnostics (never decreases)."""
        return self._line

    @property
    def at_end(self) -> bool:
        """True once the cursor has reached the end of source."""
        return self._at_end()

    # =========================================================================
    # Token Production
    # =========================================================================

    def scan_token(self) -> Optional[Token]:
        """
        Produce the next token.

        Returns:
            The next Token, or None if the source is exhausted
        """
        if self._has_peeked:
            token = self._peeked
            self._peeked = None
            self._has_peeked = False
            return token
        return self._scan()

    def peek_token(self) -> Optional[Token]:
        """
        Return the next token without consuming it.

        The token is scanned once and buffered, so diagnostics raised
        while scanning it are reported only once. The cursor and line
        counter already reflect the buffered token.
        """
        if not self._has_peeked:
            self._peeked = self._scan()
            self._has_peeked = True
        return self._peeked

    def tokenize(self) -> Iterator[Token]:
        """
        Generate the remaining tokens until the source is exhausted.

        Yields:
            Token objects in source order
        """
        while (token := self.scan_token()) is not None:
            yield token

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.scan_token()
        if token is None:
            raise StopIteration
        return token

    def _scan(self) -> Optional[Token]:
        """
        Skip to and scan the next token.

        Comments and lexical errors produce no token; the loop simply
        tries again from wherever the cursor ended up.
        """
        while True:
            self._skip_whitespace()

            if self._at_end():
                return None

            try:
                token = self._scan_token()
            except ScanError as error:
                self._report(error)
                continue

            if token is not None:
                return token

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self._source)

    def _peek(self) -> str:
        """
        Look at the character under the cursor without advancing.

        Returns empty string if past end of source.
        """
        if self._at_end():
            return ""
        return self._source[self._pos]

    def _advance(self) -> str:
        """Consume and return the current character."""
        if self._at_end():
            return ""
        char = self._source[self._pos]
        self._pos += 1
        return char

    def _match(self, expected: str) -> bool:
        """
        Consume next character if it matches expected.

        Returns:
            True if matched and consumed, False otherwise
        """
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace(self) -> None:
        """Skip a maximal run of whitespace, counting newlines."""
        while not self._at_end() and self._peek().isspace():
            if self._advance() == "\n":
                self._line += 1
                self._line_start_pos = self._pos

    def _skip_line_comment(self) -> None:
        """Skip to (but not past) the next newline or end of input."""
        end = self._source.find("\n", self._pos)
        self._pos = len(self._source) if end == -1 else end

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """
        Scan one token starting at the cursor.

        Returns:
            The scanned Token, or None if a comment was skipped

        Raises:
            ScanError: If the input at the cursor is not a valid token
        """
        char = self._peek()

        if char in self.DIGITS:
            return self._scan_number()

        if char == '"':
            return self._scan_string()

        if char.isalpha():
            return self._scan_identifier()

        return self._scan_operator()

    def _scan_operator(self) -> Optional[Token]:
        """Scan punctuation, an operator, or a // comment."""
        column = self._column()
        char = self._advance()

        if char in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[char])

        if char in EQUAL_SUFFIX_TOKENS:
            single, double = EQUAL_SUFFIX_TOKENS[char]
            if self._match("="):
                return Token(double)
            return Token(single)

        if char == "/":
            if self._match("/"):
                self._skip_line_comment()
                return None
            return Token(TokenType.SLASH)

        raise UnexpectedCharacterError(
            char,
            self._line,
            self._location(column),
            self._get_current_line(),
        )

    def _scan_number(self) -> Token:
        """
        Scan a number literal: digits with at most one embedded ".".

        A trailing "." is part of the literal ("1." is 1.0); a second
        "." is left for the next token.
        """
        start = self._pos
        found_dot = False

        while not self._at_end():
            char = self._peek()
            if char in self.DIGITS:
                self._advance()
            elif char == "." and not found_dot:
                found_dot = True
                self._advance()
            else:
                break

        lexeme = self._source[start:self._pos]
        try:
            value = parse_float32(lexeme)
        except ValueError as exc:
            raise InternalScannerError(
                f"number lexeme {lexeme!r} at offset {start} is not parseable"
            ) from exc

        return Token(TokenType.NUMBER, value)

    def _scan_string(self) -> Token:
        """
        Scan a double-quoted string literal.

        Raises:
            UnterminatedStringError: If no closing quote exists. The
                rest of the input is consumed first.
        """
        column = self._column()
        self._advance()  # consume opening "

        end = self._source.find('"', self._pos)
        if end == -1:
            self._pos = len(self._source)
            raise UnterminatedStringError(
                self._line,
                self._location(column),
                self._get_current_line(),
            )

        value = self._source[self._pos:end]
        self._pos = end + 1  # past closing "
        return Token(TokenType.STRING, value)

    def _scan_identifier(self) -> Token:
        """
        Scan an identifier or keyword.

        Keywords are recognised only by exact match of the whole
        lexeme, so "classic" is an identifier.
        """
        start = self._pos
        while not self._at_end() and (self._peek().isalnum() or self._peek() == "_"):
            self._advance()

        name = self._source[start:self._pos]

        if name in KEYWORDS:
            return Token(KEYWORDS[name])

        return Token(TokenType.IDENTIFIER, name)

    # =========================================================================
    # Error Reporting
    # =========================================================================

    def _column(self) -> int:
        """1-based column of the cursor on the current line."""
        return self._pos - self._line_start_pos + 1

    def _location(self, column: int) -> SourceLocation:
        return SourceLocation(self.options.filename, self._line, column)

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self._source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self._source)
        return self._source[self._line_start_pos:line_end]

    def _report(self, error: ScanError) -> None:
        """Hand a recoverable error to the diagnostics sink."""
        self.diagnostics.add(error)

        if self.options.log_diagnostics:
            logger.error("%s", error.message)

        if self.on_error is not None:
            self.on_error(error)


# =============================================================================
# Convenience Functions
# =============================================================================

def tokenize(source: str, options: Optional[ScannerOptions] = None) -> list[Token]:
    """
    Scan an entire source string.

    Diagnostics are logged (unless disabled in options) and otherwise
    discarded; use scan() to inspect them.
    """
    return list(Scanner(source, options))


def scan(
    source: str,
    options: Optional[ScannerOptions] = None,
) -> tuple[list[Token], Diagnostics]:
    """
    Scan an entire source string, returning tokens and diagnostics.

    Example:
        tokens, diagnostics = scan('var s = "oops;')
        if diagnostics.has_errors():
            print(diagnostics.report())
    """
    scanner = Scanner(source, options)
    tokens = list(scanner)
    return tokens, scanner.diagnostics
