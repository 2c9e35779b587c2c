"""
loxlex Error Hierarchy
======================

This module defines the exception hierarchy for the scanner. All
exceptions inherit from LoxLexError, allowing callers to catch every
package error with a single except clause if desired.

Exception Hierarchy
-------------------
LoxLexError (base)
├── ScanError - recoverable lexical diagnostics
│   ├── UnterminatedStringError - missing closing quote
│   └── UnexpectedCharacterError - character that starts no token
└── InternalScannerError - scanner invariant violated (a bug, not bad input)

Recoverable vs. Fatal
---------------------
ScanError instances are never allowed to escape the scanner. They are
raised internally, caught in the step loop, handed to a Diagnostics
collector, and scanning continues with the next token. Only
InternalScannerError propagates to the caller.

Error messages follow this format when rendered with str():
    filename:line:column: error: Unexpected character: @, line 1.
        var a = @;
                ^
    hint: suggestion for fixing (when available)

The bare ``message`` attribute holds just the human-readable diagnostic,
for example ``Unterminated string, line 3.``
"""

from dataclasses import dataclass
from typing import Iterator, Optional


# Lone surrogates (undecodable input bytes read with "surrogateescape")
# cannot be written to a UTF-8 terminal
_SURROGATES = range(0xD800, 0xE000)


def display_char(char: str) -> str:
    """
    Render one source character for a diagnostic message.

    Bytes smuggled in through "surrogateescape" decoding are shown as
    \\xNN; every other character is shown as is.
    """
    code = ord(char)
    if 0xDC80 <= code <= 0xDCFF:
        return f"\\x{code - 0xDC00:02x}"
    if code in _SURROGATES:
        return f"\\u{code:04x}"
    return char


def printable(text: str) -> str:
    """Replace lone surrogates with U+FFFD, one for one."""
    return "".join("\ufffd" if ord(c) in _SURROGATES else c for c in text)


# =============================================================================
# Base Exception Class
# =============================================================================

class LoxLexError(Exception):
    """
    Base exception for all loxlex errors.

        try:
            tokens = tokenize(source)
        except LoxLexError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Tokens do not carry locations; only diagnostics do.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Lexical Diagnostics
# =============================================================================

class ScanError(LoxLexError):
    """
    Recoverable lexical error.

    Attributes:
        message: The diagnostic text (e.g. "Unterminated string, line 1.")
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text of the offending line (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            script.lox:2:9: error: Unexpected character: @, line 2.
                var a = @;
                        ^
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer. A string spanning lines can
        # leave the column past the end of the line shown; no caret then.
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {printable(self.source_line)}")
            if 0 < self.location.column <= len(self.source_line) + 1:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnterminatedStringError(ScanError):
    """
    String literal with no closing quote before end of input.

    Example:
        print "hello;
    """

    def __init__(
        self,
        line: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.line = line
        super().__init__(
            f"Unterminated string, line {line}.",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class UnexpectedCharacterError(ScanError):
    """
    Character that does not start any token.

    The scanner consumes exactly this one character and resumes.
    """

    def __init__(
        self,
        char: str,
        line: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        self.line = line
        super().__init__(
            f"Unexpected character: {display_char(char)}, line {line}.",
            location=location,
            source_line=source_line,
        )


class InternalScannerError(LoxLexError):
    """
    Scanner invariant violated.

    Raised when a lexeme assembled by the scanner turns out to be
    unparseable. Digit scanning only ever consumes valid numeric
    characters, so reaching this means the scanner itself is broken.
    """
    pass


# =============================================================================
# Diagnostics Collection
# =============================================================================

class Diagnostics:
    """
    Collects lexical errors reported during a scan session.

    The scanner hands every recoverable error to a collector instead of
    printing it, so callers decide how (and whether) to show them.

    Example:
        diagnostics = Diagnostics()
        tokens = list(Scanner(source, diagnostics=diagnostics))

        if diagnostics.has_errors():
            print(diagnostics.report())
    """

    def __init__(self) -> None:
        self.errors: list[ScanError] = []

    def add(self, error: ScanError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def messages(self) -> list[str]:
        """Return the bare diagnostic messages, in report order."""
        return [error.message for error in self.errors]

    def report(self) -> str:
        """
        Format all errors for display.

        Returns:
            Formatted string with every error followed by a summary line
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        error_word = "error" if len(self.errors) == 1 else "errors"
        lines.append(f"{len(self.errors)} {error_word}")

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors."""
        self.errors.clear()

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[ScanError]:
        return iter(self.errors)
