"""
CLI Error Handling
==================

Provides consistent error handling and exit codes for the CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    LEX_ERROR = 1        # One or more lexical errors in the input
    INVALID_ARGS = 2     # Invalid arguments, missing or unreadable files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception escaping a CLI command and exit.

    Lexical errors never get here; the scanner recovers from them.
    Undecodable bytes are read as unexpected characters rather than
    failing here. What remains is an unreadable file or a scanner bug
    (InternalScannerError).

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, (FileNotFoundError, PermissionError)):
        # Missing or unreadable input
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    click.echo(f"Internal error: {error}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.INTERNAL_ERROR)
