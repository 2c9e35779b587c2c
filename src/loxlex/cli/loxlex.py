"""
loxlex - Lox Token Dumper
=========================

This module implements the command-line front end for the scanner. It
reads Lox source, scans it, and prints each token's structural
representation, one per line.

Usage Examples
--------------
Dump the tokens of a file:
    $ loxlex script.lox

Scan standard input as one session:
    $ echo 'print 1 + 2;' | loxlex -

Interactive prompt (each line is scanned on its own):
    $ loxlex
    > var a = 1;
    Token(VAR)
    Token(IDENTIFIER, 'a')
    Token(EQUAL)
    Token(NUMBER, 1.0)
    Token(SEMICOLON)

Exit Codes
----------
0 - Success
1 - Lexical errors in the input (batch mode only)
2 - Invalid arguments, missing or unreadable input file
3 - Internal error
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from loxlex import __version__
from loxlex.cli.errors import ExitCode, handle_cli_exception
from loxlex.config import ScannerOptions
from loxlex.errors import ScanError
from loxlex.scanner import Scanner

logger = logging.getLogger(__name__)

PROMPT = "> "

# Undecodable bytes become lone surrogates, which the scanner reports as
# unexpected characters instead of losing the whole input
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Settings shared by the batch and interactive modes.
    """

    def __init__(self, verbose: bool = False, quiet_errors: bool = False) -> None:
        self.verbose = verbose
        self.quiet_errors = quiet_errors

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.verbose else logging.INFO
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(message)s" if self.verbose else "%(message)s",
        )

    def print_error(self, error: ScanError) -> None:
        """Print a lexical diagnostic to stderr unless silenced."""
        if not self.quiet_errors:
            click.echo(str(error), err=True)

    def make_scanner(self, source: str, filename: str) -> Scanner:
        """
        Create a scanner whose diagnostics go to stderr.

        Logging of diagnostics is turned off because they are already
        printed through print_error.
        """
        options = ScannerOptions.from_env()
        options.filename = filename
        options.log_diagnostics = False
        return Scanner(source, options, on_error=self.print_error)


def dump_tokens(scanner: Scanner) -> int:
    """Print every token of a scan session. Returns the error count."""
    for token in scanner:
        click.echo(repr(token))
    return scanner.diagnostics.error_count()


def run_batch(ctx: Context, source: str, filename: str) -> int:
    """Scan a whole source text as one session."""
    scanner = ctx.make_scanner(source, filename)
    error_count = dump_tokens(scanner)
    logger.debug("Scanned %s: %d errors", filename, error_count)

    if error_count and not ctx.quiet_errors:
        error_word = "error" if error_count == 1 else "errors"
        click.echo(f"{error_count} {error_word}", err=True)
    return error_count


def open_stdin():
    """Open stdin as text, keeping undecodable bytes."""
    return click.open_file("-", encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS)


def run_repl(ctx: Context) -> None:
    """
    Read lines from stdin and scan each one as its own session.

    Lexical errors are reported but never end the loop; end of input does.
    """
    stdin = open_stdin()
    while True:
        click.echo(PROMPT, nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            break
        dump_tokens(ctx.make_scanner(line, "<stdin>"))


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-i", "--interactive",
    is_flag=True,
    help="Scan stdin line by line with a prompt (default when stdin is a terminal)",
)
@click.option(
    "--quiet-errors",
    is_flag=True,
    help="Do not print lexical errors",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="loxlex")
def main(
    input_file: Optional[Path],
    interactive: bool,
    quiet_errors: bool,
    verbose: bool,
) -> None:
    """
    Scan Lox source code and print its tokens.

    INPUT_FILE is the Lox source file to scan, or "-" for standard input.
    Without INPUT_FILE, standard input is scanned line by line at a
    "> " prompt if it is a terminal, and as a whole otherwise.

    \b
    Examples:
        loxlex script.lox            # Dump all tokens of a file
        cat script.lox | loxlex -    # Same, from stdin
        loxlex                       # Interactive prompt
    """
    if interactive and input_file is not None:
        raise click.UsageError("--interactive cannot be combined with INPUT_FILE")

    ctx = Context(verbose=verbose, quiet_errors=quiet_errors)
    ctx.setup_logging()

    try:
        if input_file is None and (interactive or sys.stdin.isatty()):
            run_repl(ctx)
            return

        if input_file is None or str(input_file) == "-":
            source = open_stdin().read()
            filename = "<stdin>"
        else:
            source = input_file.read_text(
                encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS
            )
            filename = str(input_file)

        error_count = run_batch(ctx, source, filename)

    except Exception as e:
        handle_cli_exception(e, verbose)

    if error_count:
        sys.exit(ExitCode.LEX_ERROR)


if __name__ == "__main__":
    main()
