"""
Scanner Configuration
=====================

Options that shape how a scan session reports diagnostics. None of them
change the token stream itself. Configuration can come from:
- Default values (defined here)
- Explicit keyword arguments
- Environment variables (ScannerOptions.from_env)
"""

from dataclasses import dataclass
import os


_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class ScannerOptions:
    """
    Configuration for one scan session.

    Attributes:
        filename: Name shown in diagnostic locations (default: "<input>")
        line_number: Line number of the first source line (default: 1)
        log_diagnostics: Also emit each diagnostic through the
            "loxlex.scanner" logger at ERROR level (default: True)
    """
    filename: str = "<input>"
    line_number: int = 1
    log_diagnostics: bool = True

    @classmethod
    def from_env(cls) -> "ScannerOptions":
        """
        Create ScannerOptions from environment variables.

        Environment variables (all optional):
            LOXLEX_FILENAME: Filename used in diagnostics
            LOXLEX_LINE_NUMBER: Starting line number (integer)
            LOXLEX_LOG_DIAGNOSTICS: "0", "false", "no" or "off" to disable

        Returns:
            ScannerOptions with values from environment variables
        """
        options = cls()

        if filename := os.environ.get("LOXLEX_FILENAME"):
            options.filename = filename

        if line_number := os.environ.get("LOXLEX_LINE_NUMBER"):
            try:
                options.line_number = int(line_number)
            except ValueError:
                pass  # Ignore invalid values

        if log_diagnostics := os.environ.get("LOXLEX_LOG_DIAGNOSTICS"):
            options.log_diagnostics = log_diagnostics.lower() not in _FALSE_VALUES

        return options
