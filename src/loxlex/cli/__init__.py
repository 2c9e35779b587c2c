"""
loxlex Command-Line Interface
=============================

This package provides the command-line front end for the scanner:

- **loxlex**: dump the tokens of a file, or scan lines interactively

The tool is implemented as a Click-based CLI application.
"""

__all__ = ["loxlex"]
