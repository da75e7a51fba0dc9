"""CLI layer for fepull.

This module provides the command-line interface for fepull, using Typer for
command definitions and Rich for formatted console output.

Links to third-party package documentation:
- Typer: https://typer.tiangolo.com/
- Rich: https://rich.readthedocs.io/en/latest/

Exports:
- app: The main Typer application instance
- formatters: Rich-based formatters for console output
- validators: Input validation helpers

Usage example:
    >>> from fepull.cli import app
    >>> app()  # Run the CLI application
"""

from .app import app, main
from . import formatters
from . import validators

__all__ = ["app", "main", "formatters", "validators"]
