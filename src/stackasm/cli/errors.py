"""
CLI Error Handling
==================

Consistent error messages and exit codes for the command-line tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from stackasm.errors import ConfigError, SourceReadError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    SOURCE_ERRORS = 1    # Source parsed, diagnostics reported
    INVALID_INPUT = 2    # Unreadable input, bad arguments or configuration
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Exception handler for the CLI tools.

    Prints the error, optionally with a traceback for internal errors,
    and exits with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, (SourceReadError, ConfigError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_INPUT)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
