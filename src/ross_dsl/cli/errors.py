"""
CLI Error Handling
==================

Consistent error reporting and exit codes for the command-line tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn, Optional

import click

from ross_dsl.errors import ParserError, RossDslError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Program failed to compile
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    max_location_length: Optional[int] = None,
) -> NoReturn:
    """
    Report an exception raised while running a CLI tool and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        max_location_length: Excerpt width for compiler diagnostics

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, ParserError):
        # Diagnostic trees span several lines; print them unprefixed
        click.echo(error.render(max_location_length), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, RossDslError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
