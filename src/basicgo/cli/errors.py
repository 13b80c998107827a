"""
CLI Error Handling
==================

Provides consistent error reporting and exit codes for the command-line
tool.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from basicgo.errors import BasicGoError, ToolchainError


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Compilation or toolchain error
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print the full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, ToolchainError):
        click.echo(f"Toolchain {error}", err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, BasicGoError):
        # Compiler errors already carry the "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
