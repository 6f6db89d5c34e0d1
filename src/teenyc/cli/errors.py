"""
CLI Error Handling
==================

Maps compiler exceptions to a single terminal message and an exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes for the ttc command."""
    SUCCESS = 0
    COMPILE_ERROR = 1    # Lexical, syntax or semantic error in the program
    INVALID_ARGS = 2     # Bad arguments or unreadable source file
    INTERNAL_ERROR = 3   # Unexpected internal error
    OUTPUT_ERROR = 4     # Translation succeeded but the C file was not written


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while compiling and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print the full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    from teenyc.errors import OutputError, TeenyError

    if isinstance(error, OutputError):
        # Checked before TeenyError: the program itself was fine
        click.echo(f"Output error: {error.message}", err=True)
        sys.exit(ExitCode.OUTPUT_ERROR)

    elif isinstance(error, TeenyError):
        # Already formatted with location and "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.COMPILE_ERROR)

    elif isinstance(error, (UnicodeDecodeError, OSError)):
        click.echo(f"Error while trying to open source file: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
