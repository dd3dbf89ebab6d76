"""
Unified CLI Error Handling
==========================

Provides consistent error handling, logging setup and exit codes across
all CLI tools.
"""

import logging
import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from fasta_search.config import StoreConfig


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    QUERY_ERROR = 1      # Store, index or query error
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def setup_logging(verbose: bool, config: StoreConfig) -> None:
    """Configure logging from verbosity and the configured level."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format=config.log_format)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for all CLI tools.

    Formats the error message appropriately, optionally prints traceback
    in verbose mode, and exits with the correct exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from fasta_search.errors import FastaError

    if isinstance(error, FastaError):
        # Store messages already carry the "Error: " prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.QUERY_ERROR)

    elif isinstance(error, click.BadParameter):
        # Invalid command-line arguments
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, (FileNotFoundError, PermissionError)):
        # Missing or unreadable query/output files
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        # Unexpected internal error
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
