"""
fsearch - FASTA Record Search Command-Line Interface
====================================================

This module implements the command-line interface over RecordStore.
Every command opens (and validates) the FASTA file given before the
command name.

Commands
--------
- **range**: Print records by ordinal line position
- **get**: Print one record by sequence identifier
- **batch**: Look up every identifier of a query file, write the records
  to an output file
- **composition**: List identifiers whose sequence contains a pattern
- **metadata**: List identifiers whose header contains a word

Usage Examples
--------------
Print three records starting at line 273:
    $ fsearch 16S.fasta range 273 3

Print a record by identifier:
    $ fsearch 16S.fasta get NR_115365.1

Batch lookup through an offset index:
    $ fsearch 16S.fasta batch query.txt results.txt --index 16S.index

Composition search with wildcards:
    $ fsearch 16S.fasta composition "ACTG*GTAC*CA" --wildcard

Metadata search:
    $ fsearch 16S.fasta metadata Streptomyces
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from fasta_search import __version__
from fasta_search.cli.errors import ExitCode, handle_cli_exception, setup_logging
from fasta_search.config import StoreConfig
from fasta_search.errors import ErrorKind
from fasta_search.store import RecordStore

# Configure logging
logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Holds the FASTA path and opens the store on first use, so that
    subcommand --help works without a readable file.
    """

    def __init__(self) -> None:
        self.fasta_file: Optional[Path] = None
        self.verbose: bool = False
        self.config: StoreConfig = StoreConfig.from_env()
        self.store: Optional[RecordStore] = None

    def open_store(self) -> RecordStore:
        """
        Open and validate the FASTA file.

        Raises:
            StoreOpenError: If the file is rejected or fails validation
        """
        if self.store is None:
            self.store = RecordStore.open(self.fasta_file, self.config).unwrap()
            logger.debug(f"{self.fasta_file}: {self.store.record_count} records")
        return self.store

    def close(self) -> None:
        if self.store is not None:
            self.store.close()


pass_context = click.make_pass_decorator(Context, ensure=True)


def read_query_file(path: Path) -> list[str]:
    """Read identifiers from a query file, one per line, skipping blanks."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


def echo_identifiers(identifiers: list[str]) -> None:
    for identifier in identifiers:
        click.echo(identifier)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.version_option(__version__, "--version", "-V", prog_name="fsearch")
@click.argument(
    "fasta_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging)",
)
@click.pass_context
def main(ctx: click.Context, fasta_file: Path, verbose: bool) -> None:
    """
    Search a single-line FASTA file.

    FASTA_FILE must contain one of: fasta, fna, ffn, faa, frn.

    \b
    Commands:
      range        Records by line position
      get          One record by sequence ID
      batch        Records for every ID in a query file
      composition  IDs whose sequence contains a pattern
      metadata     IDs whose header contains a word

    \b
    Examples:
      fsearch 16S.fasta range 273 3
      fsearch 16S.fasta get NR_115365.1
      fsearch 16S.fasta batch query.txt out.txt --index 16S.index
      fsearch 16S.fasta composition "AC*GT" --wildcard
      fsearch 16S.fasta metadata Streptomyces
    """
    state = ctx.ensure_object(Context)
    state.fasta_file = fasta_file
    state.verbose = verbose
    setup_logging(verbose, state.config)
    ctx.call_on_close(state.close)


# =============================================================================
# Range Command
# =============================================================================

@main.command("range")
@click.argument("line_number", type=int)
@click.argument("count", type=int)
@pass_context
def cmd_range(state: Context, line_number: int, count: int) -> None:
    """
    Print COUNT records starting at LINE_NUMBER.

    LINE_NUMBER must be odd (a header line) and greater than 0.

    \b
    Example:
      fsearch 16S.fasta range 273 3
    """
    try:
        if line_number <= 0 or line_number % 2 == 0:
            raise click.BadParameter(
                "Line number MUST be an odd number and greater than 0",
                param_hint="LINE_NUMBER",
            )
        if count <= 0:
            raise click.BadParameter(
                "Please enter in a valid number of sequences to get",
                param_hint="COUNT",
            )

        store = state.open_store()
        records = store.get_by_line_range(line_number, count).unwrap()
        click.echo(records, nl=False)

    except Exception as e:
        handle_cli_exception(e, state.verbose)


# =============================================================================
# Get Command
# =============================================================================

@main.command("get")
@click.argument("sequence_id")
@click.option(
    "-i", "--index",
    "index_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Offset index file to start the lookup from",
)
@pass_context
def cmd_get(state: Context, sequence_id: str, index_file: Optional[Path]) -> None:
    """
    Print the record whose header contains SEQUENCE_ID.

    \b
    Examples:
      fsearch 16S.fasta get NR_115365.1
      fsearch 16S.fasta get NR_115365.1 --index 16S.index
    """
    try:
        store = state.open_store()
        if index_file is not None:
            store.set_index_file(index_file).unwrap()

        outcome = store.get_by_id(sequence_id, use_index=index_file is not None)
        if outcome.error == ErrorKind.SEQUENCE_NOT_FOUND:
            click.echo(f"Error, sequence {sequence_id} not found.", err=True)
            sys.exit(ExitCode.QUERY_ERROR)
        click.echo(outcome.unwrap())

    except Exception as e:
        handle_cli_exception(e, state.verbose)


# =============================================================================
# Batch Command
# =============================================================================

@main.command("batch")
@click.argument(
    "query_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-i", "--index",
    "index_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Offset index file to start each lookup from",
)
@pass_context
def cmd_batch(
    state: Context,
    query_file: Path,
    output_file: Path,
    index_file: Optional[Path],
) -> None:
    """
    Look up every sequence ID in QUERY_FILE and write the records to
    OUTPUT_FILE.

    QUERY_FILE holds one sequence ID per line. IDs that are not found are
    reported on stderr and skipped.

    \b
    Examples:
      fsearch 16S.fasta batch query.txt results.txt
      fsearch 16S.fasta batch query.txt results.txt --index 16S.index
    """
    try:
        store = state.open_store()
        if index_file is not None:
            store.set_index_file(index_file).unwrap()

        identifiers = read_query_file(query_file)
        found = 0
        parts = []
        for identifier, outcome in store.get_by_ids(identifiers, use_index=index_file is not None):
            if outcome.ok:
                parts.append(outcome.value + "\n")
                found += 1
            elif outcome.error == ErrorKind.SEQUENCE_NOT_FOUND:
                click.echo(f"Error, sequence {identifier} not found.", err=True)
            else:
                outcome.unwrap()

        output_file.write_text("".join(parts), encoding="utf-8")
        logger.info(f"Wrote {found} of {len(identifiers)} records to {output_file}")

    except Exception as e:
        handle_cli_exception(e, state.verbose)


# =============================================================================
# Search Commands
# =============================================================================

@main.command("composition")
@click.argument("pattern")
@click.option(
    "-w", "--wildcard",
    is_flag=True,
    help="Treat '*' as zero or more letters",
)
@pass_context
def cmd_composition(state: Context, pattern: str, wildcard: bool) -> None:
    """
    List sequence IDs whose sequence contains PATTERN.

    \b
    Examples:
      fsearch 16S.fasta composition CTGGTACGGTCAACTT
      fsearch 16S.fasta composition "ACTG*GTAC*CA" --wildcard
    """
    try:
        store = state.open_store()
        echo_identifiers(store.get_ids_by_composition(pattern, wildcard).unwrap())
    except Exception as e:
        handle_cli_exception(e, state.verbose)


@main.command("metadata")
@click.argument("text")
@pass_context
def cmd_metadata(state: Context, text: str) -> None:
    """
    List sequence IDs on header lines containing TEXT as a whole word
    (case-insensitive).

    \b
    Example:
      fsearch 16S.fasta metadata Streptomyces
    """
    try:
        store = state.open_store()
        echo_identifiers(store.get_ids_by_metadata(text).unwrap())
    except Exception as e:
        handle_cli_exception(e, state.verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
