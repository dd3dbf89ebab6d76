"""
fsindex - Offset Index Builder Command-Line Interface
=====================================================

Scans a FASTA file once and writes the sidecar offset index used by
`fsearch ... --index`.

Usage Examples
--------------
    $ fsindex 16S.fasta 16S.index
    $ fsindex -v 16S.fasta 16S.index

Output format (one entry per line):
    NR_118889.1 0
    NR_118899.1 1523
"""

import logging
from pathlib import Path

import click

from fasta_search import __version__
from fasta_search.cli.errors import handle_cli_exception, setup_logging
from fasta_search.config import StoreConfig
from fasta_search.store import build_index, write_index

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(__version__, "--version", "-V", prog_name="fsindex")
@click.argument(
    "fasta_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
def main(fasta_file: Path, output_file: Path, verbose: bool) -> None:
    """
    Build an offset index for FASTA_FILE and write it to OUTPUT_FILE.

    Every sequence ID found on any line is written with the byte offset of
    the start of that line.

    \b
    Example:
      fsindex 16S.fasta 16S.index
    """
    config = StoreConfig.from_env()
    setup_logging(verbose, config)

    try:
        entries = build_index(fasta_file, encoding=config.encoding)
        count = write_index(output_file, entries)

        if verbose:
            unique = len({entry.identifier for entry in entries})
            click.echo(f"Created {output_file}")
            click.echo(f"  Entries: {count}")
            click.echo(f"  Unique IDs: {unique}")
        else:
            click.echo(f"Created {output_file} ({count} entries)")

    except Exception as e:
        handle_cli_exception(e, verbose)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    main()
