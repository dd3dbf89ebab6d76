"""
Offset Index Builder
====================

This module scans a FASTA file once and produces the sidecar offset table
consumed by OffsetIndex and RecordStore.get_by_id(use_index=True).

Every identifier token found on any line is recorded together with the
byte offset of the start of that line. The offset is tracked as a running
total of the raw byte length of each line, terminator included, so it
stays exact for both LF and CRLF files.

Usage
-----
    >>> from fasta_search.store import build_index, write_index
    >>> entries = build_index("16S.fasta")
    >>> write_index("16S.index", entries)
    >>> entries[0]
    IndexEntry(identifier='NR_118889.1', offset=0)

The input is not validated as a record file. Lines are decoded only to
search them for tokens.
"""

from pathlib import Path
from typing import Iterable, Iterator, Union
import logging

from fasta_search.errors import ErrorKind, IndexBuildError
from fasta_search.store.index import IndexEntry
from fasta_search.store.validator import find_identifiers

# Logger for this module
logger = logging.getLogger(__name__)


def iter_index_entries(
    input_path: Union[str, Path],
    encoding: str = "utf-8",
) -> Iterator[IndexEntry]:
    """
    Lazily yield index entries in file order.

    Raises:
        IndexBuildError: CANT_READ_FILE if the input cannot be read or decoded
    """
    input_path = Path(input_path)
    offset = 0
    try:
        with input_path.open("rb") as f:
            for raw in f:
                line = raw.decode(encoding).rstrip("\r\n")
                for identifier in find_identifiers(line):
                    yield IndexEntry(identifier=identifier, offset=offset)
                offset += len(raw)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not index {input_path}: {e}")
        raise IndexBuildError(ErrorKind.CANT_READ_FILE) from e


def build_index(
    input_path: Union[str, Path],
    encoding: str = "utf-8",
) -> list[IndexEntry]:
    """
    Scan a FASTA file and collect every (identifier, line offset) pair.

    Duplicate identifiers across lines produce duplicate entries. When the
    result is loaded into an OffsetIndex the last one wins.

    Args:
        input_path: FASTA file to scan
        encoding: Text encoding of the file

    Returns:
        Entries in file order

    Raises:
        IndexBuildError: If the input cannot be read
    """
    entries = list(iter_index_entries(input_path, encoding=encoding))
    logger.info(f"Indexed {len(entries)} identifiers in {input_path}")
    return entries


def write_index(path: Union[str, Path], entries: Iterable[IndexEntry]) -> int:
    """
    Write entries to a sidecar file, one "identifier offset" line each.

    Returns:
        Number of entries written

    Raises:
        OSError: If the output file cannot be written
    """
    path = Path(path)
    count = 0
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for entry in entries:
            f.write(entry.to_line() + "\n")
            count += 1
    logger.debug(f"Wrote {count} index entries to {path}")
    return count
