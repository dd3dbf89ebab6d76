"""
FASTA Search - Record Store and Search Tools for FASTA Files
============================================================

This package provides sequential and indexed access to the records of a
single-line FASTA file (one header line followed by one sequence line per
record), plus pattern search over sequence identifiers and bodies.

Main Components
---------------
- **store**: The record store (fasta_search.store)
    Validates a FASTA file once, then retrieves records by line position
    or identifier, and searches by composition or metadata

- **store.builder**: Offset index builder (fsindex)
    Scans a FASTA file and writes an identifier to byte offset sidecar file

- **cli**: Command-line tools (fsearch, fsindex)

Quick Start
-----------
Retrieve a record:
    >>> from fasta_search import RecordStore
    >>> with RecordStore.open("16S.fasta").unwrap() as store:
    ...     print(store.get_by_id("NR_118889.1").value)

Build an index:
    >>> from fasta_search import build_index, write_index
    >>> write_index("16S.index", build_index("16S.fasta"))

Or use the command-line tools:
    $ fsindex 16S.fasta 16S.index
    $ fsearch 16S.fasta get NR_118889.1 --index 16S.index
    $ fsearch 16S.fasta composition "AC*GT" --wildcard

Reference
---------
- FASTA format: https://en.wikipedia.org/wiki/FASTA_format
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from fasta_search.config import StoreConfig
from fasta_search.errors import (
    ErrorKind,
    describe_error,
    FastaError,
    StoreOpenError,
    RetrievalError,
    IndexFileError,
    IndexBuildError,
)
from fasta_search.store import (
    RecordStore,
    Outcome,
    OffsetIndex,
    IndexEntry,
    build_index,
    write_index,
    is_header_line,
    is_body_symbol,
    find_identifiers,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "StoreConfig",
    # Errors
    "ErrorKind",
    "describe_error",
    "FastaError",
    "StoreOpenError",
    "RetrievalError",
    "IndexFileError",
    "IndexBuildError",
    # Store
    "RecordStore",
    "Outcome",
    "OffsetIndex",
    "IndexEntry",
    "build_index",
    "write_index",
    "is_header_line",
    "is_body_symbol",
    "find_identifiers",
]
