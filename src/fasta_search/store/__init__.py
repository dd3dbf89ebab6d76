"""
FASTA Record Store
==================

This module provides access to single-line FASTA files:

- **RecordStore**: Validate a file once, then retrieve records by line
  position or identifier and search identifiers by body composition or
  header metadata
- **OffsetIndex**: Identifier to byte offset table used to start
  identifier lookups close to their record
- **build_index / write_index**: Produce the sidecar offset table
- **Outcome**: Success-or-error result returned by every store operation
- **Validators**: Header, body-symbol and identifier-token grammars

Quick Start
-----------
    >>> from fasta_search.store import RecordStore, build_index, write_index
    >>> write_index("16S.index", build_index("16S.fasta"))
    >>> with RecordStore.open("16S.fasta").unwrap() as store:
    ...     store.set_index_file("16S.index")
    ...     print(store.get_by_id("NR_118889.1", use_index=True).value)
"""

from fasta_search.store.validator import (
    HEADER_PATTERN,
    IDENTIFIER_PATTERN,
    is_header_line,
    is_body_symbol,
    is_body_line,
    first_invalid_symbol,
    find_identifiers,
)
from fasta_search.store.outcome import Outcome
from fasta_search.store.index import IndexEntry, OffsetIndex
from fasta_search.store.builder import (
    build_index,
    iter_index_entries,
    write_index,
)
from fasta_search.store.store import RecordStore, composition_regex

__all__ = [
    # Validators
    "HEADER_PATTERN",
    "IDENTIFIER_PATTERN",
    "is_header_line",
    "is_body_symbol",
    "is_body_line",
    "first_invalid_symbol",
    "find_identifiers",
    # Results
    "Outcome",
    # Offset index
    "IndexEntry",
    "OffsetIndex",
    "build_index",
    "iter_index_entries",
    "write_index",
    # Store
    "RecordStore",
    "composition_regex",
]
