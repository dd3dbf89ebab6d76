"""
Offset Index
============

In-memory mapping from sequence identifier to the byte offset of the line
in which that identifier was found. The mapping is loaded from a sidecar
file produced by the index builder (see fasta_search.store.builder).

Sidecar Format
--------------
Plain text, one entry per line:

    NR_118889.1 0
    NR_118899.1 1523
    <identifier><space><decimal byte offset>

No header row. Entries appear in the order the builder emitted them. When
an identifier appears more than once the last entry wins.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union
import logging

from fasta_search.errors import ErrorKind, IndexFileError

# Logger for this module
logger = logging.getLogger(__name__)

# Offsets are signed 64-bit values
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class IndexEntry:
    """
    One row of a sidecar index.

    Attributes:
        identifier: Identifier token found in the FASTA file
        offset: Byte offset of the first byte of the line holding the token
    """
    identifier: str
    offset: int

    def to_line(self) -> str:
        """Format as a sidecar line (without the trailing newline)."""
        return f"{self.identifier} {self.offset}"

    @classmethod
    def from_line(cls, line: str) -> "IndexEntry":
        """
        Parse one sidecar line.

        Raises:
            ValueError: If the line does not hold exactly two fields or the
                offset is not a base-10 integer in 0..MAX_OFFSET
        """
        fields = line.split()
        if len(fields) != 2:
            raise ValueError(f"expected 2 fields, found {len(fields)}")
        identifier, offset_text = fields
        if not (offset_text.isascii() and offset_text.isdigit()):
            raise ValueError(f"invalid offset {offset_text!r}")
        offset = int(offset_text)
        if offset > MAX_OFFSET:
            raise ValueError(f"offset {offset_text} out of range")
        return cls(identifier=identifier, offset=offset)


@dataclass
class OffsetIndex:
    """
    Identifier to byte offset mapping.

    Example:
        >>> index = OffsetIndex.load("16S.index")
        >>> index.get("NR_118889.1")
        0
    """
    offsets: dict[str, int] = field(default_factory=dict)

    # Where the index was loaded from, if anywhere
    source: Optional[Path] = None

    @classmethod
    def from_entries(cls, entries: Iterable[IndexEntry]) -> "OffsetIndex":
        """Build an index from builder output. Later duplicates overwrite."""
        index = cls()
        for entry in entries:
            index.offsets[entry.identifier] = entry.offset
        return index

    @classmethod
    def parse_lines(cls, lines: Iterable[str]) -> "OffsetIndex":
        """
        Build an index from sidecar lines.

        Loading stops at the first malformed line.

        Raises:
            IndexFileError: COULDNT_LOAD_INDEX_ENTRY for a malformed line
        """
        index = cls()
        for number, line in enumerate(lines, start=1):
            try:
                entry = IndexEntry.from_line(line)
            except ValueError as e:
                logger.warning(f"Malformed index entry on line {number}: {e}")
                raise IndexFileError(ErrorKind.COULDNT_LOAD_INDEX_ENTRY, line=number) from e
            index.offsets[entry.identifier] = entry.offset
        return index

    @classmethod
    def load(cls, path: Union[str, Path]) -> "OffsetIndex":
        """
        Load a sidecar index file.

        Raises:
            IndexFileError: COULDNT_SET_INDEX_FILE if the file cannot be read,
                COULDNT_LOAD_INDEX_ENTRY if a line is malformed
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as f:
                index = cls.parse_lines(f)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read index file {path}: {e}")
            raise IndexFileError(ErrorKind.COULDNT_SET_INDEX_FILE) from e

        index.source = path
        logger.info(f"Loaded {len(index)} index entries from {path}")
        return index

    def get(self, identifier: str) -> Optional[int]:
        """Exact-key lookup. Returns the byte offset or None."""
        return self.offsets.get(identifier)

    @property
    def identifiers(self) -> list[str]:
        return list(self.offsets.keys())

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.offsets

    def __len__(self) -> int:
        return len(self.offsets)

    def __iter__(self) -> Iterator[str]:
        return iter(self.offsets)
