"""
FASTA Record Store
==================

This module provides the RecordStore class: sequential and indexed access
to the records of a single-line FASTA file, plus pattern search over
identifiers and sequence bodies.

File Layout
-----------
A record is exactly two lines, a header followed by a body:

    >NR_118889.1 Amycolatopsis azurea strain NRRL 11412 16S ribosomal RNA
    GGTCTNATACCGGATATAACAACTCATGGCATGGTTGGTAGTGGAAAGCTCCGGCGGT

Headers occupy the odd 1-based line numbers and bodies the even ones.
Multi-line bodies and blank lines are not supported.

Validation
----------
The whole file is scanned once when the store is opened. This is the only
time the structure is checked; later operations trust the file.

Results
-------
Operations on an open store never raise. Each returns an Outcome holding either the value
or an ErrorKind, and every operation rewinds the read cursor before it
scans, so two identical calls always return identical results.

Usage Examples
--------------
    >>> from fasta_search.store import RecordStore
    >>> outcome = RecordStore.open("16S.fasta")
    >>> if not outcome.ok:
    ...     print(outcome.message)
    >>> with outcome.value as store:
    ...     print(store.get_by_line_range(1, 2).value)
    ...     print(store.get_by_id("NR_118889.1").value)
    ...     print(store.get_ids_by_composition("AC*GT", wildcard=True).value)
"""

from pathlib import Path
from typing import BinaryIO, Iterable, Iterator, Optional, Union
import logging
import re

from fasta_search.config import StoreConfig
from fasta_search.errors import ErrorKind, IndexFileError
from fasta_search.store.index import OffsetIndex
from fasta_search.store.outcome import Outcome
from fasta_search.store.validator import (
    BODY_SYMBOL_CLASS,
    find_identifiers,
    first_invalid_symbol,
    is_body_line,
    is_header_line,
)

# Logger for this module
logger = logging.getLogger(__name__)

# Sub-pattern a wildcard '*' expands to
WILDCARD_EXPANSION = f"{BODY_SYMBOL_CLASS}*"


def _decode_line(raw: bytes, encoding: str) -> str:
    """Decode a raw line and drop one LF or CRLF terminator."""
    line = raw.decode(encoding)
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def composition_regex(pattern: str, wildcard: bool = False) -> str:
    """
    Translate a composition query into a regular expression.

    With wildcard set, every '*' matches zero or more letters and all other
    characters match literally. Without it the pattern is used as is (the
    caller has already checked it only holds body symbols).

    Example:
        >>> composition_regex("AC*GT", wildcard=True)
        'AC[A-Za-z]*GT'
    """
    if not wildcard:
        return pattern
    return WILDCARD_EXPANSION.join(re.escape(part) for part in pattern.split("*"))


class RecordStore:
    """
    Read-only store over one FASTA file.

    Stores are created with RecordStore.open(), which validates the file.
    A store owns its file handle until close() is called; use it as a
    context manager to release the handle deterministically.

    Not safe for concurrent use: the read cursor is shared by all
    operations.

    A closed store must not be used. Every retrieval and search rewinds the
    handle first, so calling one after close() raises ValueError.
    """

    def __init__(
        self,
        path: Path,
        handle: BinaryIO,
        total_lines: int,
        config: Optional[StoreConfig] = None,
    ) -> None:
        self._path = path
        self._handle = handle
        self._total_lines = total_lines
        self._config = config or StoreConfig()
        self._index: Optional[OffsetIndex] = None

    # ------------------------------------------------------------------
    # Opening and validation
    # ------------------------------------------------------------------

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        config: Optional[StoreConfig] = None,
    ) -> Outcome["RecordStore"]:
        """
        Open and validate a FASTA file.

        The path must contain one of the recognized extension substrings
        (fasta, fna, ffn, faa, frn). The file is then scanned once: every
        odd line must be a header and every even line a body made only of
        letters.

        Returns:
            Outcome holding the store, or one of WRONG_FILE_FORMAT,
            CANT_READ_FILE, BAD_FILE (with the fault line) or EMPTY_FILE.
            The handle is closed on every failure path.
        """
        config = config or StoreConfig()
        path = Path(path)

        if not config.accepts_path(str(path)):
            logger.warning(f"Rejected {path}: not a recognized FASTA extension")
            return Outcome.failure(ErrorKind.WRONG_FILE_FORMAT)

        try:
            handle = path.open("rb")
        except OSError as e:
            logger.error(f"Could not open {path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_FILE)

        try:
            error, lines_read = cls._validate(handle, config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            handle.close()
            logger.error(f"Could not read {path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_FILE)

        if error != ErrorKind.NONE:
            handle.close()
            logger.warning(f"Validation of {path} failed with {error.name} at line {lines_read}")
            return Outcome.failure(error, line=lines_read)

        store = cls(path, handle, lines_read, config)
        store.reset()
        logger.debug(f"Opened {path}: {lines_read} lines, {lines_read // 2} records")
        return Outcome.success(store)

    @staticmethod
    def _validate(handle: BinaryIO, encoding: str) -> tuple[ErrorKind, int]:
        """
        Scan the whole file once, checking header/body alternation.

        Returns:
            (error, lines_read). On failure lines_read is the line at which
            the scan stopped.
        """
        lines_read = 0
        for raw in handle:
            lines_read += 1
            line = _decode_line(raw, encoding)
            if lines_read % 2 == 1:
                if not is_header_line(line):
                    return ErrorKind.BAD_FILE, lines_read
            elif not is_body_line(line):
                return ErrorKind.BAD_FILE, lines_read

        if lines_read == 0:
            return ErrorKind.EMPTY_FILE, 0

        # A trailing header with no body line
        if lines_read % 2 == 1:
            return ErrorKind.BAD_FILE, lines_read

        return ErrorKind.NONE, lines_read

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def path(self) -> Path:
        return self._path

    @property
    def total_lines(self) -> int:
        """Number of lines counted when the store was opened."""
        return self._total_lines

    @property
    def record_count(self) -> int:
        return self._total_lines // 2

    @property
    def index(self) -> Optional[OffsetIndex]:
        """The attached offset index, if any."""
        return self._index

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def is_ready(self) -> bool:
        """Return True if the store's file handle is open."""
        return self._handle is not None and not self._handle.closed

    def reset(self) -> None:
        """Rewind the read cursor to the first byte of the file."""
        self._handle.seek(0)

    def close(self) -> None:
        """Release the file handle. Safe to call more than once."""
        if not self._handle.closed:
            self._handle.close()
            logger.debug(f"Closed {self._path}")

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RecordStore(path={str(self._path)!r}, total_lines={self._total_lines})"

    # ------------------------------------------------------------------
    # Line reading
    # ------------------------------------------------------------------

    def _read_line(self) -> Optional[str]:
        """Read the next line at the cursor. Returns None at end of file."""
        raw = self._handle.readline()
        if not raw:
            return None
        return _decode_line(raw, self._config.encoding)

    def _iter_lines(self) -> Iterator[str]:
        """Yield lines from the cursor to end of file."""
        while (line := self._read_line()) is not None:
            yield line

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def get_by_line_range(self, line_number: int, count: int) -> Outcome[str]:
        """
        Retrieve count records starting at a 1-based line number.

        line_number should be odd (a header line). Only the upper bound is
        checked here; the caller is responsible for parity.

        Returns:
            Outcome holding count * 2 lines, each followed by a newline.
            Reading stops early at end of file. Fails with
            INVALID_LINE_NUMBER or CANT_READ_LINE.
        """
        self.reset()

        if line_number > self._total_lines:
            return Outcome.failure(
                ErrorKind.INVALID_LINE_NUMBER,
                value="",
                total_lines=self._total_lines,
            )

        try:
            for _ in range(1, line_number):
                if self._read_line() is None:
                    break

            parts = []
            for _ in range(count * 2):
                line = self._read_line()
                if line is None:
                    break
                parts.append(line + "\n")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read line from {self._path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_LINE, value="")

        return Outcome.success("".join(parts))

    def get_by_id(self, identifier: str, use_index: bool = False) -> Outcome[str]:
        """
        Retrieve the record whose header contains ">" + identifier.

        The match is a substring match: the first header containing the
        requested text wins, so a longer identifier that merely contains
        the requested one can match.

        With use_index set, the identifier must be an exact key of the
        attached OffsetIndex. The cursor is then moved to the stored offset
        and the same substring scan runs forward from there; the index only
        relocates the starting point.

        Returns:
            Outcome holding "header\\nbody", or SEQUENCE_NOT_FOUND
        """
        self.reset()

        try:
            if use_index:
                offset = self._index.get(identifier) if self._index is not None else None
                if offset is None:
                    logger.debug(f"{identifier} is not in the offset index")
                    return Outcome.failure(ErrorKind.SEQUENCE_NOT_FOUND, value="")
                self._handle.seek(offset)

            needle = ">" + identifier
            for line in self._iter_lines():
                if needle in line:
                    body = self._read_line()
                    return Outcome.success(f"{line}\n{body or ''}")
        except (OSError, OverflowError, ValueError) as e:
            logger.error(f"Could not read line from {self._path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_LINE, value="")

        return Outcome.failure(ErrorKind.SEQUENCE_NOT_FOUND, value="")

    def get_by_ids(
        self,
        identifiers: Iterable[str],
        use_index: bool = False,
    ) -> list[tuple[str, Outcome[str]]]:
        """
        Look up several identifiers in turn.

        Returns:
            (identifier, outcome) pairs in the order given
        """
        return [(identifier, self.get_by_id(identifier, use_index)) for identifier in identifiers]

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def get_ids_by_composition(
        self,
        pattern: str,
        wildcard: bool = False,
    ) -> Outcome[list[str]]:
        """
        Find identifiers of records whose body contains a symbol pattern.

        Args:
            pattern: Sequence of body symbols to search for. With wildcard
                set, each '*' stands for zero or more letters.
            wildcard: Expand '*' instead of requiring every character to
                be a body symbol

        Returns:
            Outcome holding every identifier token of each matching
            record's header, in file order, or BAD_NUCLEOBASE
        """
        self.reset()

        if not wildcard:
            position = first_invalid_symbol(pattern)
            if position is not None:
                logger.debug(f"Invalid symbol {pattern[position]!r} at position {position} in {pattern!r}")
                return Outcome.failure(ErrorKind.BAD_NUCLEOBASE, value=[])

        matcher = re.compile(composition_regex(pattern, wildcard))
        identifiers: list[str] = []
        current_header = ""

        try:
            for line in self._iter_lines():
                if is_header_line(line):
                    current_header = line
                elif matcher.search(line):
                    identifiers.extend(find_identifiers(current_header))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read line from {self._path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_LINE, value=[])

        return Outcome.success(identifiers)

    def get_ids_by_metadata(self, text: str) -> Outcome[list[str]]:
        """
        Find identifiers on lines containing text as a whole word.

        Matching is case-insensitive and uses word boundaries, so "kingdom"
        does not match "Kingdom2". The text is matched literally. Blank
        text matches nothing; this departs from the original search tool,
        where an empty word pattern matched every line holding a word
        character and so returned every identifier.

        Returns:
            Outcome holding every identifier token of each matching line,
            in file order
        """
        self.reset()

        if not text.strip():
            return Outcome.success([])

        matcher = re.compile(rf"\b{re.escape(text)}\b", re.IGNORECASE)
        identifiers: list[str] = []

        try:
            for line in self._iter_lines():
                if matcher.search(line):
                    identifiers.extend(find_identifiers(line))
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read line from {self._path}: {e}")
            return Outcome.failure(ErrorKind.CANT_READ_LINE, value=[])

        return Outcome.success(identifiers)

    # ------------------------------------------------------------------
    # Offset index
    # ------------------------------------------------------------------

    def set_index_file(self, path: Union[str, Path]) -> Outcome[OffsetIndex]:
        """
        Load a sidecar index file and attach it to the store.

        The attached index is replaced only if the whole file loads.

        Returns:
            Outcome holding the loaded index, or COULDNT_SET_INDEX_FILE /
            COULDNT_LOAD_INDEX_ENTRY
        """
        try:
            index = OffsetIndex.load(path)
        except IndexFileError as e:
            return Outcome.failure(e.kind)

        self._index = index
        return Outcome.success(index)

    def attach_index(self, index: Optional[OffsetIndex]) -> None:
        """Attach an already built index, or detach with None."""
        self._index = index
