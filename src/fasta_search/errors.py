"""
FASTA Search Error Taxonomy
===========================

This module defines the error kinds reported by the record store and the
exception hierarchy used by the index builder and the command-line tools.

Error Kinds
-----------
Store operations never raise across their public boundary. Instead each
operation returns an Outcome (see fasta_search.store.outcome) carrying one
of the ErrorKind values below. Every kind maps to exactly one descriptive
message through describe_error().

Exception Hierarchy
-------------------
FastaError (base)
├── StoreOpenError - the FASTA file could not be opened or validated
├── RetrievalError - a retrieval or search operation failed
├── IndexFileError - a sidecar index file could not be loaded
└── IndexBuildError - the index builder could not scan its input

Outcome.unwrap() converts a failed outcome into the matching exception,
which is how the CLI tools surface store errors.
"""

from enum import IntEnum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(IntEnum):
    """
    Every failure a record store operation can report.

    NONE is the state of a successful operation.
    """
    NONE = 0
    INVALID_LINE_NUMBER = 1
    CANT_READ_LINE = 2
    SEQUENCE_NOT_FOUND = 3
    WRONG_FILE_FORMAT = 4
    CANT_READ_FILE = 5
    BAD_FILE = 6
    EMPTY_FILE = 7
    COULDNT_SET_INDEX_FILE = 8
    COULDNT_LOAD_INDEX_ENTRY = 9
    BAD_NUCLEOBASE = 10


_MESSAGES = {
    ErrorKind.NONE: "None.",
    ErrorKind.CANT_READ_LINE: "Could not read line.",
    ErrorKind.SEQUENCE_NOT_FOUND: "Specific sequence requested was not found.",
    ErrorKind.WRONG_FILE_FORMAT: "Wrong DNA file given, must be of FASTA format.",
    ErrorKind.CANT_READ_FILE: (
        "Could not read FASTA file, please make sure it exists "
        "and adequate permissions are set."
    ),
    ErrorKind.EMPTY_FILE: "FASTA file seems to be empty.",
    ErrorKind.COULDNT_SET_INDEX_FILE: (
        "Could not set Index file. Please make sure it exists."
    ),
    ErrorKind.COULDNT_LOAD_INDEX_ENTRY: (
        "Failed to load an Index Entry. "
        "Please check Index file and make sure that it is valid."
    ),
    ErrorKind.BAD_NUCLEOBASE: (
        "Bad Nucleobase given. "
        "Please make sure that all given Nucleobases range from A to Z."
    ),
}


def describe_error(
    kind: ErrorKind,
    line: Optional[int] = None,
    total_lines: Optional[int] = None,
) -> str:
    """
    Map an error kind to its user-visible message.

    Args:
        kind: The error kind to describe
        line: Line at which a BAD_FILE scan stopped
        total_lines: Number of lines in the file, reported for
            INVALID_LINE_NUMBER

    Returns:
        The message, always prefixed with "Error: "

    Example:
        >>> describe_error(ErrorKind.BAD_FILE, line=7)
        'Error: FASTA file contains missing information or is corrupt. Possible line of fault: 7'
    """
    if kind == ErrorKind.BAD_FILE:
        text = (
            "FASTA file contains missing information or is corrupt. "
            f"Possible line of fault: {line if line is not None else 0}"
        )
    elif kind == ErrorKind.INVALID_LINE_NUMBER:
        if total_lines is None:
            text = "Invalid line number entered."
        else:
            text = f"Invalid line number entered. Maximum is {total_lines:,}"
    else:
        text = _MESSAGES[kind]
    return f"Error: {text}"


# =============================================================================
# Exceptions
# =============================================================================

class FastaError(Exception):
    """
    Base exception for all FASTA search errors.

    Attributes:
        kind: The ErrorKind this exception reports
        line: Fault line for BAD_FILE errors (optional)
        total_lines: Line count reported with INVALID_LINE_NUMBER (optional)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        line: Optional[int] = None,
        total_lines: Optional[int] = None,
    ):
        self.kind = kind
        self.line = line
        self.total_lines = total_lines
        if message is None:
            message = describe_error(kind, line=line, total_lines=total_lines)
        super().__init__(message)


class StoreOpenError(FastaError):
    """
    The FASTA file could not be opened as a record store.

    Raised for WRONG_FILE_FORMAT, CANT_READ_FILE, BAD_FILE and EMPTY_FILE.
    These are terminal for the store: a fresh open is required.
    """
    pass


class RetrievalError(FastaError):
    """
    A retrieval or search operation failed.

    Raised for INVALID_LINE_NUMBER, CANT_READ_LINE, SEQUENCE_NOT_FOUND and
    BAD_NUCLEOBASE. The store stays usable for the next operation.
    """
    pass


class IndexFileError(FastaError):
    """A sidecar index file could not be read or contains a malformed entry."""
    pass


class IndexBuildError(FastaError):
    """The index builder could not read its FASTA input."""
    pass


_EXCEPTION_FOR_KIND = {
    ErrorKind.WRONG_FILE_FORMAT: StoreOpenError,
    ErrorKind.CANT_READ_FILE: StoreOpenError,
    ErrorKind.BAD_FILE: StoreOpenError,
    ErrorKind.EMPTY_FILE: StoreOpenError,
    ErrorKind.INVALID_LINE_NUMBER: RetrievalError,
    ErrorKind.CANT_READ_LINE: RetrievalError,
    ErrorKind.SEQUENCE_NOT_FOUND: RetrievalError,
    ErrorKind.BAD_NUCLEOBASE: RetrievalError,
    ErrorKind.COULDNT_SET_INDEX_FILE: IndexFileError,
    ErrorKind.COULDNT_LOAD_INDEX_ENTRY: IndexFileError,
}


def error_for_kind(
    kind: ErrorKind,
    line: Optional[int] = None,
    total_lines: Optional[int] = None,
) -> FastaError:
    """
    Build the exception that reports the given error kind.

    Raises:
        ValueError: If kind is ErrorKind.NONE
    """
    if kind == ErrorKind.NONE:
        raise ValueError("ErrorKind.NONE does not describe a failure")
    cls = _EXCEPTION_FOR_KIND.get(kind, FastaError)
    return cls(kind, line=line, total_lines=total_lines)
