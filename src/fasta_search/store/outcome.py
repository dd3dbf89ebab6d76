"""
Operation Outcomes
==================

Every RecordStore operation returns an Outcome instead of raising or
latching an error on the store. An outcome is either a success carrying a
value, or a failure carrying an ErrorKind and the default (empty) value for
the operation.

    >>> outcome = store.get_by_id("NR_118889.1")
    >>> if outcome.ok:
    ...     print(outcome.value)
    ... else:
    ...     print(outcome.message)

Outcome.unwrap() returns the value or raises the matching FastaError.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from fasta_search.errors import ErrorKind, describe_error, error_for_kind

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    Result of a single store operation.

    Attributes:
        value: The operation's result, or its empty default on failure
        error: ErrorKind.NONE on success
        line: Line at which a BAD_FILE scan stopped
        total_lines: Line count of the store, reported with
            INVALID_LINE_NUMBER
    """
    value: Optional[T] = None
    error: ErrorKind = ErrorKind.NONE
    line: Optional[int] = None
    total_lines: Optional[int] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        error: ErrorKind,
        value: Optional[T] = None,
        line: Optional[int] = None,
        total_lines: Optional[int] = None,
    ) -> "Outcome[T]":
        """Build a failed outcome. error must not be ErrorKind.NONE."""
        if error == ErrorKind.NONE:
            raise ValueError("a failed outcome needs an error kind")
        return cls(value=value, error=error, line=line, total_lines=total_lines)

    @property
    def ok(self) -> bool:
        return self.error == ErrorKind.NONE

    @property
    def message(self) -> str:
        """User-visible message for this outcome's error kind."""
        return describe_error(self.error, line=self.line, total_lines=self.total_lines)

    def unwrap(self) -> T:
        """
        Return the value of a successful outcome.

        Raises:
            FastaError: The exception matching the error kind
        """
        if not self.ok:
            raise error_for_kind(self.error, line=self.line, total_lines=self.total_lines)
        return self.value

    def __bool__(self) -> bool:
        return self.ok
