"""
Error, Outcome and Configuration Tests
======================================
"""

import pytest

from fasta_search import StoreConfig
from fasta_search.errors import (
    ErrorKind,
    FastaError,
    IndexFileError,
    RetrievalError,
    StoreOpenError,
    describe_error,
    error_for_kind,
)
from fasta_search.store import Outcome


class TestDescribeError:
    """Tests for the error-to-text mapping."""

    def test_every_kind_has_one_message(self):
        messages = [describe_error(kind) for kind in ErrorKind]
        assert len(set(messages)) == len(ErrorKind)
        assert all(message.startswith("Error: ") for message in messages)

    def test_bad_file_reports_line(self):
        assert describe_error(ErrorKind.BAD_FILE, line=42).endswith("Possible line of fault: 42")

    def test_invalid_line_number_reports_maximum(self):
        message = describe_error(ErrorKind.INVALID_LINE_NUMBER, total_lines=21952)
        assert message.endswith("Maximum is 21,952")

    def test_none(self):
        assert describe_error(ErrorKind.NONE) == "Error: None."


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("kind, cls", [
        (ErrorKind.WRONG_FILE_FORMAT, StoreOpenError),
        (ErrorKind.BAD_FILE, StoreOpenError),
        (ErrorKind.SEQUENCE_NOT_FOUND, RetrievalError),
        (ErrorKind.BAD_NUCLEOBASE, RetrievalError),
        (ErrorKind.COULDNT_LOAD_INDEX_ENTRY, IndexFileError),
    ])
    def test_error_for_kind(self, kind, cls):
        error = error_for_kind(kind)
        assert isinstance(error, cls)
        assert isinstance(error, FastaError)
        assert error.kind == kind
        assert str(error) == describe_error(kind)

    def test_none_is_not_an_error(self):
        with pytest.raises(ValueError):
            error_for_kind(ErrorKind.NONE)


class TestOutcome:
    """Tests for the Outcome result type."""

    def test_success(self):
        outcome = Outcome.success(["NR_1.1"])
        assert outcome.ok
        assert outcome
        assert outcome.error == ErrorKind.NONE
        assert outcome.unwrap() == ["NR_1.1"]

    def test_failure(self):
        outcome = Outcome.failure(ErrorKind.BAD_FILE, line=3)
        assert not outcome.ok
        assert not outcome
        assert outcome.message.endswith("Possible line of fault: 3")
        with pytest.raises(StoreOpenError) as exc_info:
            outcome.unwrap()
        assert exc_info.value.line == 3

    def test_failure_needs_kind(self):
        with pytest.raises(ValueError):
            Outcome.failure(ErrorKind.NONE)


class TestStoreConfig:
    """Tests for StoreConfig defaults and environment overrides."""

    def test_defaults(self):
        config = StoreConfig()
        assert config.extensions == ("fasta", "fna", "ffn", "faa", "frn")
        assert config.encoding == "utf-8"
        assert config.accepts_path("data/16S.fasta")
        assert not config.accepts_path("data/16S.txt")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FASTA_SEARCH_EXTENSIONS", "seq, fa")
        monkeypatch.setenv("FASTA_SEARCH_ENCODING", "latin-1")
        monkeypatch.setenv("FASTA_SEARCH_LOG_LEVEL", "debug")
        config = StoreConfig.from_env()
        assert config.extensions == ("seq", "fa")
        assert config.encoding == "latin-1"
        assert config.log_level == "DEBUG"

    def test_from_env_ignores_invalid(self, monkeypatch):
        monkeypatch.setenv("FASTA_SEARCH_EXTENSIONS", " , ")
        monkeypatch.setenv("FASTA_SEARCH_ENCODING", "no-such-codec")
        monkeypatch.setenv("FASTA_SEARCH_LOG_LEVEL", "LOUD")
        config = StoreConfig.from_env()
        assert config == StoreConfig()
