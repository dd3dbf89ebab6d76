"""
Command-Line Tool Tests
=======================

Tests for the fsearch and fsindex commands through click's CliRunner.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from fasta_search.cli.errors import ExitCode
from fasta_search.cli.fsearch import main as fsearch
from fasta_search.cli.fsindex import main as fsindex

from conftest import SAMPLE_RECORDS, render_fasta


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def index_file(runner, fasta_file, tmp_path) -> Path:
    """Sidecar index built through fsindex."""
    path = tmp_path / "16S.index"
    result = runner.invoke(fsindex, [str(fasta_file), str(path)])
    assert result.exit_code == 0
    return path


# =============================================================================
# fsearch
# =============================================================================

class TestFsearchGroup:
    """Tests for the fsearch group options."""

    def test_help(self, runner):
        result = runner.invoke(fsearch, ["--help"])
        assert result.exit_code == 0
        assert "Search a single-line FASTA file" in result.output

    def test_version(self, runner):
        result = runner.invoke(fsearch, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_wrong_file_format(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        Path("records.txt").write_text(">NR_1.1 x\nACGT\n")
        result = runner.invoke(fsearch, ["records.txt", "get", "NR_1.1"])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Wrong DNA file given" in result.output

    def test_bad_file(self, runner, write_fasta):
        path = write_fasta(">NR_1.1 x\nAC GT\n")
        result = runner.invoke(fsearch, [str(path), "metadata", "x"])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Possible line of fault: 2" in result.output


class TestRangeCommand:
    """Tests for fsearch range."""

    def test_records(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "range", "3", "2"])
        assert result.exit_code == 0
        assert result.output == render_fasta(SAMPLE_RECORDS[1:3])

    @pytest.mark.parametrize("line_number", ["2", "0"])
    def test_line_number_must_be_odd_and_positive(self, runner, fasta_file, line_number):
        result = runner.invoke(fsearch, [str(fasta_file), "range", line_number, "1"])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "odd number" in result.output

    def test_count_must_be_positive(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "range", "1", "0"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_line_number_too_large(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "range", "99", "1"])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Maximum is 8" in result.output


class TestGetCommand:
    """Tests for fsearch get."""

    def test_found(self, runner, fasta_file):
        header, body = SAMPLE_RECORDS[3]
        result = runner.invoke(fsearch, [str(fasta_file), "get", "NR_115365.1"])
        assert result.exit_code == 0
        assert result.output == f"{header}\n{body}\n"

    def test_found_with_index(self, runner, fasta_file, index_file):
        header, body = SAMPLE_RECORDS[2]
        result = runner.invoke(
            fsearch, [str(fasta_file), "get", "NR_118873.1", "--index", str(index_file)]
        )
        assert result.exit_code == 0
        assert result.output == f"{header}\n{body}\n"

    def test_not_found(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "get", "NR_000000.1"])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Error, sequence NR_000000.1 not found." in result.output

    def test_bad_index_file(self, runner, fasta_file, tmp_path):
        bad = tmp_path / "bad.index"
        bad.write_text("NR_118889.1 zero\n")
        result = runner.invoke(
            fsearch, [str(fasta_file), "get", "NR_118889.1", "--index", str(bad)]
        )
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Failed to load an Index Entry" in result.output


class TestBatchCommand:
    """Tests for fsearch batch."""

    @pytest.fixture
    def query_file(self, tmp_path) -> Path:
        path = tmp_path / "query.txt"
        path.write_text("NR_118899.1\nNR_000000.1\n\nNR_115365.1\n")
        return path

    def expected_output(self) -> str:
        return "".join(
            f"{header}\n{body}\n"
            for header, body in (SAMPLE_RECORDS[1], SAMPLE_RECORDS[3])
        )

    def test_sequential(self, runner, fasta_file, query_file, tmp_path):
        out = tmp_path / "results.txt"
        result = runner.invoke(fsearch, [str(fasta_file), "batch", str(query_file), str(out)])
        assert result.exit_code == 0
        assert "Error, sequence NR_000000.1 not found." in result.output
        assert out.read_text() == self.expected_output()

    def test_indexed(self, runner, fasta_file, query_file, index_file, tmp_path):
        out = tmp_path / "results.txt"
        result = runner.invoke(
            fsearch,
            [str(fasta_file), "batch", str(query_file), str(out), "--index", str(index_file)],
        )
        assert result.exit_code == 0
        assert out.read_text() == self.expected_output()

    def test_missing_index(self, runner, fasta_file, query_file, tmp_path):
        result = runner.invoke(
            fsearch,
            [str(fasta_file), "batch", str(query_file), str(tmp_path / "out.txt"),
             "--index", str(tmp_path / "missing.index")],
        )
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Could not set Index file" in result.output
        assert not (tmp_path / "out.txt").exists()


class TestSearchCommands:
    """Tests for fsearch composition and metadata."""

    def test_composition(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "composition", "GACCCGACTGC"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["NR_074334.1", "NR_118873.1"]

    def test_composition_bad_symbol(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "composition", "AC*GT"])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Bad Nucleobase" in result.output

    def test_composition_wildcard(self, runner, fasta_file):
        result = runner.invoke(
            fsearch, [str(fasta_file), "composition", "CCGGATA*GCATGG", "--wildcard"]
        )
        assert result.exit_code == 0
        assert result.output.splitlines() == ["NR_118889.1"]

    def test_metadata(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "metadata", "Kingdom"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["NR_118899.1"]

    def test_metadata_no_match(self, runner, fasta_file):
        result = runner.invoke(fsearch, [str(fasta_file), "metadata", "Escherichia"])
        assert result.exit_code == 0
        assert result.output == ""


# =============================================================================
# fsindex
# =============================================================================

class TestFsindex:
    """Tests for the fsindex command."""

    def test_builds_index(self, runner, fasta_file, tmp_path):
        out = tmp_path / "16S.index"
        result = runner.invoke(fsindex, [str(fasta_file), str(out)])
        assert result.exit_code == 0
        assert "5 entries" in result.output
        lines = out.read_text().splitlines()
        assert lines[0] == "NR_118889.1 0"
        assert [line.split()[0] for line in lines] == [
            "NR_118889.1", "NR_118899.1", "NR_074334.1", "NR_118873.1", "NR_115365.1",
        ]

    def test_verbose(self, runner, fasta_file, tmp_path):
        result = runner.invoke(fsindex, ["-v", str(fasta_file), str(tmp_path / "16S.index")])
        assert result.exit_code == 0
        assert "Unique IDs: 5" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(fsindex, [str(tmp_path / "missing.fasta"), str(tmp_path / "x.index")])
        assert result.exit_code == ExitCode.QUERY_ERROR
        assert "Could not read FASTA file" in result.output
