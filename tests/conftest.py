"""
Shared fixtures for FASTA Search tests.

Sample records are small but keep the shape of real 16S rRNA headers:
an identifier token, then free-text metadata. One header carries two
identifiers joined by '>' the way merged NCBI records are.
"""

from pathlib import Path

import pytest


SAMPLE_RECORDS = [
    (
        ">NR_118889.1 Amycolatopsis azurea strain NRRL 11412 16S ribosomal RNA, partial sequence",
        "GGTCTNATACCGGATATAACAACTCATGGCATGGTTGGTAGTGG",
    ),
    (
        ">NR_118899.1 Actinomyces bovis strain DSM 43014 kingdom Bacteria",
        "TACGTAGGGCGCAAGCGTTATCCGGATTTATTGGGCGTAAAGG",
    ),
    (
        ">NR_074334.1 Archaeoglobus fulgidus DSM 4304 16S ribosomal RNA>NR_118873.1 Archaeoglobus fulgidus DSM 4304",
        "ATTCCGGTTGATCCTGCCGGACCCGACTGCTATCGGGGTGGGGC",
    ),
    (
        ">NR_115365.1 Streptomyces Kingdom2 strain unknown",
        "acgtacgtACGTTTGACCAGTGCAAAGCTTT",
    ),
]


def render_fasta(records) -> str:
    """Render (header, body) pairs as LF-terminated FASTA text."""
    return "".join(f"{header}\n{body}\n" for header, body in records)


@pytest.fixture
def sample_records():
    return list(SAMPLE_RECORDS)


@pytest.fixture
def fasta_text() -> str:
    return render_fasta(SAMPLE_RECORDS)


@pytest.fixture
def fasta_file(tmp_path: Path, fasta_text: str) -> Path:
    """A well-formed four-record FASTA file."""
    path = tmp_path / "16S.fasta"
    path.write_bytes(fasta_text.encode("utf-8"))
    return path


@pytest.fixture
def write_fasta(tmp_path: Path):
    """Factory fixture: write raw text to a FASTA-named file."""
    def _write(text: str, name: str = "sample.fasta") -> Path:
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path
    return _write
