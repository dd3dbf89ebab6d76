"""
FASTA Search Command-Line Interface
===================================

This package provides command-line tools for FASTA Search:

- **fsearch**: Query a FASTA file (line ranges, identifiers, batches,
  composition and metadata search)
- **fsindex**: Build the sidecar offset index for a FASTA file

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["fsearch", "fsindex"]
