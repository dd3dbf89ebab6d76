"""
FASTA Search Configuration
==========================

Settings shared by the record store and the command-line tools.
Configuration can come from:
- Default values (defined here)
- Environment variables

Environment Variables
---------------------
    FASTA_SEARCH_EXTENSIONS: Comma-separated extension substrings
        accepted by the open gate (default: fasta,fna,ffn,faa,frn)
    FASTA_SEARCH_ENCODING: Text encoding of record and index files
        (default: utf-8)
    FASTA_SEARCH_LOG_LEVEL: Logging level name for the CLI tools
        (default: WARNING)
"""

from dataclasses import dataclass, field
from typing import Tuple
import codecs
import logging
import os


# Recognized FASTA extension substrings.
# src: https://en.wikipedia.org/wiki/FASTA_format#FASTA_file
DEFAULT_EXTENSIONS: Tuple[str, ...] = ("fasta", "fna", "ffn", "faa", "frn")


@dataclass
class StoreConfig:
    """
    Configuration for opening record stores.

    Attributes:
        extensions: Substrings one of which must appear in a FASTA path
        encoding: Text encoding used to decode record and index lines
        log_level: Level name used by the CLI tools when not verbose
        log_format: Format string for CLI log output
    """

    extensions: Tuple[str, ...] = field(default_factory=lambda: DEFAULT_EXTENSIONS)
    encoding: str = "utf-8"
    log_level: str = "WARNING"
    log_format: str = "%(levelname)s: %(message)s"

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """
        Create StoreConfig from environment variables.

        Invalid values are ignored and the default is kept.
        """
        config = cls()

        if extensions := os.environ.get("FASTA_SEARCH_EXTENSIONS"):
            parsed = tuple(e.strip() for e in extensions.split(",") if e.strip())
            if parsed:
                config.extensions = parsed

        if encoding := os.environ.get("FASTA_SEARCH_ENCODING"):
            try:
                codecs.lookup(encoding)
                config.encoding = encoding
            except LookupError:
                pass  # Unknown codec, keep default

        if level := os.environ.get("FASTA_SEARCH_LOG_LEVEL"):
            if isinstance(logging.getLevelName(level.upper()), int):
                config.log_level = level.upper()

        return config

    def accepts_path(self, path: str) -> bool:
        """Return True if the path contains a recognized extension substring."""
        return any(ext in path for ext in self.extensions)
