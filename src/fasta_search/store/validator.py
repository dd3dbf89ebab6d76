"""
Record Validation
=================

Pure predicates over FASTA lines and characters.

Two grammars are involved:

**Header grammar** (structural, checked when a file is opened):
    >XX_123.free text
    '>' then two letters, '_', one or more digits, '.', one or more
    characters of any kind.

**Identifier token grammar** (strict, used to extract identifiers):
    XX_123456.1
    two letters, '_', one or more digits, '.', one or more digits.

Only tokens of the strict shape are ever returned by the search
operations, even though headers are accepted with looser trailing text.

Body symbols are the Latin letters A-Z and a-z. No gap or ambiguity codes
are special-cased.
"""

import re
from typing import Optional


# Anchored at the start of the line by re.match
HEADER_PATTERN = re.compile(r">[A-Za-z]{2}_[0-9]+\..+")

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z]{2}_[0-9]+\.[0-9]+")

# Characters a body line may contain, expressed as a regex class
BODY_SYMBOL_CLASS = "[A-Za-z]"


def is_header_line(line: str) -> bool:
    """Return True if the line satisfies the header grammar."""
    return HEADER_PATTERN.match(line) is not None


def is_body_symbol(char: str) -> bool:
    """
    Return True if the character is an accepted body symbol.

    Accepted code points are 65-90 (A-Z) and 97-122 (a-z).
    """
    code = ord(char)
    return 65 <= code <= 90 or 97 <= code <= 122


def first_invalid_symbol(text: str) -> Optional[int]:
    """
    Find the first character that is not a body symbol.

    Returns:
        Zero-based position of the offending character, or None if every
        character is valid
    """
    for position, char in enumerate(text):
        if not is_body_symbol(char):
            return position
    return None


def is_body_line(line: str) -> bool:
    """Return True if every character of the line is a body symbol."""
    return first_invalid_symbol(line) is None


def find_identifiers(text: str) -> list[str]:
    """
    Extract every identifier token from a piece of text.

    Args:
        text: Usually a header line

    Returns:
        Tokens in order of appearance (may be empty)

    Example:
        >>> find_identifiers(">NR_118889.1 Amycolatopsis; see also NR_1.22")
        ['NR_118889.1', 'NR_1.22']
    """
    return IDENTIFIER_PATTERN.findall(text)
