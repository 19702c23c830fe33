"""
=============================================================================
CORE PACKAGE - Low-Level Scanning
=============================================================================

The string scanner the parsers are built on. It knows nothing about
media types: it moves a cursor, reads runs of characters from a class,
and lets callers switch whitespace skipping on and off for a block.

=============================================================================
IMPORTS AND EXPORTS
=============================================================================
"""

from .scanner import (
    Scanner,
    TOKEN_CHARACTERS,
    STRING_SPECIALS,
    WHITESPACE,
    WHITESPACE_AND_NEWLINES,
)

__all__ = [
    "Scanner",                  # Cursor with lookahead and skip-set
    "TOKEN_CHARACTERS",         # [A-Za-z0-9_-]
    "STRING_SPECIALS",          # '"' and '\'
    "WHITESPACE",               # space, tab
    "WHITESPACE_AND_NEWLINES",  # space, tab, CR, LF
]
