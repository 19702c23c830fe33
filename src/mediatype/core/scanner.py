"""
=============================================================================
STRING SCANNER
=============================================================================

A small cursor over a string, used by the media type and parameter
parsers. It reads one token at a time and never backtracks further than
the token it is currently trying to read.

=============================================================================
HOW THE SCANNER MOVES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │   text/html ; charset="utf-8"                                       │
    │   ▲   ▲     ▲ ▲                                                     │
    │   │   │     │ └── scan_characters(TOKEN_CHARACTERS) → "charset"     │
    │   │   │     └──── scan_string(";")  (leading " " is skipped)        │
    │   │   └────────── scan_up_to_string(";") → "html "                  │
    │   └────────────── scan_characters(TOKEN_CHARACTERS) → "text"        │
    └─────────────────────────────────────────────────────────────────────┘

Every scan_* method:

1. skips the characters in the current skip-set (whitespace by default),
2. tries to read its token,
3. returns the token, or None with the cursor put back where it was.

=============================================================================
THE SKIP-SET
=============================================================================

Whitespace between tokens is insignificant, whitespace inside a quoted
parameter value is not. The parameter parser therefore switches skipping
off while it reads a value:

    with scanner.skipping(None):
        ...  # every character counts here

The previous skip-set comes back when the block exits, whether it
returned normally or raised.

=============================================================================
"""

from contextlib import contextmanager
from string import ascii_letters, ascii_lowercase, digits
from typing import FrozenSet, Iterator, Optional


# =============================================================================
# CHARACTER CLASSES
# =============================================================================

TOKEN_CHARACTERS: FrozenSet[str] = frozenset(ascii_letters + digits + "-_")
"""Characters allowed in unquoted types, subtypes, names and values."""

STRING_SPECIALS: FrozenSet[str] = frozenset('"\\')
"""Characters that end a literal run inside a quoted string."""

WHITESPACE: FrozenSet[str] = frozenset(" \t")

WHITESPACE_AND_NEWLINES: FrozenSet[str] = frozenset(" \t\r\n")

# Digit alphabet for radix 2..36, lowercase
_DIGITS = digits + ascii_lowercase


class Scanner:
    """
    Cursor over a string with a configurable set of skipped characters.

    Attributes:
        string: The text being scanned (never modified).
        position: Index of the next unread character.
        skip: Characters silently skipped before each token, or None.
    """

    def __init__(
        self,
        string: str,
        skip: Optional[FrozenSet[str]] = WHITESPACE_AND_NEWLINES,
    ):
        self.string = string
        self.position = 0
        self.skip = skip

    def __repr__(self) -> str:
        return f"Scanner(position={self.position}, rest={self.remainder!r})"

    # =========================================================================
    # STATE
    # =========================================================================

    @property
    def remainder(self) -> str:
        """The unread part of the string."""
        return self.string[self.position:]

    @property
    def is_at_end(self) -> bool:
        """True when only skippable characters are left."""
        index = self.position
        if self.skip:
            while index < len(self.string) and self.string[index] in self.skip:
                index += 1
        return index >= len(self.string)

    @contextmanager
    def skipping(self, skip: Optional[FrozenSet[str]]) -> Iterator["Scanner"]:
        """
        Temporarily replace the skip-set.

        The previous skip-set is restored on every exit path, so a parser
        that fails half way through a quoted value cannot leave the
        scanner with skipping switched off.
        """
        saved = self.skip
        self.skip = skip
        try:
            yield self
        finally:
            self.skip = saved

    def _skip(self) -> None:
        if not self.skip:
            return
        while self.position < len(self.string) and self.string[self.position] in self.skip:
            self.position += 1

    # =========================================================================
    # LOOKAHEAD
    # =========================================================================

    def lookahead(self, length: int) -> Optional[str]:
        """
        Return the next `length` characters without consuming them.

        Skipping does not apply. Returns None if fewer than `length`
        characters remain.
        """
        end = self.position + length
        if length < 0 or end > len(self.string):
            return None
        return self.string[self.position:end]

    def scan_unsigned_integer(self, length: int, radix: int) -> Optional[int]:
        """
        Read exactly `length` digits of the given radix as an integer.

        Nothing is consumed on failure (too little input, or a character
        that is not a digit of `radix`). Signs, underscores and
        whitespace are digits of no radix, so int()'s leniency never
        leaks through.

        Example:
            >>> scanner = Scanner("40example")
            >>> scanner.scan_unsigned_integer(2, 16)
            64
            >>> scanner.remainder
            'example'
        """
        if not 2 <= radix <= len(_DIGITS):
            raise ValueError(f"Unsupported radix: {radix}")
        prefix = self.lookahead(length)
        if not prefix:
            return None
        allowed = _DIGITS[:radix]
        allowed += allowed.upper()
        if any(c not in allowed for c in prefix):
            return None
        self.position += length
        return int(prefix, radix)

    # =========================================================================
    # TOKEN SCANNING
    # =========================================================================

    def scan_string(self, literal: str) -> Optional[str]:
        """Consume `literal` if it comes next."""
        start = self.position
        self._skip()
        if self.string.startswith(literal, self.position):
            self.position += len(literal)
            return literal
        self.position = start
        return None

    def scan_character(self) -> Optional[str]:
        """Consume and return a single character, or None at end of input."""
        start = self.position
        self._skip()
        if self.position < len(self.string):
            self.position += 1
            return self.string[self.position - 1]
        self.position = start
        return None

    def scan_characters(self, characters: FrozenSet[str]) -> Optional[str]:
        """Consume the longest non-empty run of characters from the set."""
        start = self.position
        self._skip()
        begin = self.position
        while self.position < len(self.string) and self.string[self.position] in characters:
            self.position += 1
        if self.position == begin:
            self.position = start
            return None
        return self.string[begin:self.position]

    def scan_up_to_characters(self, characters: FrozenSet[str]) -> Optional[str]:
        """Consume the longest non-empty run of characters NOT in the set."""
        start = self.position
        self._skip()
        begin = self.position
        while self.position < len(self.string) and self.string[self.position] not in characters:
            self.position += 1
        if self.position == begin:
            self.position = start
            return None
        return self.string[begin:self.position]

    def scan_up_to_string(self, stop: str) -> Optional[str]:
        """Consume everything before the next `stop` (or to the end)."""
        start = self.position
        self._skip()
        begin = self.position
        end = self.string.find(stop, begin)
        if end == -1:
            end = len(self.string)
        if end == begin:
            self.position = start
            return None
        self.position = end
        return self.string[begin:end]
