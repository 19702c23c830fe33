"""
=============================================================================
MEDIA TYPE PARAMETERS
=============================================================================

Parameters follow the type/subtype as "; name=value" pairs. A value that
is a plain token is written bare; anything else goes inside a quoted
string with backslash escapes.

    ┌──────────────────────────────────────────────────────────────────────┐
    │                       PARAMETER SYNTAX                               │
    ├──────────────────────────────────────────────────────────────────────┤
    │                                                                       │
    │   charset=utf-8                 token value, written as-is           │
    │   action="urn:CreateUser"       ":" is not a token character         │
    │   text="\\"quoted\\""            '"' and '\\' are backslash-escaped    │
    │   email="test\\x40example.com"   \\xHH is a character by code point    │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

=============================================================================
ESCAPES INSIDE QUOTED VALUES
=============================================================================

    ┌──────────┬───────────────────────────────────────────────────────────┐
    │  Escape  │  Meaning                                                  │
    ├──────────┼───────────────────────────────────────────────────────────┤
    │  \\n      │  line feed                                                │
    │  \\r      │  carriage return                                          │
    │  \\t      │  tab                                                      │
    │  \\uHHHH  │  code point U+HHHH (exactly four hex digits)              │
    │  \\xHH    │  code point U+00HH (exactly two hex digits)               │
    │  \\c      │  any other character c stands for itself (\\" and \\\\)     │
    └──────────┴───────────────────────────────────────────────────────────┘

Rendering is the inverse: '"' and '\\' are escaped, printable ASCII is
written literally, other ASCII control characters become \\xHH, and
non-ASCII characters are written literally.

=============================================================================
"""

import logging
from typing import Optional

from ..core.scanner import (
    Scanner,
    STRING_SPECIALS,
    TOKEN_CHARACTERS,
    WHITESPACE,
)
from ..services.charsets import canonical_charset_name
from .errors import MediaTypeParseError


logger = logging.getLogger(__name__)

# Characters written with a backslash in front of them
_ESCAPES = frozenset('"\\')

# Single-character escapes understood inside quoted strings
_SIMPLE_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}


def is_token(text: str) -> bool:
    """True if every character of `text` is a token character."""
    return all(c in TOKEN_CHARACTERS for c in text)


def quote(value: str) -> str:
    """
    Render a parameter value, quoting it only if it needs quotes.

    Examples:
        >>> quote("utf-8")
        'utf-8'
        >>> quote("urn:CreateCredential")
        '"urn:CreateCredential"'
        >>> quote('say "hi"\\n')
        '"say \\\\"hi\\\\"\\\\x0a"'
    """
    if is_token(value):
        return value

    parts = []
    for c in value:
        if c in TOKEN_CHARACTERS:
            parts.append(c)
        elif c in _ESCAPES:
            parts.append("\\" + c)
        elif ord(c) < 128:
            code = ord(c)
            parts.append(c if 32 <= code < 127 else f"\\x{code:02x}")
        else:
            parts.append(c)
    return '"' + "".join(parts) + '"'


class Parameter:
    """
    A single name=value parameter of a media type.

    Names and values compare case-insensitively, so
    Parameter("Charset", "UTF-8") == Parameter("charset", "utf-8").

    The rendered form (str(parameter)) is cached and rebuilt whenever
    `name` or `value` is assigned.
    """

    __slots__ = ("_name", "_value", "_description")

    def __init__(self, name: str, value: str):
        self._name = name
        self._value = value
        self._description = ""
        self._did_update()

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = name
        self._did_update()

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = value
        self._did_update()

    @property
    def description(self) -> str:
        """The rendered form, e.g. 'charset=utf-8' or 'a="b c"'."""
        return self._description

    def _did_update(self) -> None:
        self._description = f"{self._name}={quote(self._value)}"

    def has_name(self, name: str) -> bool:
        """Check (case-insensitively) whether this parameter is called `name`."""
        return self._name.casefold() == name.casefold()

    def copy(self) -> "Parameter":
        return Parameter(self._name, self._value)

    __copy__ = copy

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def charset(cls, encoding: str) -> Optional["Parameter"]:
        """
        Build a charset parameter for a Python codec name.

        Args:
            encoding: Codec name or alias, e.g. "utf8", "latin-1"

        Returns:
            Parameter("charset", <IANA name>), or None if the codec is
            unknown or has no charset name
        """
        name = canonical_charset_name(encoding)
        if name is None:
            return None
        return cls("charset", name)

    @classmethod
    def parse(cls, text: str) -> Optional["Parameter"]:
        """
        Parse a standalone 'name=value' string.

        The whole string must be one parameter (surrounding whitespace
        aside). Returns None if it is malformed.
        """
        scanner = Scanner(text, skip=WHITESPACE)
        try:
            parameter = cls.scan(scanner)
        except MediaTypeParseError as e:
            logger.debug(f"Rejected parameter: {e}")
            return None
        if not scanner.is_at_end:
            logger.debug(f"Rejected parameter {text!r}: trailing characters")
            return None
        return parameter

    @classmethod
    def scan(cls, scanner: Scanner) -> "Parameter":
        """
        Read one parameter at the scanner's position.

        =====================================================================
        SCANNING STEPS
        =====================================================================

            ␣␣charset␣=utf-8          name=charset, value=utf-8
            ␣␣text="a \\"b\\""        name=text,    value=a "b"
              ▲      ▲ ▲
              │      │ └── quoted or token value
              │      └──── '=' (whitespace allowed before it)
              └─────────── leading whitespace skipped

        Skipping is switched off for the whole parameter so whitespace
        inside a quoted value survives; the caller's skip-set is restored
        on the way out, also when this raises.

        =====================================================================

        Raises:
            MediaTypeParseError: On an empty name, a missing '=', an
                unterminated quoted string or a bad escape
        """
        with scanner.skipping(None):
            scanner.scan_characters(WHITESPACE)

            name = scanner.scan_characters(TOKEN_CHARACTERS)
            if name is None:
                raise MediaTypeParseError(
                    "Expected parameter name", scanner.string, scanner.position
                )
            scanner.scan_characters(WHITESPACE)
            if scanner.scan_string("=") is None:
                raise MediaTypeParseError(
                    f"Expected '=' after parameter name {name!r}",
                    scanner.string,
                    scanner.position,
                )

            if scanner.scan_string('"') is None:
                value = scanner.scan_characters(TOKEN_CHARACTERS) or ""
                return cls(name, value)

            return cls(name, cls._scan_quoted(scanner))

    @staticmethod
    def _scan_quoted(scanner: Scanner) -> str:
        """Read a quoted string body after its opening '"'."""
        start = scanner.position - 1
        value = []

        while scanner.scan_string('"') is None:
            part = scanner.scan_up_to_characters(STRING_SPECIALS)
            if part is not None:
                value.append(part)
            elif scanner.scan_string("\\") is not None:
                value.append(Parameter._scan_escape(scanner))
            else:
                raise MediaTypeParseError(
                    "Unterminated quoted string", scanner.string, start
                )

        return "".join(value)

    @staticmethod
    def _scan_escape(scanner: Scanner) -> str:
        """Decode the escape following a backslash."""
        position = scanner.position - 1
        c = scanner.scan_character()

        if c is None:
            raise MediaTypeParseError(
                "Backslash at end of input", scanner.string, position
            )
        if c in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[c]
        if c in ("u", "x"):
            length = 4 if c == "u" else 2
            ordinal = scanner.scan_unsigned_integer(length, 16)
            # Lone surrogates are not characters
            if ordinal is None or 0xD800 <= ordinal <= 0xDFFF:
                raise MediaTypeParseError(
                    f"Invalid \\{c} escape: expected {length} hex digits",
                    scanner.string,
                    position,
                )
            return chr(ordinal)
        return c

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Parameter):
            return NotImplemented
        return (
            self._name.casefold() == other._name.casefold()
            and self._value.casefold() == other._value.casefold()
        )

    def __hash__(self) -> int:
        return hash((self._name.casefold(), self._value.casefold()))

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"Parameter({self._name!r}, {self._value!r})"
