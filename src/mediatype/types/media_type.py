"""
=============================================================================
MEDIA TYPE
=============================================================================

Parses, builds and renders RFC 2045 §5.1 media types:

    text/html; charset=utf-8
    ─┬── ─┬──  ──────┬──────
     │    │          │
   type  subtype   parameters (zero or more "; name=value")

=============================================================================
PARSING PIPELINE
=============================================================================

    ┌──────────────────────────────────────────────────────────────────────┐
    │                     MediaType.parse(raw)                             │
    ├──────────────────────────────────────────────────────────────────────┤
    │                                                                       │
    │  1. Type ── token characters, then "/" ──────────────────────────►   │
    │     │  missing? → no value                                           │
    │     ▼                                                                 │
    │  2. Subtype ── everything up to ";" ─────────────────────────────►   │
    │     │  empty? → no value                                             │
    │     ▼                                                                 │
    │  3. Parameters ── repeat: ";" + Parameter.scan() ────────────────►   │
    │     │  any failure? → no value (never a partial object)              │
    │     │  duplicate name? → later value overwrites, first position kept │
    │     ▼                                                                 │
    │  4. MediaType(main_type, subtype, parameters), description = raw     │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

A parsed media type keeps the input string as its description until it
is changed; every change re-renders the description from the fields.

=============================================================================
EQUALITY VS ORDERING
=============================================================================

Equality compares the main type, the subtype (case-insensitively) and the
parameter lists pair by pair, in order. Ordering sorts by main type
first, then by the case-folded rendering of the whole media type, so two
equal media types never sort apart.

=============================================================================
"""

import logging
from functools import total_ordering
from os import PathLike
from typing import Iterable, List, Optional, Tuple, Union

from ..core.scanner import Scanner, TOKEN_CHARACTERS, WHITESPACE
from ..services.charsets import canonical_charset_name, encoding_for_charset
from ..services.sniffer import ContentSniffer, default_sniffer
from .errors import MediaTypeParseError
from .main_type import MainType
from .parameter import Parameter, quote


logger = logging.getLogger(__name__)


@total_ordering
class MediaType:
    """
    A media type: main type, subtype and an ordered list of parameters.

    =========================================================================
    CONSTRUCTION
    =========================================================================

        # From a string (None if malformed)
        media_type = MediaType.parse("application/json; charset=utf-8")

        # From fields
        media_type = MediaType(
            MainType.APPLICATION, "soap+xml",
            [Parameter("charset", "utf-8"), Parameter("action", "urn:Create")],
        )
        media_type = MediaType(main_type="text", subtype="plain")

        # From content
        media_type = MediaType.from_path("report.pdf")

    =========================================================================
    PARAMETERS BEHAVE LIKE A MAP
    =========================================================================

    The parameter list keeps its order, but lookups treat it as a map
    keyed by case-insensitive name:

        media_type.set_parameter("Charset", "utf-16")  # replaces in place
        media_type.parameter_value("CHARSET")          # "utf-16"
        media_type.remove_parameter("charset")         # removes all matches

    =========================================================================
    """

    __slots__ = ("_type", "_subtype", "_parameters", "_description")

    def __init__(
        self,
        main_type: Union[MainType, str],
        subtype: str,
        parameters: Iterable[Parameter] = (),
    ):
        self._type = _main_type(main_type)
        self._subtype = subtype
        self._parameters: List[Parameter] = [p.copy() for p in parameters]
        self._description = ""
        self._did_update()

    # =========================================================================
    # PARSING
    # =========================================================================

    @classmethod
    def parse(cls, raw: str) -> Optional["MediaType"]:
        """
        Parse a media type string.

        Args:
            raw: e.g. 'text/plain; charset="us-ascii"'

        Returns:
            The MediaType, or None if `raw` is malformed

        Example:
            >>> MediaType.parse("application/json; charset=utf-8").subtype
            'json'
            >>> MediaType.parse("bogus") is None
            True
        """
        try:
            return cls.parse_strict(raw)
        except MediaTypeParseError as e:
            logger.debug(f"Rejected media type: {e}")
            return None

    @classmethod
    def parse_strict(cls, raw: str) -> "MediaType":
        """
        Parse a media type string, raising on malformed input.

        Raises:
            MediaTypeParseError: With the offset at which parsing failed
        """
        scanner = Scanner(raw)

        type_token = scanner.scan_characters(TOKEN_CHARACTERS)
        if type_token is None:
            raise MediaTypeParseError("Expected main type", raw, scanner.position)
        if scanner.scan_string("/") is None:
            raise MediaTypeParseError("Expected '/' after main type", raw, scanner.position)

        subtype = scanner.scan_up_to_string(";")
        if subtype is None:
            raise MediaTypeParseError("Expected subtype", raw, scanner.position)

        media_type = cls(MainType.classify(type_token), subtype.rstrip())

        scanner.skip = WHITESPACE
        while not scanner.is_at_end:
            if scanner.scan_string(";") is None:
                raise MediaTypeParseError("Expected ';'", raw, scanner.position)
            parameter = Parameter.scan(scanner)
            media_type.set_parameter(parameter.name, parameter.value)

        media_type._description = raw
        return media_type

    # =========================================================================
    # CONTENT SNIFFING
    # =========================================================================

    @classmethod
    def from_data(
        cls,
        data: bytes,
        sniffer: Optional[ContentSniffer] = None,
    ) -> Optional["MediaType"]:
        """
        Determine the media type of a byte string from its content.

        Returns None if the sniffer finds nothing or reports something
        unparseable.
        Without a sniffer the shared libmagic-backed MagicSniffer is used.
        """
        raw = (sniffer or default_sniffer()).sniff_bytes(data)
        if raw is None:
            return None
        return cls.parse(raw)

    @classmethod
    def from_path(
        cls,
        path: Union[str, PathLike],
        sniffer: Optional[ContentSniffer] = None,
    ) -> Optional["MediaType"]:
        """Determine the media type of a file from its content."""
        raw = (sniffer or default_sniffer()).sniff_path(path)
        if raw is None:
            return None
        return cls.parse(raw)

    # =========================================================================
    # FIELDS
    # =========================================================================

    @property
    def type(self) -> MainType:
        return self._type

    @type.setter
    def type(self, value: Union[MainType, str]) -> None:
        self._type = _main_type(value)
        self._did_update()

    @property
    def subtype(self) -> str:
        return self._subtype

    @subtype.setter
    def subtype(self, value: str) -> None:
        self._subtype = value
        self._did_update()

    @property
    def parameters(self) -> Tuple[Parameter, ...]:
        """Copies of the parameters, in order. Use set_parameter() to change them."""
        return tuple(p.copy() for p in self._parameters)

    @property
    def description(self) -> str:
        """The string form: the parsed input, or the rendering after a change."""
        return self._description

    @property
    def basic_type(self) -> str:
        """The "type/subtype" part, without parameters."""
        return f"{self._type}/{self._subtype}"

    def render(self) -> str:
        """Render the media type from its fields (ignoring the parsed input)."""
        return self.basic_type + "".join(f"; {p}" for p in self._parameters)

    def _did_update(self) -> None:
        self._description = self.render()

    # =========================================================================
    # PARAMETER ACCESS
    # =========================================================================

    def set_parameter(self, name: str, value: str) -> None:
        """
        Set a parameter, replacing the first one with the same name.

        A replaced parameter keeps its position; a new one is appended.
        """
        for index, parameter in enumerate(self._parameters):
            if parameter.has_name(name):
                self._parameters[index] = Parameter(name, value)
                break
        else:
            self._parameters.append(Parameter(name, value))
        self._did_update()

    def remove_parameter(self, name: str) -> None:
        """Remove every parameter called `name` (case-insensitive)."""
        self._parameters = [p for p in self._parameters if not p.has_name(name)]
        self._did_update()

    def parameter_value(self, name: str) -> Optional[str]:
        """Value of the first parameter called `name`, or None."""
        for parameter in self._parameters:
            if parameter.has_name(name):
                return parameter.value
        return None

    @property
    def charset(self) -> Optional[str]:
        """
        Python codec name for the charset parameter.

        None if there is no charset parameter or its value names no
        codec. Assigning a codec name stores its IANA charset name;
        assigning None removes the parameter.

            >>> media_type = MediaType.parse("text/plain; charset=Latin1")
            >>> media_type.charset
            'iso8859-1'
            >>> media_type.charset = "utf8"
            >>> media_type.description
            'text/plain; charset=utf-8'
        """
        name = self.parameter_value("charset")
        if name is None:
            return None
        return encoding_for_charset(name)

    @charset.setter
    def charset(self, encoding: Optional[str]) -> None:
        if encoding is None:
            self.remove_parameter("charset")
            return
        name = canonical_charset_name(encoding)
        if name is None:
            raise ValueError(f"Unknown encoding: {encoding!r}")
        self.set_parameter("charset", name)

    # =========================================================================
    # COPYING AND COMPARISON
    # =========================================================================

    def copy(self) -> "MediaType":
        """Return an independent copy (description included)."""
        other = MediaType(self._type, self._subtype, self._parameters)
        other._description = self._description
        return other

    __copy__ = copy

    def __deepcopy__(self, memo) -> "MediaType":
        return self.copy()

    def _collation_key(self) -> str:
        # Fold first, then render: equal media types get identical keys.
        parameters = "".join(
            f"; {p.name.casefold()}={quote(p.value.casefold())}"
            for p in self._parameters
        )
        return f"{str(self._type).casefold()}/{self._subtype.casefold()}{parameters}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MediaType):
            return NotImplemented
        return (
            self._type == other._type
            and self._subtype.casefold() == other._subtype.casefold()
            and self._parameters == other._parameters
        )

    def __hash__(self) -> int:
        return hash((self._type, self._subtype.casefold(), tuple(self._parameters)))

    def __lt__(self, other: "MediaType") -> bool:
        if not isinstance(other, MediaType):
            return NotImplemented
        if self._type != other._type:
            return self._type < other._type
        return self._collation_key() < other._collation_key()

    def __str__(self) -> str:
        return self._description

    def __repr__(self) -> str:
        return f"MediaType({self._description!r})"


def _main_type(value: Union[MainType, str]) -> MainType:
    if isinstance(value, MainType):
        return value
    return MainType.classify(value)
