"""
=============================================================================
MAIN TYPE - The "type" in type/subtype
=============================================================================

A media type's top-level type is one of a small registered set, or an
unregistered token. IANA registers eleven top-level types (as of
February 2025); anything else is either an IETF-style token or a private
"x-" extension.

    ┌──────────────────────────────────────────────────────────────────────┐
    │                      MAIN TYPE CLASSIFICATION                        │
    ├──────────────────────────────────────────────────────────────────────┤
    │                                                                       │
    │   raw token ──lowercase──► one of the 11 standard names?             │
    │                               │                                       │
    │                 yes ──────────┴────────── no                          │
    │                  │                         │                          │
    │                  ▼                         ▼                          │
    │           MainType.TEXT,           starts with "x-"?                  │
    │           MainType.IMAGE, ...       │              │                  │
    │                                    yes             no                 │
    │                                     ▼              ▼                  │
    │                      MainType.extension(raw)  MainType.ietf(raw)     │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

Classification never fails: every string is some MainType.

=============================================================================
ORDERING
=============================================================================

    application < audio < example < font < haptics < image < message
      < model < multipart < text < video
      < ietf(...)        (compared case-insensitively among themselves)
      < extension(...)   (compared case-insensitively among themselves)

Equality is case-insensitive on the token, but never crosses kinds:
MainType.extension("x-app") != MainType.ietf("x-app").

=============================================================================
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import ClassVar, FrozenSet, Tuple, Union


class MainTypeKind(Enum):
    """Which variant a MainType is."""

    STANDARD = "standard"    # One of the eleven registered top-level types
    IETF = "ietf"            # Any other token
    EXTENSION = "extension"  # Token starting with "x-"


# Enumeration order defines the sort order of the standard types.
STANDARD_NAMES: Tuple[str, ...] = (
    "application",
    "audio",
    "example",
    "font",
    "haptics",
    "image",
    "message",
    "model",
    "multipart",
    "text",
    "video",
)

_RANKS = {name: index for index, name in enumerate(STANDARD_NAMES)}
_IETF_RANK = len(STANDARD_NAMES)
_EXTENSION_RANK = len(STANDARD_NAMES) + 1


@total_ordering
@dataclass(frozen=True, eq=False)
class MainType:
    """
    Top-level type of a media type.

    A tagged value: `kind` says which variant it is and `token` carries
    the spelling. Standard types are shared constants (MainType.TEXT,
    MainType.APPLICATION, ...); the open variants are built with
    MainType.ietf() and MainType.extension(), or by MainType.classify().

    A MainType also compares equal to any string that classifies to it:

        >>> MainType.TEXT == "Text"
        True
        >>> MainType.classify("X-App")
        MainType.extension('X-App')

    String equality stops at ==. A MainType hashes like its casefolded
    token, so only the lowercase spelling finds it in a dict or set:

        >>> {MainType.TEXT: 1}.get("text")
        1
        >>> {MainType.TEXT: 1}.get("TEXT") is None
        True

    Key mappings by MainType.classify(name), never by the raw string.
    """

    kind: MainTypeKind
    token: str

    APPLICATION: ClassVar["MainType"]
    AUDIO: ClassVar["MainType"]
    EXAMPLE: ClassVar["MainType"]
    FONT: ClassVar["MainType"]
    HAPTICS: ClassVar["MainType"]
    IMAGE: ClassVar["MainType"]
    MESSAGE: ClassVar["MainType"]
    MODEL: ClassVar["MainType"]
    MULTIPART: ClassVar["MainType"]
    TEXT: ClassVar["MainType"]
    VIDEO: ClassVar["MainType"]
    STANDARD_TYPES: ClassVar[FrozenSet["MainType"]]

    def __post_init__(self):
        if self.kind is MainTypeKind.STANDARD and self.token not in _RANKS:
            raise ValueError(f"Not a standard main type: {self.token!r}")

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def ietf(cls, token: str) -> "MainType":
        """An unregistered main type token."""
        return cls(MainTypeKind.IETF, token)

    @classmethod
    def extension(cls, token: str) -> "MainType":
        """A private "x-" main type token."""
        return cls(MainTypeKind.EXTENSION, token)

    @classmethod
    def classify(cls, raw: str) -> "MainType":
        """
        Map any string to its MainType.

        Standard names are matched case-insensitively and come back as
        the shared constants. Other tokens keep their original casing.

        Args:
            raw: The type token, e.g. "text", "VIDEO", "x-world", "chemical"

        Returns:
            The matching MainType (never fails)
        """
        literal = raw.lower()
        if literal in _RANKS:
            return _STANDARD_BY_NAME[literal]
        if literal.startswith("x-"):
            return cls.extension(raw)
        return cls.ietf(raw)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def is_standard(self) -> bool:
        return self.kind is MainTypeKind.STANDARD

    @property
    def is_ietf(self) -> bool:
        return self.kind is MainTypeKind.IETF

    @property
    def is_extension(self) -> bool:
        return self.kind is MainTypeKind.EXTENSION

    def _sort_key(self) -> Tuple[int, str]:
        if self.kind is MainTypeKind.STANDARD:
            return _RANKS[self.token], self.token
        if self.kind is MainTypeKind.IETF:
            return _IETF_RANK, self.token.casefold()
        return _EXTENSION_RANK, self.token.casefold()

    # =========================================================================
    # COMPARISON
    # =========================================================================

    def __eq__(self, other: object) -> bool:
        if isinstance(other, str):
            other = MainType.classify(other)
        if not isinstance(other, MainType):
            return NotImplemented
        return (
            self.kind is other.kind
            and self.token.casefold() == other.token.casefold()
        )

    def __hash__(self) -> int:
        return hash(self.token.casefold())

    def __lt__(self, other: Union["MainType", str]) -> bool:
        if isinstance(other, str):
            other = MainType.classify(other)
        if not isinstance(other, MainType):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return self.token

    def __repr__(self) -> str:
        if self.kind is MainTypeKind.STANDARD:
            return f"MainType.{self.token.upper()}"
        return f"MainType.{self.kind.value}({self.token!r})"


_STANDARD_BY_NAME = {
    name: MainType(MainTypeKind.STANDARD, name) for name in STANDARD_NAMES
}

for _name, _main_type in _STANDARD_BY_NAME.items():
    setattr(MainType, _name.upper(), _main_type)
del _name, _main_type

MainType.STANDARD_TYPES = frozenset(_STANDARD_BY_NAME.values())
