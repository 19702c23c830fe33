"""
=============================================================================
MEDIATYPE - Strict RFC 2045 Media Type Parsing and Rendering
=============================================================================

Parses strings like

    text/html; charset=utf-8
    application/soap+xml; charset=utf-8; action="urn:CreateCredential"

into structured MediaType values, renders them back with correct quoting
and escaping, compares them case-insensitively, and sorts them.

=============================================================================
PACKAGE STRUCTURE
=============================================================================

    mediatype/
    ├── __init__.py          # This file - package exports
    ├── __main__.py          # CLI entry point (python -m mediatype)
    ├── config.py            # MediaTypeConfig dataclass
    ├── codec.py             # JSON interchange form
    ├── core/                # Low-level components
    │   └── scanner.py       # String cursor and character classes
    ├── types/               # The media type model
    │   ├── main_type.py     # MainType (application, text, ietf, x-...)
    │   ├── parameter.py     # Parameter (name=value, quoting)
    │   ├── media_type.py    # MediaType (parse, render, compare)
    │   └── errors.py        # Parse and decode errors
    └── services/            # Collaborators
        ├── charsets.py      # IANA charset names ↔ Python codecs
        └── sniffer.py       # Content-based detection (libmagic)

=============================================================================
QUICK START
=============================================================================

    from mediatype import MediaType, MainType, Parameter

    # Parse (None on malformed input)
    media_type = MediaType.parse('text/plain; charset="iso-8859-1"')
    media_type.type                          # MainType.TEXT
    media_type.parameter_value("CHARSET")    # 'iso-8859-1'
    media_type.charset                       # 'iso8859-1' (Python codec)

    # Build
    media_type = MediaType(MainType.APPLICATION, "json")
    media_type.set_parameter("charset", "utf-8")
    str(media_type)                          # 'application/json; charset=utf-8'

    # Sniff
    MediaType.from_data(b"%PDF-1.7\n")     # application/pdf; charset=binary

=============================================================================
"""

__version__ = "1.0.0"

from .config import MediaTypeConfig
from .types import (
    MainType,
    MainTypeKind,
    MediaType,
    MediaTypeDecodeError,
    MediaTypeParseError,
    Parameter,
)
from .services import (
    ContentSniffer,
    MagicSniffer,
    canonical_charset_name,
    encoding_for_charset,
)

__all__ = [
    "MediaType",
    "MainType",
    "MainTypeKind",
    "Parameter",
    "MediaTypeParseError",
    "MediaTypeDecodeError",
    "MediaTypeConfig",
    "ContentSniffer",
    "MagicSniffer",
    "canonical_charset_name",
    "encoding_for_charset",
    "__version__",
]
