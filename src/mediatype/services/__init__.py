"""
=============================================================================
SERVICES PACKAGE - Collaborators of the Media Type Core
=============================================================================

The parser itself does no I/O and knows no encodings. These modules sit
beside it:

    ┌──────────────────────────────────────────────────────────────────────┐
    │                                                                       │
    │   bytes / file ──► ContentSniffer ──► "text/plain; charset=utf-8"    │
    │                                              │                        │
    │                                              ▼                        │
    │                                       MediaType.parse()               │
    │                                              │                        │
    │   charset parameter ◄──► charsets ◄──────────┘                        │
    │   ("iso-8859-1")          (Python codec "iso8859-1")                  │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

=============================================================================
IMPORTS AND EXPORTS
=============================================================================
"""

from .charsets import canonical_charset_name, encoding_for_charset
from .sniffer import (
    ContentSniffer,
    MagicSniffer,
    default_sniffer,
    guess_from_extension,
    libmagic_version,
)

__all__ = [
    "canonical_charset_name",  # Python codec → IANA charset name
    "encoding_for_charset",    # IANA charset name → Python codec
    "ContentSniffer",          # Protocol for content-based detection
    "MagicSniffer",            # libmagic-backed ContentSniffer
    "default_sniffer",         # Shared MagicSniffer
    "libmagic_version",        # e.g. "5.45"
    "guess_from_extension",    # File-name-only guess
]
