"""
=============================================================================
TYPES PACKAGE - The Media Type Model
=============================================================================

    MediaType
    ├── type: MainType          application, text, ietf("chemical"), ...
    ├── subtype: str            "json", "vnd.api+json", ...
    └── parameters: [Parameter] charset=utf-8, boundary="--xyz", ...

=============================================================================
IMPORTS AND EXPORTS
=============================================================================
"""

from .errors import MediaTypeDecodeError, MediaTypeParseError
from .main_type import MainType, MainTypeKind, STANDARD_NAMES
from .parameter import Parameter, quote
from .media_type import MediaType

__all__ = [
    "MediaType",             # type/subtype; parameters
    "MainType",              # The "type" part, with its ordering
    "MainTypeKind",          # STANDARD / IETF / EXTENSION
    "STANDARD_NAMES",        # The eleven registered top-level types
    "Parameter",             # name=value
    "quote",                 # Render a parameter value
    "MediaTypeParseError",   # Malformed input (with offset)
    "MediaTypeDecodeError",  # Bad serialized form
]
