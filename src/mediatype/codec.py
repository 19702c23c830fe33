"""
=============================================================================
JSON INTERCHANGE
=============================================================================

In structured data a media type is a single string: its description.

    {"content_type": "text/html; charset=utf-8"}

Decoding parses that string and fails outright if it does not parse;
there is no partially decoded media type.

=============================================================================
USAGE
=============================================================================

    # Whole documents
    json.dumps({"type": media_type}, cls=MediaTypeJSONEncoder)

    # Single values
    text = to_json(media_type)      # '"text/html; charset=utf-8"'
    media_type = from_json(text)

    # A value already loaded by json.loads()
    media_type = decode_media_type(document["content_type"])

=============================================================================
"""

import json
from typing import Any

from .types.errors import MediaTypeDecodeError, MediaTypeParseError
from .types.media_type import MediaType


class MediaTypeJSONEncoder(json.JSONEncoder):
    """JSON encoder that writes MediaType values as their description."""

    def default(self, o: Any) -> Any:
        if isinstance(o, MediaType):
            return o.description
        return super().default(o)


def to_json(media_type: MediaType) -> str:
    """Encode a media type as a JSON string literal."""
    return json.dumps(media_type.description)


def decode_media_type(value: Any) -> MediaType:
    """
    Decode a media type from an already-loaded JSON value.

    Raises:
        MediaTypeDecodeError: If `value` is not a string or not a valid
            media type
    """
    if not isinstance(value, str):
        raise MediaTypeDecodeError(
            f"Expected a media type string, got {type(value).__name__}"
        )
    try:
        return MediaType.parse_strict(value)
    except MediaTypeParseError as e:
        raise MediaTypeDecodeError(f"Invalid media type {value!r}") from e


def from_json(text: str) -> MediaType:
    """
    Decode a media type from JSON text.

    Raises:
        MediaTypeDecodeError: If `text` is not JSON, not a JSON string,
            or not a valid media type
    """
    try:
        value = json.loads(text)
    except json.JSONDecodeError as e:
        raise MediaTypeDecodeError(f"Invalid JSON: {e}") from e
    return decode_media_type(value)
