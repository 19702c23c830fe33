"""
Unit tests for the JSON interchange form.
"""

import json

import pytest

from mediatype import MediaType, MediaTypeDecodeError, MediaTypeParseError
from mediatype.codec import (
    MediaTypeJSONEncoder,
    decode_media_type,
    from_json,
    to_json,
)


class TestEncode:
    """Tests for encoding media types."""

    def test_to_json(self, json_media_type: str):
        media_type = MediaType.parse(json_media_type)

        assert to_json(media_type) == '"application/json; charset=utf-8"'

    def test_encoder_in_document(self, soap_media_type: MediaType):
        """Test that a media type inside a document becomes its description."""
        text = json.dumps({"content_type": soap_media_type}, cls=MediaTypeJSONEncoder)

        assert json.loads(text) == {"content_type": soap_media_type.description}

    def test_encoder_keeps_parsed_description(self):
        """Test that the parsed input, not a re-rendering, is written."""
        media_type = MediaType.parse("TEXT/plain;charset=utf-8")

        assert to_json(media_type) == '"TEXT/plain;charset=utf-8"'

    def test_encoder_rejects_other_objects(self):
        with pytest.raises(TypeError):
            json.dumps({"x": object()}, cls=MediaTypeJSONEncoder)


class TestDecode:
    """Tests for decoding media types."""

    def test_from_json(self, quoted_media_type: str):
        media_type = from_json(json.dumps(quoted_media_type))

        assert media_type == MediaType.parse(quoted_media_type)
        assert media_type.description == quoted_media_type

    def test_round_trip(self, soap_media_type: MediaType):
        assert from_json(to_json(soap_media_type)) == soap_media_type

    def test_invalid_media_type(self):
        """Test that an unparseable string fails the whole decode."""
        with pytest.raises(MediaTypeDecodeError) as exc_info:
            from_json('"bogus"')

        assert isinstance(exc_info.value.__cause__, MediaTypeParseError)

    @pytest.mark.parametrize("value", [42, None, ["text/plain"], {"type": "text"}])
    def test_not_a_string(self, value):
        with pytest.raises(MediaTypeDecodeError):
            decode_media_type(value)

    def test_invalid_json(self):
        with pytest.raises(MediaTypeDecodeError):
            from_json("text/plain")

    def test_decode_error_is_value_error(self):
        """Test that callers catching ValueError see decode failures."""
        with pytest.raises(ValueError):
            decode_media_type("no slash here")
