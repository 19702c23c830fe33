"""
Unit tests for charset name resolution.
"""

import pytest

from mediatype.services.charsets import canonical_charset_name, encoding_for_charset


class TestEncodingForCharset:
    """Tests for IANA name → codec name."""

    @pytest.mark.parametrize("name, codec", [
        ("UTF-8", "utf-8"),
        ("utf8", "utf-8"),
        ("US-ASCII", "ascii"),
        ("Latin1", "iso8859-1"),
        ("ISO-8859-1", "iso8859-1"),
        ("windows-1252", "cp1252"),
        ("CP-1250", "cp1250"),
        ("Shift_JIS", "shift_jis"),
        ("macintosh", "mac-roman"),
        ("Windows-31J", "cp932"),
    ])
    def test_known_names(self, name: str, codec: str):
        assert encoding_for_charset(name) == codec

    @pytest.mark.parametrize("name", ["", "abcdefgh", "binary", "utf-9"])
    def test_unknown_names(self, name: str):
        assert encoding_for_charset(name) is None

    @pytest.mark.parametrize("name", ["base64", "zlib", "rot13", "hex"])
    def test_non_text_codecs(self, name: str):
        """Test that bytes-to-bytes codecs are not charsets."""
        assert encoding_for_charset(name) is None


class TestCanonicalCharsetName:
    """Tests for codec name → IANA name."""

    @pytest.mark.parametrize("encoding, name", [
        ("utf8", "utf-8"),
        ("utf-8-sig", "utf-8"),
        ("ascii", "us-ascii"),
        ("latin-1", "iso-8859-1"),
        ("iso8859_15", "iso-8859-15"),
        ("cp1252", "windows-1252"),
        ("utf_16_le", "utf-16le"),
        ("mac_roman", "macintosh"),
        ("cp932", "windows-31j"),
        ("euc_jp", "euc-jp"),
        ("koi8_r", "koi8-r"),
    ])
    def test_known_codecs(self, encoding: str, name: str):
        assert canonical_charset_name(encoding) == name

    def test_unknown_codec(self):
        assert canonical_charset_name("no-such-codec") is None

    def test_fallback_uses_codec_name(self):
        """Test a codec missing from the table."""
        assert canonical_charset_name("cp037") == "cp037"

    @pytest.mark.parametrize("encoding", [
        "utf-8", "ascii", "latin-1", "cp1251", "cp932", "mac-roman",
        "utf-16-be", "big5hkscs", "iso2022_jp", "gb18030",
    ])
    def test_round_trip(self, encoding: str):
        """Test that the IANA name resolves back to the same codec."""
        codec = encoding_for_charset(encoding)

        assert encoding_for_charset(canonical_charset_name(encoding)) == codec
