"""
Unit tests for the string scanner.
"""

import pytest

from mediatype.core.scanner import (
    Scanner,
    STRING_SPECIALS,
    TOKEN_CHARACTERS,
    WHITESPACE,
)


class TestLookahead:
    """Tests for Scanner.lookahead()."""

    def test_lookahead_does_not_consume(self):
        """Test that lookahead leaves the cursor alone."""
        scanner = Scanner("abcdef")

        assert scanner.lookahead(3) == "abc"
        assert scanner.position == 0

    def test_lookahead_past_end(self):
        """Test that asking for too many characters gives None."""
        scanner = Scanner("ab")

        assert scanner.lookahead(2) == "ab"
        assert scanner.lookahead(3) is None

    def test_lookahead_ignores_skip_set(self):
        """Test that leading whitespace is part of the lookahead."""
        scanner = Scanner("  ab")

        assert scanner.lookahead(2) == "  "


class TestScanUnsignedInteger:
    """Tests for fixed-length radix integer scanning."""

    def test_scan_hex(self):
        """Test reading two hex digits."""
        scanner = Scanner("40example")

        assert scanner.scan_unsigned_integer(2, 16) == 0x40
        assert scanner.remainder == "example"

    def test_scan_uppercase_hex(self):
        """Test that A-F are digits too."""
        scanner = Scanner("00E9")

        assert scanner.scan_unsigned_integer(4, 16) == 0xE9

    def test_scan_decimal_and_binary(self):
        """Test radixes other than 16."""
        assert Scanner("123").scan_unsigned_integer(3, 10) == 123
        assert Scanner("101").scan_unsigned_integer(3, 2) == 5

    def test_invalid_digit_consumes_nothing(self):
        """Test that a non-digit leaves the cursor where it was."""
        scanner = Scanner("4g")

        assert scanner.scan_unsigned_integer(2, 16) is None
        assert scanner.position == 0

    def test_digit_out_of_radix(self):
        """Test that '2' is not a binary digit."""
        assert Scanner("12").scan_unsigned_integer(2, 2) is None

    def test_insufficient_input(self):
        """Test that fewer characters than `length` gives None."""
        scanner = Scanner("4")

        assert scanner.scan_unsigned_integer(2, 16) is None
        assert scanner.position == 0

    @pytest.mark.parametrize("text", ["+1", "-1", "_1", " 1", "1 "])
    def test_rejects_int_leniency(self, text: str):
        """Test that signs, underscores and spaces are not digits."""
        assert Scanner(text, skip=None).scan_unsigned_integer(2, 16) is None

    def test_rejects_non_ascii_digits(self):
        """Test that Unicode digits are not accepted."""
        assert Scanner("١٢").scan_unsigned_integer(2, 10) is None

    def test_unsupported_radix(self):
        """Test that radix outside 2..36 is an error."""
        with pytest.raises(ValueError):
            Scanner("11").scan_unsigned_integer(2, 37)


class TestTokenScanning:
    """Tests for the scan_* methods."""

    def test_scan_characters_skips_whitespace(self):
        """Test that the default skip-set is applied first."""
        scanner = Scanner("  \ttext/plain")

        assert scanner.scan_characters(TOKEN_CHARACTERS) == "text"
        assert scanner.remainder == "/plain"

    def test_scan_characters_empty_run_restores_position(self):
        """Test that skipped whitespace is put back on failure."""
        scanner = Scanner("  /plain")

        assert scanner.scan_characters(TOKEN_CHARACTERS) is None
        assert scanner.position == 0

    def test_scan_string(self):
        """Test matching a literal."""
        scanner = Scanner(" ; a")

        assert scanner.scan_string(";") == ";"
        assert scanner.scan_string("=") is None
        assert scanner.remainder == " a"

    def test_scan_character(self):
        """Test reading single characters until the end."""
        scanner = Scanner("ab", skip=None)

        assert scanner.scan_character() == "a"
        assert scanner.scan_character() == "b"
        assert scanner.scan_character() is None

    def test_scan_up_to_characters(self):
        """Test stopping at a string special."""
        scanner = Scanner('abc "def', skip=None)

        assert scanner.scan_up_to_characters(STRING_SPECIALS) == "abc "
        assert scanner.remainder == '"def'
        assert scanner.scan_up_to_characters(STRING_SPECIALS) is None

    def test_scan_up_to_string_reads_to_end(self):
        """Test that a missing stop string means read to the end."""
        scanner = Scanner("json")

        assert scanner.scan_up_to_string(";") == "json"
        assert scanner.is_at_end

    def test_scan_up_to_string_empty(self):
        """Test that an immediate stop string gives None."""
        assert Scanner("; a").scan_up_to_string(";") is None


class TestSkipping:
    """Tests for the skip-set and is_at_end."""

    def test_is_at_end_ignores_skippable(self):
        """Test that trailing whitespace counts as the end."""
        scanner = Scanner("a  \n")
        scanner.scan_characters(TOKEN_CHARACTERS)

        assert scanner.is_at_end

    def test_is_at_end_without_skipping(self):
        """Test that whitespace is significant when skipping is off."""
        scanner = Scanner("a  ", skip=None)
        scanner.scan_characters(TOKEN_CHARACTERS)

        assert not scanner.is_at_end

    def test_skipping_restores(self):
        """Test that the context manager restores the skip-set."""
        scanner = Scanner("x", skip=WHITESPACE)

        with scanner.skipping(None):
            assert scanner.skip is None

        assert scanner.skip == WHITESPACE

    def test_skipping_restores_on_error(self):
        """Test that the skip-set comes back even when the block raises."""
        scanner = Scanner("x", skip=WHITESPACE)

        with pytest.raises(RuntimeError):
            with scanner.skipping(None):
                raise RuntimeError("boom")

        assert scanner.skip == WHITESPACE
