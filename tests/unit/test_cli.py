"""
Unit tests for the command-line interface.
"""

import json
import logging

import pytest

from mediatype import __version__
from mediatype.__main__ import JSONLogFormatter, main


class TestParseCommand:
    """Tests for `mediatype parse`."""

    def test_parse(self, capsys, quoted_media_type: str):
        assert main(["parse", quoted_media_type]) == 0

        out = capsys.readouterr().out
        assert "type:       text (standard)" in out
        assert "subtype:    vnd.json+yaml" in out
        assert "parameter:  text = '\"quoted\"'" in out

    def test_parse_json(self, capsys, soap_media_type):
        assert main(["parse", "--json", str(soap_media_type)]) == 0

        result = json.loads(capsys.readouterr().out)
        assert result["type"] == "application"
        assert result["kind"] == "standard"
        assert result["subtype"] == "soap+xml"
        assert result["parameters"] == [
            {"name": "charset", "value": "utf-8"},
            {"name": "action", "value": "urn:CreateCredential"},
        ]
        assert result["description"] == str(soap_media_type)

    def test_parse_error(self, capsys):
        """Test that malformed input exits 1 with the offset on stderr."""
        assert main(["parse", "bogus"]) == 1

        err = capsys.readouterr().err
        assert "Error:" in err
        assert "offset 5" in err


class TestSniffCommand:
    """Tests for `mediatype sniff`."""

    def test_sniff_files(self, capsys, make_file):
        pdf = make_file("report.pdf", b"%PDF-1.4\n")
        css = make_file("style.css", b"body { margin: 0 }\n")

        assert main(["sniff", str(pdf), str(css)]) == 0

        out = capsys.readouterr().out
        assert f"{pdf}: application/pdf; charset=binary" in out
        assert f"{css}: text/css; charset=us-ascii" in out

    def test_sniff_no_extension(self, capsys, make_file):
        css = make_file("style.css", b"body { margin: 0 }\n")

        assert main(["sniff", "--no-extension", str(css)]) == 0
        assert "text/plain" in capsys.readouterr().out

    def test_sniff_libmagic_types(self, capsys, make_file):
        """Test that scripts and containers get their specific types."""
        script = make_file("deploy", b"#!/bin/sh\necho deploying\n")
        movie = make_file("clip.bin", b"\x00\x00\x00\x18ftypmp42\x00\x00\x00\x00mp42isom")

        assert main(["sniff", str(script), str(movie)]) == 0

        out = capsys.readouterr().out
        assert f"{script}: text/x-shellscript; charset=us-ascii" in out
        assert f"{movie}: video/mp4; charset=binary" in out

    def test_sniff_no_charset(self, capsys, make_file):
        pdf = make_file("report.pdf", b"%PDF-1.4\n")

        assert main(["sniff", "--no-charset", str(pdf)]) == 0
        assert capsys.readouterr().out.strip() == f"{pdf}: application/pdf"

    def test_sniff_missing_magic_file(self, capsys, tmp_path, make_file):
        pdf = make_file("report.pdf", b"%PDF-1.4\n")

        assert main(["sniff", "--magic-file", str(tmp_path / "none.mgc"), str(pdf)]) == 2
        assert "magic_file does not exist" in capsys.readouterr().err

    def test_sniff_missing_file(self, capsys, tmp_path):
        missing = tmp_path / "missing.bin"

        assert main(["sniff", str(missing)]) == 1
        assert f"{missing}: unknown" in capsys.readouterr().out


class TestMagicCommand:
    """Tests for `mediatype magic`."""

    def test_magic(self, capsys, monkeypatch):
        monkeypatch.delenv("MAGIC", raising=False)
        monkeypatch.delenv("MEDIATYPE_MAGIC_FILE", raising=False)

        assert main(["magic", "--uncompress"]) == 0

        out = capsys.readouterr().out
        assert "libmagic:   " in out
        assert "database:   libmagic default (default)" in out
        assert "sources:    path, environment, default, system" in out
        assert "uncompress: on" in out

    def test_bad_source_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("MEDIATYPE_MAGIC_SOURCES", "builtin")

        assert main(["magic"]) == 2
        assert "Invalid magic source" in capsys.readouterr().err


class TestCharsetCommand:
    """Tests for `mediatype charset`."""

    def test_known(self, capsys):
        assert main(["charset", "Latin1"]) == 0

        out = capsys.readouterr().out
        assert "codec:      iso8859-1" in out
        assert "charset:    iso-8859-1" in out

    def test_unknown(self, capsys):
        assert main(["charset", "klingon"]) == 1
        assert "unknown charset" in capsys.readouterr().err


class TestConfiguration:
    """Tests for environment and flag handling."""

    def test_bad_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("MEDIATYPE_LOG_FORMAT", "xml")

        assert main(["parse", "text/plain"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_bad_max_bytes_flag(self, capsys, make_file):
        path = make_file("a.txt", b"a")

        assert main(["sniff", "--max-bytes", "0", str(path)]) == 2

    def test_log_level_flag(self, capsys):
        assert main(["--log-level", "DEBUG", "parse", "text/plain"]) == 0
        assert logging.getLogger("mediatype").level == logging.DEBUG

    def test_debug_log_explains_rejection(self, capsys):
        """Test that a sniffer failure is logged at DEBUG."""
        assert main(["--log-level", "DEBUG", "sniff", "/nonexistent/file"]) == 1
        assert "Cannot sniff" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        out = capsys.readouterr().out
        assert __version__ in out
        assert "libmagic" in out


class TestJSONLogFormatter:
    """Tests for JSON log lines."""

    def test_format(self):
        record = logging.LogRecord(
            "mediatype.types.media_type", logging.DEBUG, __file__, 1,
            "Rejected media type: %s", ("bogus",), None,
        )
        entry = json.loads(JSONLogFormatter().format(record))

        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "mediatype.types.media_type"
        assert entry["message"] == "Rejected media type: bogus"
