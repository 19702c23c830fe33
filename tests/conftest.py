"""
pytest configuration and fixtures.
"""

import logging
from pathlib import Path
from typing import Callable
import pytest

# Add src to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mediatype import MagicSniffer, MediaType, MediaTypeConfig


@pytest.fixture
def json_media_type() -> str:
    """Plain media type with a single token parameter."""
    return "application/json; charset=utf-8"


@pytest.fixture
def quoted_media_type() -> str:
    """Media type whose parameters need quoting and escapes."""
    return 'text/vnd.json+yaml; charset="iso-8859-1"; text="\\"quoted\\""'


@pytest.fixture
def soap_media_type() -> MediaType:
    """Media type built from fields, with a value that must be quoted."""
    media_type = MediaType("application", "soap+xml")
    media_type.set_parameter("charset", "utf-8")
    media_type.set_parameter("action", "urn:CreateCredential")
    return media_type


@pytest.fixture
def config() -> MediaTypeConfig:
    """Sniffer configuration with a small read limit."""
    return MediaTypeConfig(
        sniff_max_bytes=4096,
        extension_fallback=True,
        log_level="DEBUG",
    )


@pytest.fixture
def sniffer(config: MediaTypeConfig) -> MagicSniffer:
    return MagicSniffer(config)


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory writing `data` to a file called `name` in a temp directory."""

    def _make_file(name: str, data: bytes) -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return _make_file


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """The CLI reconfigures the package logger; put it back after each test."""
    package_logger = logging.getLogger("mediatype")
    handlers = package_logger.handlers[:]
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
