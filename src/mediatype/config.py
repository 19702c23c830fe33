"""
=============================================================================
CONFIGURATION
=============================================================================

Settings for the parts of the package that touch the outside world: the
libmagic content sniffer (which magic database to load, which libmagic
flags to pass, whether to trust file extensions) and the command-line
tool's logging.

The parser has no settings. Its grammar is fixed.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   Priority (highest to lowest):                                     │
    │                                                                      │
    │   1. Command-line arguments                                         │
    │      └── python -m mediatype --log-level DEBUG sniff report.pdf    │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── MEDIATYPE_MAGIC_FILE=~/magic.mgc python -m mediatype ...  │
    │                                                                      │
    │   3. Defaults in MediaTypeConfig                                    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
MAGIC DATABASE SOURCES
=============================================================================

The sniffer tries each entry of `magic_sources` in order and keeps the
first database libmagic can load:

    path         MediaTypeConfig.magic_file, if set
    environment  the file named by $MAGIC, if it exists
    default      libmagic's compiled-in default database
    system       /usr/share/file/magic.mgc, if it exists

=============================================================================
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("text", "json")
MAGIC_SOURCES = ("path", "environment", "default", "system")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class MediaTypeConfig:
    """
    Configuration for sniffing and logging.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    SNIFFING
    - sniff_max_bytes, extension_fallback

    MAGIC DATABASE
    - magic_file, magic_sources

    LIBMAGIC FLAGS
    - mime_encoding, uncompress, follow_symlinks

    LOGGING
    - log_level, log_format

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # SNIFFING
    # ─────────────────────────────────────────────────────────────────────

    sniff_max_bytes: int = 1024 * 1024  # 1 MB
    """
    How many bytes libmagic looks at, for buffers and files alike.
    Passed to libmagic as MAGIC_PARAM_BYTES_MAX.
    """

    extension_fallback: bool = True
    """
    Let the file extension refine a generic content result.
    "text/plain" for style.css becomes "text/css".
    """

    # ─────────────────────────────────────────────────────────────────────
    # MAGIC DATABASE
    # ─────────────────────────────────────────────────────────────────────

    magic_file: Optional[str] = None
    """
    Explicit path to a compiled magic database (magic.mgc).
    Used by the "path" source.
    """

    magic_sources: Tuple[str, ...] = MAGIC_SOURCES
    """
    Where to look for a magic database, in order. The first one that
    loads wins.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LIBMAGIC FLAGS
    # ─────────────────────────────────────────────────────────────────────

    mime_encoding: bool = True
    """
    Append "; charset=..." to every result (MAGIC_MIME_ENCODING).
    Without it only the type/subtype is reported.
    """

    uncompress: bool = False
    """
    Look inside compressed files (MAGIC_COMPRESS).
    A gzipped tarball is then reported as application/x-tar.
    """

    follow_symlinks: bool = True
    """
    Sniff the target of a symbolic link instead of the link itself.
    Off, a link is reported as inode/symlink.
    """

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "WARNING"
    """
    Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    DEBUG shows why each rejected media type was rejected.
    """

    log_format: str = "text"
    """
    Log format: 'json' or 'text'.
    """

    @classmethod
    def from_env(cls) -> "MediaTypeConfig":
        """
        Create configuration from environment variables.

        =====================================================================
        ENVIRONMENT VARIABLES
        =====================================================================

        MEDIATYPE_SNIFF_MAX_BYTES      Bytes examined (default: 1048576)
        MEDIATYPE_EXTENSION_FALLBACK   1/0, true/false (default: true)
        MEDIATYPE_MAGIC_FILE           Magic database path (default: unset)
        MEDIATYPE_MAGIC_SOURCES        Comma-separated source order
                                       (default: path,environment,default,system)
        MEDIATYPE_MIME_ENCODING        Report charsets (default: true)
        MEDIATYPE_UNCOMPRESS           Look inside compressed files (default: false)
        MEDIATYPE_FOLLOW_SYMLINKS      Sniff link targets (default: true)
        MEDIATYPE_LOG_LEVEL            Logging level (default: WARNING)
        MEDIATYPE_LOG_FORMAT           text or json (default: text)

        $MAGIC itself is read by the "environment" source when the
        sniffer loads, the same way file(1) reads it.

        =====================================================================

        Raises:
            ValueError: If a variable cannot be converted
        """
        sources = os.getenv("MEDIATYPE_MAGIC_SOURCES", ",".join(MAGIC_SOURCES))
        return cls(
            sniff_max_bytes=int(os.getenv("MEDIATYPE_SNIFF_MAX_BYTES", str(1024 * 1024))),
            extension_fallback=_env_bool("MEDIATYPE_EXTENSION_FALLBACK", True),
            magic_file=os.getenv("MEDIATYPE_MAGIC_FILE") or None,
            magic_sources=tuple(s.strip().lower() for s in sources.split(",") if s.strip()),
            mime_encoding=_env_bool("MEDIATYPE_MIME_ENCODING", True),
            uncompress=_env_bool("MEDIATYPE_UNCOMPRESS", False),
            follow_symlinks=_env_bool("MEDIATYPE_FOLLOW_SYMLINKS", True),
            log_level=os.getenv("MEDIATYPE_LOG_LEVEL", "WARNING").upper(),
            log_format=os.getenv("MEDIATYPE_LOG_FORMAT", "text").lower(),
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad setting fails immediately rather
        than on the first file sniffed.
        """
        if self.sniff_max_bytes < 1:
            raise ValueError(f"sniff_max_bytes must be >= 1, got {self.sniff_max_bytes}")

        if not self.magic_sources:
            raise ValueError("magic_sources must name at least one source")

        for source in self.magic_sources:
            if source not in MAGIC_SOURCES:
                raise ValueError(
                    f"Invalid magic source: {source}. Must be one of {', '.join(MAGIC_SOURCES)}."
                )

        if self.magic_file is not None and not os.path.isfile(self.magic_file):
            raise ValueError(f"magic_file does not exist: {self.magic_file}")

        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. Must be one of {', '.join(LOG_LEVELS)}."
            )

        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"Invalid log_format: {self.log_format}. Must be 'text' or 'json'."
            )

    @property
    def level(self) -> int:
        """log_level as a logging module constant."""
        return getattr(logging, self.log_level.upper(), logging.WARNING)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return _parse_bool(name, value)


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")
