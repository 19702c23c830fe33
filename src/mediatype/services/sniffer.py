"""
=============================================================================
CONTENT SNIFFING
=============================================================================

Works out a media type from what a file contains rather than what it is
called, by asking libmagic (through python-magic). The result is a raw
media type string in the same shape the `file --mime` command prints:

    application/pdf; charset=binary
    text/x-shellscript; charset=us-ascii
    text/plain; charset=utf-8

MediaType.from_data() and MediaType.from_path() feed that string into
MediaType.parse().

=============================================================================
DETECTION ORDER
=============================================================================

    ┌──────────────────────────────────────────────────────────────────────┐
    │                          MagicSniffer                                │
    ├──────────────────────────────────────────────────────────────────────┤
    │                                                                       │
    │  On construction:                                                     │
    │  1. Try each magic database source in order ──► first that loads     │
    │     (path, $MAGIC, libmagic default, /usr/share/file/magic.mgc)      │
    │                                                                       │
    │  For each lookup:                                                     │
    │  2. Directory? ──────────────────────► inode/directory               │
    │  3. libmagic (MIME_TYPE | MIME_ENCODING) ──► video/mp4; charset=...  │
    │                                                                       │
    │  For files only:                                                      │
    │  4. Generic result (text/plain, octet-stream) and a known            │
    │     extension? ──────────────────────► extension wins, charset kept  │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

Anything implementing the ContentSniffer protocol can stand in for
MagicSniffer.

=============================================================================
"""

import functools
import logging
import mimetypes
import os
from os import PathLike
from pathlib import Path
from typing import List, Optional, Protocol, Tuple, Union, runtime_checkable

import magic

from ..config import MediaTypeConfig


logger = logging.getLogger(__name__)


SYSTEM_MAGIC_FILE = "/usr/share/file/magic.mgc"


@runtime_checkable
class ContentSniffer(Protocol):
    """Anything that can name the media type of some content."""

    def sniff_bytes(self, data: bytes) -> Optional[str]:
        """Return a raw media type string for `data`, or None."""
        ...

    def sniff_path(self, path: Union[str, PathLike]) -> Optional[str]:
        """Return a raw media type string for the file at `path`, or None."""
        ...


# =============================================================================
# EXTENSION FALLBACK
# =============================================================================
#
# libmagic cannot tell CSS from plain text. For files, a generic content
# result is refined by the file extension. These override the platform's
# mimetypes database where it is missing or outdated.
#
EXTENSION_TYPES = {
    ".css": "text/css",
    ".csv": "text/csv",
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".md": "text/markdown",
    ".yaml": "application/yaml",
    ".yml": "application/yaml",
    ".toml": "application/toml",
    ".woff": "font/woff",
    ".woff2": "font/woff2",
    ".ttf": "font/ttf",
    ".otf": "font/otf",
    ".wasm": "application/wasm",
}

_GENERIC_TYPES = frozenset({"text/plain", "application/octet-stream"})


# =============================================================================
# MAGIC DATABASE
# =============================================================================

def magic_file_candidates(config: MediaTypeConfig) -> List[Tuple[str, Optional[str]]]:
    """
    List the magic databases `config` allows, in the order to try them.

    Returns:
        (source, path) pairs. A path of None means libmagic's own default.
        Sources whose file does not exist are left out.
    """
    candidates = []
    for source in config.magic_sources:
        if source == "path":
            if config.magic_file is not None:
                candidates.append((source, config.magic_file))
        elif source == "environment":
            path = os.environ.get("MAGIC")
            if path and os.path.isfile(path):
                candidates.append((source, path))
        elif source == "system":
            if os.path.isfile(SYSTEM_MAGIC_FILE):
                candidates.append((source, SYSTEM_MAGIC_FILE))
        elif source == "default":
            candidates.append((source, None))
    return candidates


def libmagic_version() -> Optional[str]:
    """
    Version of the libmagic python-magic is bound to, e.g. "5.45".

    Returns None when the library is too old to report it.
    """
    try:
        version = magic.version()
    except NotImplementedError:
        return None
    return f"{version // 100}.{version % 100:02d}"


class MagicSniffer:
    """
    Content sniffer backed by libmagic.

    Loads one magic database when constructed and reuses it for every
    lookup. python-magic serializes calls on the handle, so a sniffer
    may be shared between threads.

    Args:
        config: Supplies the magic database sources, the libmagic flags,
                `sniff_max_bytes` and `extension_fallback`. Defaults to
                MediaTypeConfig().

    Raises:
        ValueError: If no magic database source can be loaded

    Example:
        >>> sniffer = MagicSniffer()
        >>> sniffer.sniff_bytes(b"%PDF-1.7\\n")
        'application/pdf; charset=binary'
    """

    def __init__(self, config: Optional[MediaTypeConfig] = None):
        self.config = config or MediaTypeConfig()
        self.magic_source, self.magic_file, self._magic = self._load()

        try:
            self._magic.setparam(magic.MAGIC_PARAM_BYTES_MAX, self.config.sniff_max_bytes)
        except (NotImplementedError, magic.MagicException) as e:
            logger.debug(f"libmagic ignores sniff_max_bytes: {e}")

    def _load(self) -> Tuple[str, Optional[str], magic.Magic]:
        tried = []
        for source, path in magic_file_candidates(self.config):
            try:
                handle = magic.Magic(
                    mime=True,
                    mime_encoding=self.config.mime_encoding,
                    magic_file=path,
                    uncompress=self.config.uncompress,
                )
            except magic.MagicException as e:
                logger.debug(f"Cannot load magic database from {source} ({path}): {e}")
                tried.append(source)
                continue

            logger.info(f"Loaded magic database from {source} ({path or 'libmagic default'})")
            return source, path, handle

        raise ValueError(
            f"No magic database could be loaded (tried: {', '.join(tried) or 'nothing'})"
        )

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def sniff_bytes(self, data: bytes) -> Optional[str]:
        try:
            raw = self._magic.from_buffer(data[:self.config.sniff_max_bytes])
        except magic.MagicException as e:
            logger.debug(f"Cannot sniff {len(data)} bytes: {e}")
            return None
        return _strip_compression(raw)

    def sniff_path(self, path: Union[str, PathLike]) -> Optional[str]:
        name = Path(path)
        if self.config.follow_symlinks:
            path = Path(os.path.realpath(name))
        elif name.is_symlink():
            return self._render("inode/symlink", "charset=binary")
        else:
            path = name

        # python-magic opens the path itself first, which fails for directories
        if path.is_dir():
            return self._render("inode/directory", "charset=binary")

        try:
            raw = self._magic.from_file(os.fspath(path))
        except (OSError, magic.MagicException) as e:
            logger.debug(f"Cannot sniff {path}: {e}")
            return None

        raw = _strip_compression(raw)
        media_type, _, rest = raw.partition(";")
        media_type = media_type.strip()

        if self.config.extension_fallback and media_type in _GENERIC_TYPES:
            guessed = guess_from_extension(name)
            if guessed is not None and guessed != media_type:
                logger.debug(f"{path}: content says {media_type}, extension says {guessed}")
                return self._render(guessed, rest.strip())

        return raw

    def _render(self, media_type: str, parameters: str) -> str:
        if parameters and self.config.mime_encoding:
            return f"{media_type}; {parameters}"
        return media_type


def _strip_compression(raw: str) -> str:
    """
    Drop the " compressed-encoding=..." suffix libmagic appends when
    looking inside compressed files. It is not a valid parameter list.
    """
    raw, _, encoding = raw.partition(" compressed-encoding=")
    if encoding:
        logger.debug(f"{raw}: found inside {encoding}")
    return raw


@functools.lru_cache(maxsize=1)
def default_sniffer() -> MagicSniffer:
    """The shared MagicSniffer used when a caller does not pass one."""
    return MagicSniffer()


def guess_from_extension(path: Union[str, PathLike]) -> Optional[str]:
    """
    Guess a media type from a file name alone.

    Examples:
        >>> guess_from_extension("style.css")
        'text/css'
        >>> guess_from_extension("notes") is None
        True
    """
    suffix = Path(path).suffix.lower()
    if suffix in EXTENSION_TYPES:
        return EXTENSION_TYPES[suffix]
    guessed, _ = mimetypes.guess_type(Path(path).name, strict=False)
    return guessed
