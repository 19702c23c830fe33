"""
=============================================================================
CHARSET NAME RESOLUTION
=============================================================================

Media types name character encodings by their IANA charset names
("us-ascii", "iso-8859-1", "windows-1252"). Python names the same
encodings by codec ("ascii", "iso8859-1", "cp1252"). This module
translates between the two.

    ┌──────────────────────────────────────────────────────────────────────┐
    │                                                                       │
    │   "Latin1", "ISO-8859-1",   encoding_for_charset()    "iso8859-1"    │
    │   "l1", "iso_8859_1"     ──────────────────────────►  (codec name)   │
    │                                                                       │
    │   "iso8859-1", "latin-1"   canonical_charset_name()   "iso-8859-1"   │
    │   (any codec alias)      ──────────────────────────►  (IANA name)    │
    │                                                                       │
    └──────────────────────────────────────────────────────────────────────┘

Lookups go through the codecs registry, so every alias Python knows is
accepted. Spellings with stray separators ("CP-1250", "utf_16") are
retried with the separators removed.

=============================================================================
"""

import codecs
import re
from typing import Optional


# =============================================================================
# CODEC → IANA NAME
# =============================================================================
#
# Keyed by CodecInfo.name. Codecs missing here fall back to the patterns
# below, then to the codec name itself with "_" turned into "-".
#
# Reference:
# https://www.iana.org/assignments/character-sets/character-sets.xhtml
#
IANA_NAMES = {
    "ascii": "us-ascii",
    "utf-8": "utf-8",
    "utf-8-sig": "utf-8",
    "utf-16": "utf-16",
    "utf-16-le": "utf-16le",
    "utf-16-be": "utf-16be",
    "utf-32": "utf-32",
    "utf-32-le": "utf-32le",
    "utf-32-be": "utf-32be",
    "utf-7": "utf-7",
    "mac-roman": "macintosh",
    "koi8-r": "koi8-r",
    "koi8-u": "koi8-u",
    "shift_jis": "shift_jis",
    "cp932": "windows-31j",
    "euc_jp": "euc-jp",
    "iso2022_jp": "iso-2022-jp",
    "euc_kr": "euc-kr",
    "iso2022_kr": "iso-2022-kr",
    "gb2312": "gb2312",
    "gbk": "gbk",
    "gb18030": "gb18030",
    "big5": "big5",
    "big5hkscs": "big5-hkscs",
    "cp437": "ibm437",
    "cp850": "ibm850",
    "cp866": "ibm866",
    "tis-620": "tis-620",
}

# IANA names the codecs registry does not know as aliases
CHARSET_ALIASES = {
    "windows-31j": "cp932",
    "x-mac-roman": "mac-roman",
}

_ISO_8859 = re.compile(r"^iso8859-(\d+)$")
_WINDOWS = re.compile(r"^cp(125\d)$")

_SEPARATORS = re.compile(r"[-_\s]")


def encoding_for_charset(name: str) -> Optional[str]:
    """
    Resolve a charset name to a Python codec name.

    Args:
        name: IANA charset name or alias, any case ("UTF-8", "Latin2")

    Returns:
        The codec name ("utf-8", "iso8859-2"), or None if Python has no
        codec by that name

    Examples:
        >>> encoding_for_charset("CP-1250")
        'cp1250'
        >>> encoding_for_charset("abcdefgh") is None
        True
    """
    name = CHARSET_ALIASES.get(name.strip().lower(), name)
    for candidate in (name, _SEPARATORS.sub("", name)):
        if not candidate:
            continue
        try:
            info = codecs.lookup(candidate)
        except (LookupError, ValueError):
            continue
        # bytes-to-bytes codecs (base64, zlib, rot13) are not charsets
        if not getattr(info, "_is_text_encoding", True):
            return None
        return info.name
    return None


def canonical_charset_name(encoding: str) -> Optional[str]:
    """
    Return the IANA charset name for a Python codec.

    Args:
        encoding: Codec name or alias ("utf8", "latin-1", "cp1252")

    Returns:
        Preferred IANA name ("utf-8", "iso-8859-1", "windows-1252"), or
        None if `encoding` is not a known codec
    """
    codec = encoding_for_charset(encoding)
    if codec is None:
        return None

    if codec in IANA_NAMES:
        return IANA_NAMES[codec]

    match = _ISO_8859.match(codec)
    if match:
        return f"iso-8859-{match.group(1)}"

    match = _WINDOWS.match(codec)
    if match:
        return f"windows-{match.group(1)}"

    return codec.replace("_", "-")
