"""
=============================================================================
MEDIATYPE CLI ENTRY POINT
=============================================================================

Command-line access to the parser, the sniffer and the charset tables.

=============================================================================
USAGE
=============================================================================

    # Take a media type apart
    python -m mediatype parse 'text/plain; charset="iso-8859-1"'

    # ...as JSON
    python -m mediatype parse --json 'application/json; charset=utf-8'

    # Identify files by content
    python -m mediatype sniff report.pdf photo.jpg notes.txt

    # Show the libmagic version and magic database in use
    python -m mediatype magic

    # Resolve a charset name
    python -m mediatype charset Latin1

    # See why something was rejected
    python -m mediatype --log-level DEBUG parse 'text/plain; a="oops'

Exit status is 0 on success, 1 when the input was invalid or a file
could not be identified, 2 on bad configuration or when no magic
database can be loaded.

=============================================================================
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import LOG_LEVELS, MediaTypeConfig
from .services.charsets import canonical_charset_name, encoding_for_charset
from .services.sniffer import MagicSniffer, libmagic_version
from .types.errors import MediaTypeParseError
from .types.media_type import MediaType


class JSONLogFormatter(logging.Formatter):
    """One JSON object per log line, for log aggregators."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _setup_logging(config: MediaTypeConfig) -> None:
    """Configure logging based on config."""
    handler = logging.StreamHandler(sys.stderr)
    if config.log_format == "json":
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    package_logger = logging.getLogger("mediatype")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(config.level)
    package_logger.propagate = False


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediatype",
        description="Parse, render and detect RFC 2045 media types",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m mediatype parse 'text/html; charset=utf-8'
  python -m mediatype parse --json 'multipart/form-data; boundary="a b"'
  python -m mediatype sniff report.pdf notes.txt
  python -m mediatype sniff --uncompress --magic-file ./magic.mgc backup.tar.gz
  python -m mediatype magic
  python -m mediatype charset CP-1250
        """,
    )

    # ─────────────────────────────────────────────────────────────────────
    # GLOBAL ARGUMENTS
    # ─────────────────────────────────────────────────────────────────────

    parser.add_argument(
        "--log-level", "-l",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: MEDIATYPE_LOG_LEVEL or WARNING)",
    )

    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"mediatype {__version__} (libmagic {libmagic_version() or 'unknown'})",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    # ─────────────────────────────────────────────────────────────────────
    # parse
    # ─────────────────────────────────────────────────────────────────────

    parse = commands.add_parser("parse", help="Parse a media type string")
    parse.add_argument("raw", help="Media type, e.g. 'text/plain; charset=utf-8'")
    parse.add_argument("--json", action="store_true", help="Print the result as JSON")
    parse.set_defaults(handler=_cmd_parse)

    # ─────────────────────────────────────────────────────────────────────
    # sniff
    # ─────────────────────────────────────────────────────────────────────

    sniff = commands.add_parser("sniff", help="Detect the media type of files")
    sniff.add_argument("paths", nargs="+", help="Files to identify")
    sniff.add_argument(
        "--max-bytes",
        type=int,
        default=None,
        help="Bytes examined per file (default: MEDIATYPE_SNIFF_MAX_BYTES or 1 MB)",
    )
    _add_magic_arguments(sniff)
    sniff.add_argument(
        "--no-extension",
        action="store_true",
        help="Ignore file extensions, use content only",
    )
    sniff.add_argument(
        "--no-charset",
        action="store_true",
        help="Report type/subtype only, without the charset parameter",
    )
    sniff.add_argument(
        "--no-follow-symlinks",
        action="store_true",
        help="Report symbolic links as inode/symlink instead of sniffing the target",
    )
    sniff.set_defaults(handler=_cmd_sniff)

    # ─────────────────────────────────────────────────────────────────────
    # magic
    # ─────────────────────────────────────────────────────────────────────

    info = commands.add_parser("magic", help="Show the libmagic version and database in use")
    _add_magic_arguments(info)
    info.set_defaults(handler=_cmd_magic)

    # ─────────────────────────────────────────────────────────────────────
    # charset
    # ─────────────────────────────────────────────────────────────────────

    charset = commands.add_parser("charset", help="Resolve a charset name")
    charset.add_argument("name", help="Charset name or alias, e.g. Latin1")
    charset.set_defaults(handler=_cmd_charset)

    return parser


def _add_magic_arguments(command: argparse.ArgumentParser) -> None:
    """Options choosing the magic database and libmagic flags."""
    command.add_argument(
        "--magic-file",
        default=None,
        help="Compiled magic database to load first (default: MEDIATYPE_MAGIC_FILE)",
    )
    command.add_argument(
        "--uncompress", "-z",
        action="store_true",
        help="Look inside compressed files",
    )


# =============================================================================
# COMMANDS
# =============================================================================

def _cmd_parse(args: argparse.Namespace, config: MediaTypeConfig) -> int:
    try:
        media_type = MediaType.parse_strict(args.raw)
    except MediaTypeParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({
            "type": str(media_type.type),
            "kind": media_type.type.kind.value,
            "subtype": media_type.subtype,
            "parameters": [
                {"name": p.name, "value": p.value} for p in media_type.parameters
            ],
            "description": media_type.render(),
        }, indent=2))
        return 0

    print(f"type:       {media_type.type} ({media_type.type.kind.value})")
    print(f"subtype:    {media_type.subtype}")
    for parameter in media_type.parameters:
        print(f"parameter:  {parameter.name} = {parameter.value!r}")
    print(f"rendered:   {media_type.render()}")
    return 0


def _cmd_sniff(args: argparse.Namespace, config: MediaTypeConfig) -> int:
    try:
        sniffer = MagicSniffer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    status = 0
    for path in args.paths:
        media_type = MediaType.from_path(path, sniffer)
        if media_type is None:
            status = 1
        print(f"{path}: {media_type or 'unknown'}")
    return status


def _cmd_magic(args: argparse.Namespace, config: MediaTypeConfig) -> int:
    try:
        sniffer = MagicSniffer(config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    print(f"libmagic:   {libmagic_version() or 'unknown'}")
    print(f"database:   {sniffer.magic_file or 'libmagic default'} ({sniffer.magic_source})")
    print(f"sources:    {', '.join(config.magic_sources)}")
    print(f"uncompress: {'on' if config.uncompress else 'off'}")
    return 0


def _cmd_charset(args: argparse.Namespace, config: MediaTypeConfig) -> int:
    codec = encoding_for_charset(args.name)
    if codec is None:
        print(f"Error: unknown charset {args.name!r}", file=sys.stderr)
        return 1
    print(f"codec:      {codec}")
    print(f"charset:    {canonical_charset_name(codec)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Configuration comes from the environment first (MediaTypeConfig.from_env),
    then command-line flags override it.
    """
    args = _build_parser().parse_args(argv)

    try:
        config = MediaTypeConfig.from_env()
        if args.log_level:
            config.log_level = args.log_level
        if getattr(args, "max_bytes", None) is not None:
            config.sniff_max_bytes = args.max_bytes
        if getattr(args, "no_extension", False):
            config.extension_fallback = False
        if getattr(args, "magic_file", None) is not None:
            config.magic_file = args.magic_file
        if getattr(args, "uncompress", False):
            config.uncompress = True
        if getattr(args, "no_charset", False):
            config.mime_encoding = False
        if getattr(args, "no_follow_symlinks", False):
            config.follow_symlinks = False
        config.validate()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    _setup_logging(config)
    return args.handler(args, config)


# =============================================================================
# ENTRY POINT
# =============================================================================

if __name__ == "__main__":
    sys.exit(main())
