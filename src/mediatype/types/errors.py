"""
Exceptions raised by the media type parser and codec.

MediaType.parse() swallows these and returns None; they surface only
through MediaType.parse_strict() and the JSON codec.
"""


class MediaTypeParseError(ValueError):
    """
    Raised when a media type or parameter string is malformed.

    Carries the offending text and the offset at which scanning stopped,
    so callers can point at the problem:

        text/plain; charset="utf-8
                            ▲
                            position 20: unterminated quoted string

    Attributes:
        text: The string being parsed.
        position: Index into `text` where the error was detected.
    """

    def __init__(self, message: str, text: str = "", position: int = 0):
        super().__init__(message)
        self.text = text
        self.position = position

    def __str__(self) -> str:
        return f"{self.args[0]} (at offset {self.position} in {self.text!r})"


class MediaTypeDecodeError(ValueError):
    """Raised when a serialized media type cannot be decoded."""
