"""
Tag decoding error types.

All errors inherit from TagError for easy catching.
Low-level errors describe what went wrong in a single structure.
TagReadError subclasses describe which phase of the tag it happened in
and keep the low-level error on `.cause`.
"""

from typing import Optional


class TagError(Exception):
    """Base exception for all tag decoding failures."""
    pass


class NotEnoughBytesError(TagError):
    """Raised when the stream ends before a field could be fully read."""

    def __init__(self, context: str, expected: int, received: int):
        self.context = context
        self.expected = expected
        self.received = received
        super().__init__(
            f"The byte stream ended while reading the {context}: "
            f"expected {expected} bytes, got {received}"
        )


class ID3NotFoundError(TagError):
    """Raised when the header does not start with the ID3 signature."""

    def __init__(self, found: bytes):
        self.found = found
        super().__init__(
            f"No ID3 character sequence found at the start of the tag header "
            f"(found {found!r})"
        )


class InvalidSyncsafeIntegerError(TagError):
    """Raised in strict mode when a syncsafe byte has its top bit set."""

    def __init__(self, raw: bytes):
        self.raw = raw
        super().__init__(f"Invalid syncsafe integer bytes: {raw.hex(' ')}")


class InvalidFrameIDError(TagError):
    """
    Raised when a frame ID contains anything but capital letters or digits.

    The tag reader treats this as the start of padding, not as corruption.
    """

    def __init__(self, frame_id):
        self.frame_id = frame_id
        super().__init__(
            f"The frame id {frame_id} must only have capital letters or numbers"
        )


class InvalidCRCSizeError(TagError):
    """Raised when the extended header CRC block is not 5 bytes long."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(
            f"The flag size byte provided for the CRC should be 5, but it was {size}"
        )


class InvalidRestrictionsSizeError(TagError):
    """Raised when the extended header restrictions block is not 1 byte long."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(
            f"The flag size byte provided for the Tag Restrictions should be 1, "
            f"but it was {size}"
        )


class UnsupportedFooterError(TagError):
    """Raised when the header announces a footer."""

    def __init__(self):
        super().__init__("Tags with a footer are not supported")


class EncodingError(TagError):
    """Base exception for text encoding descriptor failures."""
    pass


class UnknownEncodingError(EncodingError):
    """Raised when the encoding byte is not 0, 1, 2 or 3."""

    def __init__(self, encoding_byte: int):
        self.encoding_byte = encoding_byte
        super().__init__(
            f"The given encoding byte {encoding_byte:02X} is unknown. "
            f"It should either be 00, 01, 02 or 03"
        )


class MissingEncodingError(EncodingError):
    """Raised when the payload is empty."""

    def __init__(self):
        super().__init__("Could not read enough bytes to parse the encoding")


class MissingBOMError(EncodingError):
    """Raised when a UTF-16 payload is too short to hold a byte order mark."""

    def __init__(self):
        super().__init__(
            "Could not read enough bytes to parse the encoding Byte Order Mark"
        )


class InvalidBOMError(EncodingError):
    """Raised when the byte order mark is neither FE FF nor FF FE."""

    def __init__(self, first: int, second: int):
        self.first = first
        self.second = second
        super().__init__(f"Invalid Byte Order Mark: {first:02X} {second:02X}")


class TagReadError(TagError):
    """Base exception for a failed tag read. Wraps the underlying cause."""

    phase = "tag"

    def __init__(self, cause: Exception, message: Optional[str] = None):
        self.cause = cause
        super().__init__(message or f"Error while parsing {self.phase}: {cause}")


class HeaderReadError(TagReadError):
    """Raised when the tag header cannot be read."""

    phase = "header"


class ExtendedHeaderReadError(TagReadError):
    """Raised when the extended header cannot be read."""

    phase = "extended header"


class FooterError(TagReadError):
    """Raised when the footer prevents the tag from being read."""

    phase = "footer"


class FrameReadError(TagReadError):
    """Raised when a frame envelope cannot be read."""

    phase = "frame"

    def __init__(self, frame_number: int, cause: Exception):
        self.frame_number = frame_number
        super().__init__(
            cause, f"Error while parsing frame {frame_number}: {cause}"
        )
