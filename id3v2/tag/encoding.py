"""
Text encodings used inside frame payloads.

A text payload starts with an encoding byte:

    00  ISO-8859-1
    01  UTF-16, followed by a byte order mark (FE FF or FF FE)
    02  UTF-16BE, no byte order mark
    03  UTF-8

Strings in the payload are terminated by one zero byte (ISO-8859-1,
UTF-8) or two zero bytes (UTF-16 forms).
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .utils import latin1_to_string
from .errors import (
    InvalidBOMError,
    MissingBOMError,
    MissingEncodingError,
    UnknownEncodingError,
)


class ByteOrder(str, Enum):
    BIG_ENDIAN = "big_endian"
    LITTLE_ENDIAN = "little_endian"


class EncodingKind(str, Enum):
    LATIN_1 = "latin_1"
    UTF_16 = "utf_16"  # with byte order mark
    UTF_16BE = "utf_16be"
    UTF_8 = "utf_8"


_BOM_BYTE_ORDERS = {
    (0xFE, 0xFF): ByteOrder.BIG_ENDIAN,
    (0xFF, 0xFE): ByteOrder.LITTLE_ENDIAN,
}


def find_separator(data: bytes, separator: bytes, start: int = 0) -> Optional[int]:
    """
    Find the next separator in data, scanning left to right from start.

    Candidates are only tried every len(separator) bytes, so a two-byte
    UTF-16 terminator never matches across a code unit boundary.
    """
    width = len(separator)
    for index in range(start, len(data) - width + 1, width):
        if data[index:index + width] == separator:
            return index
    return None


class Encoding(BaseModel):
    """An encoding descriptor read from the start of a text payload."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EncodingKind
    byte_order: Optional[ByteOrder] = None

    @classmethod
    def extract_from_bytes(cls, data: bytes) -> "Encoding":
        """
        Read the encoding byte (and BOM for UTF-16) at the start of data.

        Raises:
            MissingEncodingError: data is empty
            MissingBOMError: UTF-16 without the two BOM bytes
            InvalidBOMError: UTF-16 with a BOM other than FE FF / FF FE
            UnknownEncodingError: encoding byte above 3
        """
        if not data:
            raise MissingEncodingError()

        encoding_byte = data[0]
        if encoding_byte == 0:
            return cls(kind=EncodingKind.LATIN_1)
        if encoding_byte == 1:
            if len(data) < 3:
                raise MissingBOMError()
            bom = (data[1], data[2])
            if bom not in _BOM_BYTE_ORDERS:
                raise InvalidBOMError(*bom)
            return cls(kind=EncodingKind.UTF_16, byte_order=_BOM_BYTE_ORDERS[bom])
        if encoding_byte == 2:
            return cls(kind=EncodingKind.UTF_16BE)
        if encoding_byte == 3:
            return cls(kind=EncodingKind.UTF_8)

        raise UnknownEncodingError(encoding_byte)

    @property
    def string_separator(self) -> bytes:
        if self.kind in (EncodingKind.UTF_16, EncodingKind.UTF_16BE):
            return b"\x00\x00"
        return b"\x00"

    @property
    def header_size(self) -> int:
        """Bytes taken by the encoding byte and BOM before the text starts."""
        if self.kind == EncodingKind.UTF_16:
            return 3
        return 1

    def split_bytes_by_string_separator(self, data: bytes) -> List[bytes]:
        """
        Split data on the string terminator.

        Only terminated strings are returned: whatever follows the last
        terminator is dropped.
        """
        separator = self.string_separator
        splits = []
        position = 0
        while True:
            index = find_separator(data, separator, position)
            if index is None:
                break
            splits.append(data[position:index])
            position = index + len(separator)
        return splits

    def make_string(self, data: bytes) -> str:
        """Decode data. Invalid sequences become U+FFFD, never an error."""
        if self.kind == EncodingKind.LATIN_1:
            return latin1_to_string(data)
        if self.kind == EncodingKind.UTF_8:
            return bytes(data).decode("utf-8", errors="replace")
        if self.kind == EncodingKind.UTF_16 and self.byte_order == ByteOrder.LITTLE_ENDIAN:
            return bytes(data).decode("utf-16-le", errors="replace")
        return bytes(data).decode("utf-16-be", errors="replace")

    def __str__(self) -> str:
        if self.byte_order is not None:
            return f"{self.kind.value} ({self.byte_order.value})"
        return self.kind.value
