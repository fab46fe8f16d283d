"""
Low-level helpers shared by the tag decoders.

- Syncsafe integer decoding (4 and 5 byte forms)
- Bit position enumeration over a flags byte
- Exact reads from a binary stream
- Latin-1 conversion
"""

from enum import Enum
from typing import BinaryIO, Iterator

from .errors import InvalidSyncsafeIntegerError, NotEnoughBytesError


def _decode_syncsafe(raw: bytes, length: int, strict: bool) -> int:
    if len(raw) != length:
        raise ValueError(f"Syncsafe integer needs {length} bytes, got {len(raw)}")

    if strict and any(byte & 0x80 for byte in raw):
        raise InvalidSyncsafeIntegerError(bytes(raw))

    value = 0
    for byte in raw:
        value = (value << 7) | byte
    return value


def decode_syncsafe(raw: bytes, strict: bool = False) -> int:
    """
    Decode a 4-byte syncsafe integer.

    Each byte carries 7 significant bits, most significant byte first:
    b0 << 21 | b1 << 14 | b2 << 7 | b3.

    Top bits are not checked unless strict is set.

    Raises:
        InvalidSyncsafeIntegerError: strict mode and a byte has bit 7 set
    """
    return _decode_syncsafe(raw, 4, strict)


def decode_syncsafe_5(raw: bytes, strict: bool = False) -> int:
    """Decode a 5-byte syncsafe integer (b0 << 28 | ... | b4)."""
    return _decode_syncsafe(raw, 5, strict)


class BitPosition(Enum):
    """Single-bit masks over a byte, least significant bit first."""

    LSB = 0b00000001
    LSB_PLUS_1 = 0b00000010
    LSB_PLUS_2 = 0b00000100
    LSB_PLUS_3 = 0b00001000
    LSB_PLUS_4 = 0b00010000
    LSB_PLUS_5 = 0b00100000
    LSB_PLUS_6 = 0b01000000
    LSB_PLUS_7 = 0b10000000

    @classmethod
    def iter_right(cls) -> Iterator["BitPosition"]:
        """Iterate all positions from LSB to LSB+7."""
        return iter(list(cls))

    @property
    def binary_representation(self) -> int:
        return self.value

    @property
    def index(self) -> int:
        """Bit index, 0 for LSB."""
        return self.value.bit_length() - 1

    def is_set_on(self, num: int) -> bool:
        return num & self.value != 0

    def rotate_left(self) -> "BitPosition":
        return BitPosition(((self.value << 1) | (self.value >> 7)) & 0xFF)

    def rotate_right(self) -> "BitPosition":
        return BitPosition(((self.value >> 1) | (self.value << 7)) & 0xFF)


def read_exact(reader: BinaryIO, size: int, context: str) -> bytes:
    """
    Read exactly `size` bytes from the stream.

    Keeps reading through short reads until the stream is exhausted.

    Raises:
        NotEnoughBytesError: the stream ended first
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)

    data = b"".join(chunks)
    if len(data) < size:
        raise NotEnoughBytesError(context, size, len(data))
    return data


def latin1_to_string(latin1: bytes) -> str:
    """Map each byte to the code point of the same value."""
    return bytes(latin1).decode("latin-1")
