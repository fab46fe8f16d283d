"""
Tag header decoding.

The header is the fixed 10 bytes at the start of every tag:

    "ID3" | major version | revision | flags | 4-byte syncsafe size

The size counts everything after the header (extended header, frames,
padding) and excludes the header itself and any footer.
"""

from enum import IntEnum
from typing import BinaryIO, Optional

from pydantic import BaseModel, ConfigDict

from ..settings import DecoderSettings, DEFAULT_DECODER_SETTINGS
from .utils import decode_syncsafe, read_exact
from .errors import ID3NotFoundError

HEADER_SIZE = 10
ID3_SIGNATURE = b"ID3"


class HeaderFlag(IntEnum):
    """Header flag bits, most significant first."""

    UNSYNCHRONISATION = 0b10000000
    EXTENDED_HEADER = 0b01000000
    EXPERIMENTAL_INDICATOR = 0b00100000
    FOOTER_PRESENT = 0b00010000

    @property
    def binary_representation(self) -> int:
        return int(self)


class Header(BaseModel):
    """
    The fixed 10-byte tag header.

    version is stored as (revision << 8) | major, matching the
    on-disk byte order.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    version: int = 4
    flags_byte: int = 0
    tag_size: int = 10

    def bytes_size(self) -> int:
        return HEADER_SIZE

    @property
    def major_version(self) -> int:
        return self.version & 0xFF

    @property
    def revision(self) -> int:
        return self.version >> 8

    def is_flag_set(self, flag_type: HeaderFlag) -> bool:
        return self.flags_byte & flag_type.binary_representation != 0

    @classmethod
    def read(
        cls, reader: BinaryIO, settings: Optional[DecoderSettings] = None
    ) -> "Header":
        """
        Read the header from the start of the stream.

        Raises:
            NotEnoughBytesError: fewer than 10 bytes available
            ID3NotFoundError: the stream does not start with "ID3"
            InvalidSyncsafeIntegerError: strict mode and a malformed size
        """
        settings = settings or DEFAULT_DECODER_SETTINGS
        buffer = read_exact(reader, HEADER_SIZE, "tag header")

        if buffer[0:3] != ID3_SIGNATURE:
            raise ID3NotFoundError(buffer[0:3])

        version = (buffer[4] << 8) | buffer[3]
        tag_size = decode_syncsafe(buffer[6:10], strict=settings.strict_syncsafe)

        return cls(version=version, flags_byte=buffer[5], tag_size=tag_size)
