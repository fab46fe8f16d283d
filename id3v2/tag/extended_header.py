"""
Extended header decoding.

Layout:

    4-byte syncsafe size | number of flag bytes | flag bytes...

followed, for every bit set across the flag bytes, by a length byte and
that many data bytes. Blocks appear in (byte index, bit) order, least
significant bit first. The meaning of a block is fixed by its position,
not by its content.
"""

import logging
from enum import Enum
from typing import Annotated, BinaryIO, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..settings import DecoderSettings, DEFAULT_DECODER_SETTINGS
from .utils import BitPosition, decode_syncsafe, decode_syncsafe_5, read_exact
from .errors import InvalidCRCSizeError, InvalidRestrictionsSizeError

logger = logging.getLogger(__name__)

EXTENDED_HEADER_PREFIX_SIZE = 5
CRC_DATA_SIZE = 5
RESTRICTIONS_DATA_SIZE = 1


class TagSizeRestrictions(str, Enum):
    MAX_128_FRAMES_1MB = "max_128_frames_1mb"
    MAX_64_FRAMES_128KB = "max_64_frames_128kb"
    MAX_32_FRAMES_40KB = "max_32_frames_40kb"
    MAX_32_FRAMES_4KB = "max_32_frames_4kb"


class TextEncodingRestrictions(str, Enum):
    NO_RESTRICTIONS = "no_restrictions"
    ISO_8859_1_OR_UTF_8 = "iso_8859_1_or_utf_8"


class TextFieldSizeRestrictions(str, Enum):
    NO_RESTRICTIONS = "no_restrictions"
    MAX_1024_CHARS = "max_1024_chars"
    MAX_128_CHARS = "max_128_chars"
    MAX_30_CHARS = "max_30_chars"


class ImageEncodingRestrictions(str, Enum):
    NO_RESTRICTIONS = "no_restrictions"
    PNG_OR_JPEG = "png_or_jpeg"


class ImageSizeRestrictions(str, Enum):
    NO_RESTRICTIONS = "no_restrictions"
    MAX_256X256_PIXELS = "max_256x256_pixels"
    MAX_64X64_PIXELS = "max_64x64_pixels"
    EXACTLY_64X64_PIXELS = "exactly_64x64_pixels"


# Bit layout of the restrictions byte: %ppqrrstt
_TAG_SIZE_MASK = 0b11000000
_TEXT_ENCODING_MASK = 0b00100000
_TEXT_FIELD_SIZE_MASK = 0b00011000
_IMAGE_ENCODING_MASK = 0b00000100
_IMAGE_SIZE_MASK = 0b00000011

_TAG_SIZE_VALUES = list(TagSizeRestrictions)
_TEXT_ENCODING_VALUES = list(TextEncodingRestrictions)
_TEXT_FIELD_SIZE_VALUES = list(TextFieldSizeRestrictions)
_IMAGE_ENCODING_VALUES = list(ImageEncodingRestrictions)
_IMAGE_SIZE_VALUES = list(ImageSizeRestrictions)


class TagRestrictions(BaseModel):
    """Restrictions the tag was encoded under, decoded from one byte."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag_size_restrictions: TagSizeRestrictions = TagSizeRestrictions.MAX_128_FRAMES_1MB
    text_encoding_restrictions: TextEncodingRestrictions = TextEncodingRestrictions.NO_RESTRICTIONS
    text_field_size_restrictions: TextFieldSizeRestrictions = TextFieldSizeRestrictions.NO_RESTRICTIONS
    image_encoding_restrictions: ImageEncodingRestrictions = ImageEncodingRestrictions.NO_RESTRICTIONS
    image_size_restrictions: ImageSizeRestrictions = ImageSizeRestrictions.NO_RESTRICTIONS

    @classmethod
    def from_byte(cls, data_byte: int) -> "TagRestrictions":
        return cls(
            tag_size_restrictions=_TAG_SIZE_VALUES[(data_byte & _TAG_SIZE_MASK) >> 6],
            text_encoding_restrictions=_TEXT_ENCODING_VALUES[(data_byte & _TEXT_ENCODING_MASK) >> 5],
            text_field_size_restrictions=_TEXT_FIELD_SIZE_VALUES[(data_byte & _TEXT_FIELD_SIZE_MASK) >> 3],
            image_encoding_restrictions=_IMAGE_ENCODING_VALUES[(data_byte & _IMAGE_ENCODING_MASK) >> 2],
            image_size_restrictions=_IMAGE_SIZE_VALUES[data_byte & _IMAGE_SIZE_MASK],
        )


class TagIsAnUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["tag_is_an_update"] = "tag_is_an_update"


class CrcDataPresent(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["crc_data_present"] = "crc_data_present"


class TagRestrictionsFlag(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["tag_restrictions"] = "tag_restrictions"
    restrictions: TagRestrictions


class UnknownFlag(BaseModel):
    """A flag with no assigned meaning. Its data is kept verbatim."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["unknown"] = "unknown"
    byte_index: int
    bit_position: BitPosition


ExtendedHeaderFlagDataType = Annotated[
    Union[TagIsAnUpdate, CrcDataPresent, TagRestrictionsFlag, UnknownFlag],
    Field(discriminator="kind"),
]


class ExtendedHeaderFlagData(BaseModel):
    """One optional data block of the extended header."""

    model_config = ConfigDict(extra="forbid", frozen=True, ser_json_bytes="base64")

    size: int  # in bytes
    data: bytes
    flag_type: ExtendedHeaderFlagDataType

    @property
    def crc32(self) -> Optional[int]:
        """The tag CRC-32 for a well-sized CRC block, else None."""
        if isinstance(self.flag_type, CrcDataPresent) and len(self.data) == CRC_DATA_SIZE:
            return decode_syncsafe_5(self.data)
        return None


def _classify_flag(
    byte_index: int,
    bit_position: BitPosition,
    data: bytes,
    validate_sizes: bool,
) -> ExtendedHeaderFlagDataType:
    if byte_index == 0 and bit_position is BitPosition.LSB_PLUS_6:
        return TagIsAnUpdate()

    if byte_index == 0 and bit_position is BitPosition.LSB_PLUS_5:
        if validate_sizes and len(data) != CRC_DATA_SIZE:
            raise InvalidCRCSizeError(len(data))
        return CrcDataPresent()

    if byte_index == 0 and bit_position is BitPosition.LSB_PLUS_4:
        if validate_sizes and len(data) != RESTRICTIONS_DATA_SIZE:
            raise InvalidRestrictionsSizeError(len(data))
        data_byte = data[0] if data else 0
        return TagRestrictionsFlag(restrictions=TagRestrictions.from_byte(data_byte))

    return UnknownFlag(byte_index=byte_index, bit_position=bit_position)


class ExtendedHeader(BaseModel):
    """
    The optional extended header.

    bytes_size() is computed from what was read, not taken from the
    declared extended_header_size.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, ser_json_bytes="base64")

    extended_header_size: int = EXTENDED_HEADER_PREFIX_SIZE
    number_of_flag_bytes: int = 0
    flag_bytes: bytes = b""
    flag_data: Tuple[ExtendedHeaderFlagData, ...] = ()

    def bytes_size(self) -> int:
        flags_bytes = sum(flag.size + 1 for flag in self.flag_data)
        return EXTENDED_HEADER_PREFIX_SIZE + self.number_of_flag_bytes + flags_bytes

    @property
    def restrictions(self) -> Optional[TagRestrictions]:
        for flag in self.flag_data:
            if isinstance(flag.flag_type, TagRestrictionsFlag):
                return flag.flag_type.restrictions
        return None

    @property
    def is_update(self) -> bool:
        return any(isinstance(flag.flag_type, TagIsAnUpdate) for flag in self.flag_data)

    @property
    def crc32(self) -> Optional[int]:
        for flag in self.flag_data:
            if flag.crc32 is not None:
                return flag.crc32
        return None

    @classmethod
    def read(
        cls, reader: BinaryIO, settings: Optional[DecoderSettings] = None
    ) -> "ExtendedHeader":
        """
        Read the extended header that directly follows the tag header.

        Raises:
            NotEnoughBytesError: the stream ended inside the extended header
            InvalidCRCSizeError: CRC block is not 5 bytes (size validation on)
            InvalidRestrictionsSizeError: restrictions block is not 1 byte
                (size validation on)
        """
        settings = settings or DEFAULT_DECODER_SETTINGS

        buffer = read_exact(reader, EXTENDED_HEADER_PREFIX_SIZE, "extended header")
        extended_header_size = decode_syncsafe(
            buffer[0:4], strict=settings.strict_syncsafe
        )
        number_of_flag_bytes = buffer[4]

        flag_bytes = read_exact(reader, number_of_flag_bytes, "extended header flags")
        flag_data = cls._parse_flags_data(flag_bytes, reader, settings)

        extended_header = cls(
            extended_header_size=extended_header_size,
            number_of_flag_bytes=number_of_flag_bytes,
            flag_bytes=flag_bytes,
            flag_data=flag_data,
        )

        if extended_header.bytes_size() != extended_header_size:
            logger.warning(
                "Extended header declares %d bytes but %d were read",
                extended_header_size,
                extended_header.bytes_size(),
            )

        return extended_header

    @staticmethod
    def _set_positions(flag_bytes: bytes) -> List[Tuple[int, BitPosition]]:
        return [
            (byte_index, position)
            for byte_index, flags_byte in enumerate(flag_bytes)
            for position in BitPosition.iter_right()
            if position.is_set_on(flags_byte)
        ]

    @classmethod
    def _parse_flags_data(
        cls,
        flag_bytes: bytes,
        reader: BinaryIO,
        settings: DecoderSettings,
    ) -> List[ExtendedHeaderFlagData]:
        flags_data: List[ExtendedHeaderFlagData] = []

        for byte_index, bit_position in cls._set_positions(flag_bytes):
            size = read_exact(reader, 1, "extended header flag size")[0]
            data = read_exact(reader, size, "extended header flag data")

            flag_type = _classify_flag(
                byte_index, bit_position, data, settings.validate_flag_sizes
            )
            logger.debug(
                "Extended header flag (%d, %s): %s, %d bytes",
                byte_index,
                bit_position.name,
                flag_type.kind,
                size,
            )
            flags_data.append(
                ExtendedHeaderFlagData(size=size, data=data, flag_type=flag_type)
            )

        return flags_data
