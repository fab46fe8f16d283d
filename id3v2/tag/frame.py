"""
Frame envelope decoding.

Every frame starts with a 10-byte envelope:

    4-byte frame ID | 4-byte syncsafe size | 2 flag bytes

followed by exactly `size` bytes of payload.
"""

import logging
from enum import Enum
from typing import BinaryIO, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..settings import DecoderSettings, DEFAULT_DECODER_SETTINGS
from .utils import decode_syncsafe, latin1_to_string, read_exact
from .errors import InvalidFrameIDError
from .frame_type import FrameType, UnknownFrame, classify_frame

logger = logging.getLogger(__name__)

FRAME_ID_SIZE = 4
FRAME_HEADER_SIZE = 10


def _is_valid_id_byte(byte: int) -> bool:
    return ord("A") <= byte <= ord("Z") or ord("0") <= byte <= ord("9")


class FrameID(BaseModel):
    """
    A 4-byte frame identifier.

    Invalid IDs can still be constructed so they can be reported.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    raw: bytes

    @field_validator("raw")
    @classmethod
    def validate_length(cls, v: bytes) -> bytes:
        """Frame IDs are always 4 bytes."""
        if len(v) != FRAME_ID_SIZE:
            raise ValueError(f"Frame IDs are {FRAME_ID_SIZE} bytes, got {len(v)}")
        return v

    @field_serializer("raw")
    def serialize_raw(self, raw: bytes) -> str:
        return latin1_to_string(raw)

    @classmethod
    def try_from(cls, raw: bytes) -> "FrameID":
        """
        Build a frame ID, rejecting invalid ones.

        Raises:
            InvalidFrameIDError: not all bytes are A-Z or 0-9
        """
        frame_id = cls(raw=raw)
        if not frame_id.is_valid():
            raise InvalidFrameIDError(frame_id)
        return frame_id

    def is_valid(self) -> bool:
        return all(_is_valid_id_byte(byte) for byte in self.raw)

    def __str__(self) -> str:
        return latin1_to_string(self.raw)


class FrameFlag(Enum):
    """Frame flags as (flag byte index, mask)."""

    # Status flags
    TAG_ALTER_PRESERVATION = (0, 0b01000000)
    FILE_ALTER_PRESERVATION = (0, 0b00100000)
    READ_ONLY = (0, 0b00010000)
    # Format flags
    GROUPING_IDENTITY = (1, 0b01000000)
    COMPRESSION = (1, 0b00001000)
    ENCRYPTION = (1, 0b00000100)
    UNSYNCHRONISATION = (1, 0b00000010)
    DATA_LENGTH_INDICATOR = (1, 0b00000001)


class Frame(BaseModel):
    """
    A frame envelope and its raw payload.

    frame_type starts as UnknownFrame; classified() returns a copy with
    the payload classification filled in.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, ser_json_bytes="base64")

    frame_id: FrameID
    frame_size: int
    flags: Tuple[int, int] = (0, 0)
    data: bytes = b""
    frame_type: FrameType = Field(default_factory=UnknownFrame)

    def bytes_size(self) -> int:
        return self.frame_size + FRAME_HEADER_SIZE

    def is_flag_set(self, flag: FrameFlag) -> bool:
        byte_index, mask = flag.value
        return self.flags[byte_index] & mask != 0

    def classified(self) -> "Frame":
        return self.model_copy(update={"frame_type": classify_frame(self)})

    @staticmethod
    def read_id(reader: BinaryIO) -> FrameID:
        raw = read_exact(reader, FRAME_ID_SIZE, "frame id")
        return FrameID.try_from(raw)

    @classmethod
    def read(
        cls, reader: BinaryIO, settings: Optional[DecoderSettings] = None
    ) -> "Frame":
        """
        Read one frame envelope and its payload.

        Raises:
            InvalidFrameIDError: the ID is not uppercase letters and digits
            NotEnoughBytesError: the stream ended inside the frame
            InvalidSyncsafeIntegerError: strict mode and a malformed size
        """
        settings = settings or DEFAULT_DECODER_SETTINGS
        frame_id = cls.read_id(reader)

        buffer = read_exact(reader, 6, "frame header")
        frame_size = decode_syncsafe(buffer[0:4], strict=settings.strict_syncsafe)
        flags = (buffer[4], buffer[5])

        data = read_exact(reader, frame_size, f"frame {frame_id} data")
        logger.debug("Read frame %s (%d bytes)", frame_id, frame_size)

        return cls(
            frame_id=frame_id,
            frame_size=frame_size,
            flags=flags,
            data=data,
        )
