"""
Tag decoding.

Reads header, optional extended header and frames from a stream, in that
order, and assembles them into a Tag.

The frame loop is bounded by the declared tag size and stops early at the
first invalid frame ID, which marks the start of padding.
"""

import logging
from typing import BinaryIO, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..settings import DecoderSettings, DEFAULT_DECODER_SETTINGS
from .errors import (
    ExtendedHeaderReadError,
    FooterError,
    FrameReadError,
    HeaderReadError,
    InvalidFrameIDError,
    TagError,
    UnsupportedFooterError,
)
from .extended_header import ExtendedHeader
from .frame import Frame
from .header import Header, HeaderFlag

logger = logging.getLogger(__name__)


class Tag(BaseModel):
    """A decoded ID3v2 tag."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    header: Header = Field(default_factory=Header)
    extended_header: Optional[ExtendedHeader] = None
    frames: Tuple[Frame, ...] = ()
    footer: Optional[Header] = None

    def bytes_size(self) -> int:
        """Bytes counted against the declared tag size while reading."""
        size = self.header.bytes_size()
        if self.extended_header is not None:
            size += self.extended_header.bytes_size()
        return size + sum(frame.bytes_size() for frame in self.frames)

    @classmethod
    def read(
        cls, reader: BinaryIO, settings: Optional[DecoderSettings] = None
    ) -> "Tag":
        return read_tag(reader, settings)


def read_tag(reader: BinaryIO, settings: Optional[DecoderSettings] = None) -> Tag:
    """
    Decode a tag from a stream positioned at its first byte.

    Args:
        reader: Readable binary stream
        settings: Decoder settings, defaults to DEFAULT_DECODER_SETTINGS

    Returns:
        The decoded Tag

    Raises:
        HeaderReadError: the header could not be read
        ExtendedHeaderReadError: the extended header could not be read
        FooterError: the header announces a footer
        FrameReadError: a frame envelope could not be read
    """
    settings = settings or DEFAULT_DECODER_SETTINGS

    try:
        header = Header.read(reader, settings)
    except TagError as e:
        raise HeaderReadError(e) from e

    extended_header = None
    if header.is_flag_set(HeaderFlag.EXTENDED_HEADER):
        try:
            extended_header = ExtendedHeader.read(reader, settings)
        except TagError as e:
            raise ExtendedHeaderReadError(e) from e

    if header.is_flag_set(HeaderFlag.FOOTER_PRESENT):
        cause = UnsupportedFooterError()
        raise FooterError(cause) from cause

    frames = _read_frames(reader, header, extended_header, settings)

    logger.debug(
        "Read ID3v2.%d tag: %d frames, %d of %d bytes",
        header.major_version,
        len(frames),
        sum(frame.bytes_size() for frame in frames),
        header.tag_size,
    )

    return Tag(header=header, extended_header=extended_header, frames=frames)


def _read_frames(
    reader: BinaryIO,
    header: Header,
    extended_header: Optional[ExtendedHeader],
    settings: DecoderSettings,
) -> List[Frame]:
    frames: List[Frame] = []
    bytes_read = header.bytes_size()
    if extended_header is not None:
        bytes_read += extended_header.bytes_size()

    while bytes_read < header.tag_size:
        try:
            frame = Frame.read(reader, settings)
        except InvalidFrameIDError as e:
            logger.debug("Stopped at invalid frame id %s, treating rest as padding", e.frame_id)
            break
        except TagError as e:
            raise FrameReadError(len(frames) + 1, e) from e

        if settings.classify_frames:
            frame = frame.classified()

        bytes_read += frame.bytes_size()
        frames.append(frame)

    return frames
