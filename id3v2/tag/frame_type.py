"""
Frame payload classification.

Frame IDs follow a naming convention: "UFID" is the unique file
identifier, IDs starting with X, Y or Z are experimental, and IDs starting
with T are text information frames. Anything else is left unclassified.
"""

import logging
from typing import TYPE_CHECKING, Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .utils import latin1_to_string
from .encoding import Encoding
from .errors import EncodingError

if TYPE_CHECKING:
    from .frame import Frame

logger = logging.getLogger(__name__)

EXPERIMENTAL_PREFIXES = (ord("X"), ord("Y"), ord("Z"))
TEXT_INFORMATION_MARKER = ord("T")


class TextInformation(BaseModel):
    """Decoded strings of a text information frame."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    encoding: Encoding
    strings: List[str] = Field(default_factory=list)


class UnknownFrame(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["unknown"] = "unknown"


class UniqueFileIdentifier(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True, ser_json_bytes="base64")

    kind: Literal["unique_file_identifier"] = "unique_file_identifier"
    owner_identifier: str
    identifier: bytes


class TextInformationFrame(BaseModel):
    """
    A text information frame.

    Exactly one of text and error is set. A frame whose encoding could
    not be read keeps the error here instead of failing the whole tag.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    kind: Literal["text_information"] = "text_information"
    text: Optional[TextInformation] = None
    error: Optional[EncodingError] = None

    @property
    def is_ok(self) -> bool:
        return self.error is None

    @field_serializer("error")
    def serialize_error(self, error: Optional[EncodingError]) -> Optional[str]:
        return str(error) if error is not None else None


class ExperimentalFrame(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["experimental"] = "experimental"


FrameType = Annotated[
    Union[UnknownFrame, UniqueFileIdentifier, TextInformationFrame, ExperimentalFrame],
    Field(discriminator="kind"),
]


def _parse_unique_file_identifier(data: bytes) -> UniqueFileIdentifier:
    position = data.find(b"\x00")
    if position == -1:
        position = len(data)
    return UniqueFileIdentifier(
        owner_identifier=latin1_to_string(data[:position]),
        identifier=data[position + 1:],
    )


def parse_text_information(data: bytes) -> TextInformationFrame:
    """Decode a text information payload, capturing encoding failures."""
    try:
        encoding = Encoding.extract_from_bytes(data)
    except EncodingError as e:
        return TextInformationFrame(error=e)

    splits = encoding.split_bytes_by_string_separator(data[encoding.header_size:])
    strings = [encoding.make_string(split) for split in splits]

    return TextInformationFrame(text=TextInformation(encoding=encoding, strings=strings))


def classify_frame(frame: "Frame") -> FrameType:
    """
    Classify a frame by its ID. The first matching rule wins.

    Args:
        frame: A fully read frame

    Returns:
        The frame type; UnknownFrame when no rule matches
    """
    frame_id = frame.frame_id.raw
    data = frame.data

    if frame_id == b"UFID":
        return _parse_unique_file_identifier(data)

    if frame_id[0] in EXPERIMENTAL_PREFIXES:
        return ExperimentalFrame()

    if frame_id[0] == TEXT_INFORMATION_MARKER:
        text_frame = parse_text_information(data)
        if text_frame.error is not None:
            logger.warning(
                "Text frame %s could not be decoded: %s", frame.frame_id, text_frame.error
            )
        return text_frame

    return UnknownFrame()
