"""
ID3v2.4 tag decoding.

Decodes the header, extended header and frames of a tag from a binary
stream, and classifies frame payloads (text information, unique file
identifier, experimental).

Usage:
    from id3v2.tag import read_tag

    with open("song.mp3", "rb") as f:
        tag = read_tag(f)
"""

from .errors import (
    TagError,
    NotEnoughBytesError,
    ID3NotFoundError,
    InvalidSyncsafeIntegerError,
    InvalidFrameIDError,
    InvalidCRCSizeError,
    InvalidRestrictionsSizeError,
    UnsupportedFooterError,
    EncodingError,
    UnknownEncodingError,
    MissingEncodingError,
    MissingBOMError,
    InvalidBOMError,
    TagReadError,
    HeaderReadError,
    ExtendedHeaderReadError,
    FooterError,
    FrameReadError,
)
from .header import Header, HeaderFlag
from .extended_header import (
    ExtendedHeader,
    ExtendedHeaderFlagData,
    TagIsAnUpdate,
    CrcDataPresent,
    TagRestrictionsFlag,
    UnknownFlag,
    TagRestrictions,
    TagSizeRestrictions,
    TextEncodingRestrictions,
    TextFieldSizeRestrictions,
    ImageEncodingRestrictions,
    ImageSizeRestrictions,
)
from .encoding import Encoding, EncodingKind, ByteOrder
from .frame import Frame, FrameID, FrameFlag
from .frame_type import (
    FrameType,
    UnknownFrame,
    UniqueFileIdentifier,
    TextInformationFrame,
    TextInformation,
    ExperimentalFrame,
    classify_frame,
)
from .decoder import Tag, read_tag

__all__ = [
    # Errors
    "TagError",
    "NotEnoughBytesError",
    "ID3NotFoundError",
    "InvalidSyncsafeIntegerError",
    "InvalidFrameIDError",
    "InvalidCRCSizeError",
    "InvalidRestrictionsSizeError",
    "UnsupportedFooterError",
    "EncodingError",
    "UnknownEncodingError",
    "MissingEncodingError",
    "MissingBOMError",
    "InvalidBOMError",
    "TagReadError",
    "HeaderReadError",
    "ExtendedHeaderReadError",
    "FooterError",
    "FrameReadError",
    # Header
    "Header",
    "HeaderFlag",
    # Extended header
    "ExtendedHeader",
    "ExtendedHeaderFlagData",
    "TagIsAnUpdate",
    "CrcDataPresent",
    "TagRestrictionsFlag",
    "UnknownFlag",
    "TagRestrictions",
    "TagSizeRestrictions",
    "TextEncodingRestrictions",
    "TextFieldSizeRestrictions",
    "ImageEncodingRestrictions",
    "ImageSizeRestrictions",
    # Encoding
    "Encoding",
    "EncodingKind",
    "ByteOrder",
    # Frames
    "Frame",
    "FrameID",
    "FrameFlag",
    "FrameType",
    "UnknownFrame",
    "UniqueFileIdentifier",
    "TextInformationFrame",
    "TextInformation",
    "ExperimentalFrame",
    "classify_frame",
    # Tag
    "Tag",
    "read_tag",
]
