"""
ID3v2.4 tag reader.

This package decodes the ID3v2 tag at the start of an audio file into
immutable models: header, extended header and frames, with text frames
decoded to strings.

Reading is read-only and non-destructive.
Writing tags, unsynchronisation removal and footers are not supported.

Usage:
    from id3v2 import read_file, summarize_tag

    tag = read_file("/path/to/song.mp3")
    print(summarize_tag(tag))
"""

from .errors import (
    FileReadError,
    TagFileNotFoundError,
    MissingReadPermissionsError,
    FileSystemError,
    TagReadingError,
)
from .settings import DecoderSettings, DEFAULT_DECODER_SETTINGS
from .tag import Tag, TagReadError, read_tag
from .reader import read_file
from .validators import (
    validate_tag,
    summarize_tag,
    find_frames,
    get_text,
)

__all__ = [
    # Errors
    "FileReadError",
    "TagFileNotFoundError",
    "MissingReadPermissionsError",
    "FileSystemError",
    "TagReadingError",
    "TagReadError",
    # Settings
    "DecoderSettings",
    "DEFAULT_DECODER_SETTINGS",
    # Reading
    "Tag",
    "read_tag",
    "read_file",
    # Validation
    "validate_tag",
    "summarize_tag",
    "find_frames",
    "get_text",
]
