"""
Reading tags from files.

Opens a file, hands the stream to the tag decoder, and maps filesystem
and decoding failures to FileReadError subclasses that name the path.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .errors import (
    FileSystemError,
    MissingReadPermissionsError,
    TagFileNotFoundError,
    TagReadingError,
)
from .settings import DecoderSettings
from .tag import Tag, TagReadError, read_tag

logger = logging.getLogger(__name__)


def read_file(
    filepath: Union[str, Path], settings: Optional[DecoderSettings] = None
) -> Tag:
    """
    Read the ID3v2 tag at the start of a file.

    This is the main entry point for tag reading.

    Args:
        filepath: Path to the audio file
        settings: Decoder settings, defaults to DEFAULT_DECODER_SETTINGS

    Returns:
        The decoded Tag

    Raises:
        TagFileNotFoundError: The file does not exist
        MissingReadPermissionsError: The file cannot be read
        FileSystemError: Any other filesystem failure
        TagReadingError: The tag could not be decoded
    """
    path_str = str(filepath)

    try:
        f = open(filepath, "rb")
    except FileNotFoundError:
        raise TagFileNotFoundError(path_str)
    except PermissionError:
        raise MissingReadPermissionsError(path_str)
    except OSError as e:
        raise FileSystemError(path_str, e.strerror or str(e))

    with f:
        try:
            tag = read_tag(f, settings)
        except TagReadError as e:
            raise TagReadingError(path_str, e) from e

    logger.info("Read %d frames from %s", len(tag.frames), path_str)
    return tag
