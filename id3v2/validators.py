"""
Tag validation and summary utilities.

Checks a decoded tag against the restrictions declared in its extended
header and produces human-readable warnings and summaries.
"""

from typing import List, Optional

from .tag import (
    EncodingKind,
    ExperimentalFrame,
    Frame,
    HeaderFlag,
    Tag,
    TagSizeRestrictions,
    TextEncodingRestrictions,
    TextFieldSizeRestrictions,
    TextInformationFrame,
    UniqueFileIdentifier,
)

# (max frames, max tag size in bytes)
TAG_SIZE_LIMITS = {
    TagSizeRestrictions.MAX_128_FRAMES_1MB: (128, 1024 * 1024),
    TagSizeRestrictions.MAX_64_FRAMES_128KB: (64, 128 * 1024),
    TagSizeRestrictions.MAX_32_FRAMES_40KB: (32, 40 * 1024),
    TagSizeRestrictions.MAX_32_FRAMES_4KB: (32, 4 * 1024),
}

TEXT_FIELD_SIZE_LIMITS = {
    TextFieldSizeRestrictions.MAX_1024_CHARS: 1024,
    TextFieldSizeRestrictions.MAX_128_CHARS: 128,
    TextFieldSizeRestrictions.MAX_30_CHARS: 30,
}


def find_frames(tag: Tag, frame_id: str) -> List[Frame]:
    """All frames with the given ID, in tag order."""
    return [frame for frame in tag.frames if str(frame.frame_id) == frame_id]


def get_text(tag: Tag, frame_id: str) -> Optional[List[str]]:
    """
    Strings of the first decodable text frame with the given ID.

    Returns None if there is no such frame.
    """
    for frame in find_frames(tag, frame_id):
        frame_type = frame.frame_type
        if isinstance(frame_type, TextInformationFrame) and frame_type.text is not None:
            return list(frame_type.text.strings)
    return None


def validate_tag(tag: Tag) -> List[str]:
    """
    Validate a tag and return a list of issues.

    Reports text frames that failed to decode and, when the extended
    header declares restrictions, every violation of them.
    Returns empty list if all checks pass.

    Args:
        tag: Tag to validate

    Returns:
        List of human-readable validation issues
    """
    issues: List[str] = []

    for frame in tag.frames:
        frame_type = frame.frame_type
        if isinstance(frame_type, TextInformationFrame) and frame_type.error is not None:
            issues.append(f"Text frame {frame.frame_id} could not be decoded: {frame_type.error}")

    restrictions = tag.extended_header.restrictions if tag.extended_header else None
    if restrictions is None:
        return issues

    max_frames, max_size = TAG_SIZE_LIMITS[restrictions.tag_size_restrictions]
    if len(tag.frames) > max_frames:
        issues.append(f"Tag has {len(tag.frames)} frames, restrictions allow {max_frames}")

    total_size = tag.header.bytes_size() + tag.header.tag_size
    if total_size > max_size:
        issues.append(f"Tag is {total_size} bytes, restrictions allow {max_size}")

    max_chars = TEXT_FIELD_SIZE_LIMITS.get(restrictions.text_field_size_restrictions)

    for frame in tag.frames:
        frame_type = frame.frame_type
        if not isinstance(frame_type, TextInformationFrame) or frame_type.text is None:
            continue

        encoding = frame_type.text.encoding
        if (
            restrictions.text_encoding_restrictions == TextEncodingRestrictions.ISO_8859_1_OR_UTF_8
            and encoding.kind not in (EncodingKind.LATIN_1, EncodingKind.UTF_8)
        ):
            issues.append(
                f"Text frame {frame.frame_id} uses {encoding}, "
                "restrictions allow only ISO-8859-1 or UTF-8"
            )

        if max_chars is not None:
            for string in frame_type.text.strings:
                if len(string) > max_chars:
                    issues.append(
                        f"Text frame {frame.frame_id} has a {len(string)} character string, "
                        f"restrictions allow {max_chars}"
                    )

    return issues


def _describe_frame(frame: Frame) -> str:
    frame_type = frame.frame_type

    if isinstance(frame_type, TextInformationFrame):
        if frame_type.text is None:
            return f"<undecodable: {frame_type.error}>"
        return " / ".join(frame_type.text.strings)

    if isinstance(frame_type, UniqueFileIdentifier):
        return f"{frame_type.owner_identifier}: {frame_type.identifier.hex()}"

    if isinstance(frame_type, ExperimentalFrame):
        return f"<experimental, {frame.frame_size} bytes>"

    return f"<{frame.frame_size} bytes>"


def summarize_tag(tag: Tag) -> str:
    """
    Create a human-readable summary of a tag.

    Useful for logging and reporting.

    Args:
        tag: Tag to summarize

    Returns:
        Multi-line summary string
    """
    header = tag.header
    flags = [flag.name.lower() for flag in HeaderFlag if header.is_flag_set(flag)]

    lines = [
        f"Version: ID3v2.{header.major_version}.{header.revision}",
        f"Tag Size: {header.tag_size} bytes",
        f"Flags: {', '.join(flags) if flags else 'none'}",
    ]

    if tag.extended_header:
        extended = tag.extended_header
        lines.append(f"Extended Header: {extended.bytes_size()} bytes")
        if extended.is_update:
            lines.append("  Tag is an update")
        if extended.crc32 is not None:
            lines.append(f"  CRC-32: {extended.crc32:08X}")
        if extended.restrictions:
            restrictions = extended.restrictions
            lines.append(f"  Tag Size Restrictions: {restrictions.tag_size_restrictions.value}")
            lines.append(f"  Text Encoding Restrictions: {restrictions.text_encoding_restrictions.value}")
            lines.append(f"  Text Field Size Restrictions: {restrictions.text_field_size_restrictions.value}")
            lines.append(f"  Image Encoding Restrictions: {restrictions.image_encoding_restrictions.value}")
            lines.append(f"  Image Size Restrictions: {restrictions.image_size_restrictions.value}")

    lines.append("")
    lines.append(f"Frames: {len(tag.frames)}")
    for frame in tag.frames:
        lines.append(f"  {frame.frame_id}: {_describe_frame(frame)}")

    issues = validate_tag(tag)
    if issues:
        lines.append("")
        lines.append("Warnings:")
        for issue in issues:
            lines.append(f"  - {issue}")

    return "\n".join(lines)
