"""
Pytest configuration and byte builders for synthetic tags.
"""

import sys
from pathlib import Path
from typing import Iterable

import pytest

# Add project root to Python path for test imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def syncsafe(value: int) -> bytes:
    """Encode value as a 4-byte syncsafe integer."""
    return bytes([
        (value >> 21) & 0x7F,
        (value >> 14) & 0x7F,
        (value >> 7) & 0x7F,
        value & 0x7F,
    ])


def make_header(tag_size: int, flags: int = 0, version: bytes = b"\x04\x00") -> bytes:
    return b"ID3" + version + bytes([flags]) + syncsafe(tag_size)


def make_frame(frame_id: bytes, data: bytes, flags: bytes = b"\x00\x00") -> bytes:
    return frame_id + syncsafe(len(data)) + flags + data


def make_extended_header(flag_bytes: bytes, blocks: Iterable[bytes]) -> bytes:
    """Extended header with one length-prefixed block per set flag bit."""
    body = b"".join(bytes([len(block)]) + block for block in blocks)
    size = 5 + len(flag_bytes) + len(body)
    return syncsafe(size) + bytes([len(flag_bytes)]) + flag_bytes + body


def make_tag(frames: Iterable[bytes], padding: int = 0, flags: int = 0,
             extended_header: bytes = b"") -> bytes:
    """
    Assemble a tag whose declared size covers header, extended header,
    frames and padding.
    """
    body = extended_header + b"".join(frames) + b"\x00" * padding
    return make_header(10 + len(body), flags=flags) + body


class ChunkedReader:
    """Binary stream that returns at most `chunk` bytes per read."""

    def __init__(self, data: bytes, chunk: int = 3):
        self.data = data
        self.chunk = chunk
        self.position = 0
        self.reads = 0

    def read(self, size: int = -1) -> bytes:
        self.reads += 1
        if size < 0:
            size = len(self.data) - self.position
        size = min(size, self.chunk)
        chunk = self.data[self.position:self.position + size]
        self.position += len(chunk)
        return chunk


@pytest.fixture
def title_tag_bytes() -> bytes:
    """A tag with one UTF-8 TIT2 frame followed by zero padding."""
    return make_tag([make_frame(b"TIT2", b"\x03Hello\x00")], padding=20)


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "e2e: marks tests that decode whole tags end to end"
    )
