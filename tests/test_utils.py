"""
Tests for low-level helpers.

Validates:
1. Syncsafe decoding (4 and 5 byte forms, lenient and strict)
2. Bit position masks, iteration order and rotation
3. Exact reads through short reads and at end of stream
"""

import ast
import io
import itertools
from pathlib import Path

import pytest

from conftest import ChunkedReader
from id3v2.tag import utils as utils_module
from id3v2.tag.errors import InvalidSyncsafeIntegerError, NotEnoughBytesError
from id3v2.tag.utils import (
    BitPosition,
    decode_syncsafe,
    decode_syncsafe_5,
    latin1_to_string,
    read_exact,
)


class TestSyncsafe:
    """Syncsafe integer decoding."""

    def test_single_low_byte(self):
        for x in range(128):
            assert decode_syncsafe(bytes([0, 0, 0, x])) == x

    def test_two_bytes(self):
        assert decode_syncsafe(bytes([0, 0, 1, 0x7F])) == 255

    def test_maximum_value(self):
        assert decode_syncsafe(bytes([0x7F] * 4)) == 2 ** 28 - 1

    def test_seven_bit_inputs_stay_below_2_28(self):
        samples = [0x00, 0x01, 0x3F, 0x40, 0x7F]
        for raw in itertools.product(samples, repeat=4):
            assert decode_syncsafe(bytes(raw)) < 2 ** 28

    def test_bytes_are_weighted_by_seven_bits(self):
        assert decode_syncsafe(bytes([1, 0, 0, 0])) == 1 << 21
        assert decode_syncsafe(bytes([0, 1, 0, 0])) == 1 << 14
        assert decode_syncsafe(bytes([0, 0, 1, 0])) == 1 << 7

    def test_top_bit_tolerated_by_default(self):
        assert decode_syncsafe(bytes([0, 0, 0, 0x80])) == 0x80

    def test_top_bit_rejected_in_strict_mode(self):
        with pytest.raises(InvalidSyncsafeIntegerError) as exc_info:
            decode_syncsafe(bytes([0, 0x80, 0, 0]), strict=True)
        assert exc_info.value.raw == bytes([0, 0x80, 0, 0])

    def test_strict_mode_accepts_valid_bytes(self):
        assert decode_syncsafe(bytes([0, 0, 1, 0x7F]), strict=True) == 255

    def test_wrong_length_is_a_value_error(self):
        with pytest.raises(ValueError):
            decode_syncsafe(b"\x00\x00\x00")

    def test_five_byte_form(self):
        assert decode_syncsafe_5(bytes([0, 0, 0, 1, 0x7F])) == 255
        assert decode_syncsafe_5(bytes([0x0F, 0x7F, 0x7F, 0x7F, 0x7F])) == 0xFFFFFFFF
        assert decode_syncsafe_5(bytes([1, 0, 0, 0, 0])) == 1 << 28


class TestBitPosition:
    """Bit position enumeration."""

    def test_iter_right_is_lsb_first(self):
        masks = [position.binary_representation for position in BitPosition.iter_right()]
        assert masks == [1, 2, 4, 8, 16, 32, 64, 128]

    def test_index(self):
        assert BitPosition.LSB.index == 0
        assert BitPosition.LSB_PLUS_7.index == 7

    def test_is_set_on(self):
        assert BitPosition.LSB_PLUS_6.is_set_on(0b01000000)
        assert not BitPosition.LSB_PLUS_6.is_set_on(0b10111111)

    def test_set_positions_of_byte(self):
        set_positions = [p for p in BitPosition.iter_right() if p.is_set_on(0b01010001)]
        assert set_positions == [BitPosition.LSB, BitPosition.LSB_PLUS_4, BitPosition.LSB_PLUS_6]

    def test_rotation_wraps(self):
        assert BitPosition.LSB.rotate_right() == BitPosition.LSB_PLUS_7
        assert BitPosition.LSB_PLUS_7.rotate_left() == BitPosition.LSB
        assert BitPosition.LSB_PLUS_3.rotate_left() == BitPosition.LSB_PLUS_4
        assert BitPosition.LSB_PLUS_3.rotate_right() == BitPosition.LSB_PLUS_2

    def test_rotations_are_inverse(self):
        for position in BitPosition.iter_right():
            assert position.rotate_left().rotate_right() == position


class TestReadExact:
    """Exact reads from streams."""

    def test_reads_requested_bytes(self):
        stream = io.BytesIO(b"abcdef")
        assert read_exact(stream, 4, "test") == b"abcd"
        assert read_exact(stream, 2, "test") == b"ef"

    def test_follows_short_reads(self):
        reader = ChunkedReader(b"0123456789", chunk=3)
        assert read_exact(reader, 10, "test") == b"0123456789"
        assert reader.reads == 4

    def test_zero_bytes_reads_nothing(self):
        reader = ChunkedReader(b"abc")
        assert read_exact(reader, 0, "test") == b""
        assert reader.reads == 0

    def test_short_stream_raises(self):
        with pytest.raises(NotEnoughBytesError) as exc_info:
            read_exact(io.BytesIO(b"abc"), 5, "tag header")
        error = exc_info.value
        assert error.expected == 5
        assert error.received == 3
        assert "tag header" in str(error)


def test_latin1_maps_bytes_to_code_points():
    assert latin1_to_string(bytes([0x41, 0xE9, 0xFF])) == "Aéÿ"


def test_helpers_only_depend_on_their_own_package():
    """
    TEST: The helper module sits at the bottom of the import graph.

    GIVEN: the source of id3v2/tag/utils.py
    WHEN: its relative imports are listed
    THEN: every one of them stays inside id3v2.tag and names only errors
    """
    source = Path(utils_module.__file__).read_text(encoding="utf-8")

    relative_imports = [
        node for node in ast.walk(ast.parse(source))
        if isinstance(node, ast.ImportFrom) and node.level > 0
    ]

    assert relative_imports
    assert all(node.level == 1 for node in relative_imports)
    assert {node.module for node in relative_imports} == {"errors"}
