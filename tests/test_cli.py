"""
CLI dispatcher tests.

Validates:
1. Exit codes (0 success, 1 decoding error, 4 system error)
2. Summary and JSON output
3. Settings flags reach the decoder
"""

import json

import pytest

from conftest import make_extended_header, make_frame, make_tag, syncsafe
from id3v2.cli import build_parser, main
from id3v2.tag import HeaderFlag


@pytest.fixture
def tag_file(tmp_path, title_tag_bytes):
    path = tmp_path / "song.mp3"
    path.write_bytes(title_tag_bytes)
    return path


def test_summary_output(tag_file, capsys):
    exit_code = main([str(tag_file)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert "Version: ID3v2.4.0" in captured.out
    assert "TIT2: Hello" in captured.out


def test_json_output(tag_file, capsys):
    exit_code = main([str(tag_file), "--json"])

    document = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert document["header"]["version"] == 4
    frame = document["frames"][0]
    assert frame["frame_id"]["raw"] == "TIT2"
    assert frame["frame_type"]["kind"] == "text_information"
    assert frame["frame_type"]["text"]["strings"] == ["Hello"]


def test_missing_file_is_system_error(tmp_path, capsys):
    exit_code = main([str(tmp_path / "missing.mp3")])

    captured = capsys.readouterr()
    assert exit_code == 4
    assert captured.err.startswith("ERROR: File ")
    assert captured.out == ""


def test_bad_tag_is_decoding_error(tmp_path, capsys):
    path = tmp_path / "bad.mp3"
    path.write_bytes(b"RIFF" + b"\x00" * 20)

    exit_code = main([str(path)])

    assert exit_code == 1
    assert "error parsing its ID3v2 tag" in capsys.readouterr().err


def test_strict_syncsafe_flag(tmp_path, capsys):
    path = tmp_path / "loose.mp3"
    path.write_bytes(b"ID3\x04\x00\x00" + bytes([0, 0, 0, 0x8A]) + b"\x00" * 200)

    assert main([str(path)]) == 0
    assert main([str(path), "--strict-syncsafe"]) == 1


def test_flag_size_validation_can_be_disabled(tmp_path, capsys):
    extended = make_extended_header(b"\x20", [b"\x01"])
    path = tmp_path / "crc.mp3"
    path.write_bytes(make_tag(
        [make_frame(b"TIT2", b"\x03A\x00")],
        flags=HeaderFlag.EXTENDED_HEADER,
        extended_header=extended,
    ))

    assert main([str(path)]) == 1
    assert main([str(path), "--no-validate-flag-sizes"]) == 0


def test_parser_defaults():
    args = build_parser().parse_args(["song.mp3"])

    assert args.file == "song.mp3"
    assert args.json is False
    assert args.strict_syncsafe is False
    assert args.no_validate_flag_sizes is False
    assert args.log_level == "WARNING"


def test_unknown_log_level_is_rejected():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["song.mp3", "--log-level", "TRACE"])


def test_syncsafe_helper_matches_header_encoding():
    assert syncsafe(0x0FFFFFFF) == b"\x7f\x7f\x7f\x7f"
