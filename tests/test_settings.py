"""
Tests for decoder settings.
"""

import dataclasses

import pytest

from id3v2.settings import DEFAULT_DECODER_SETTINGS, DecoderSettings


def test_defaults():
    assert DEFAULT_DECODER_SETTINGS.to_dict() == {
        "strict_syncsafe": False,
        "validate_flag_sizes": True,
        "classify_frames": True,
    }


def test_settings_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_DECODER_SETTINGS.strict_syncsafe = True


def test_replace_keeps_other_fields():
    settings = dataclasses.replace(DEFAULT_DECODER_SETTINGS, strict_syncsafe=True)
    assert settings == DecoderSettings(strict_syncsafe=True)
    assert settings.validate_flag_sizes
