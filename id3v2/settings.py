"""
DecoderSettings: options that change how strictly a tag is decoded.

Settings are immutable. Every reader takes an optional settings object
and falls back to DEFAULT_DECODER_SETTINGS.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class DecoderSettings:
    """
    Immutable decoder configuration.

    strict_syncsafe:
        Reject syncsafe integers whose bytes have the top bit set.
        Off by default: such bytes are decoded as-is.
    validate_flag_sizes:
        Require the extended header CRC block to be 5 bytes and the
        restrictions block to be 1 byte.
    classify_frames:
        Classify frame payloads (text, UFID, experimental). When off,
        every frame keeps the unknown classification.
    """

    strict_syncsafe: bool = False
    validate_flag_sizes: bool = True
    classify_frames: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a plain dictionary for diagnostics."""
        return asdict(self)


DEFAULT_DECODER_SETTINGS = DecoderSettings()
