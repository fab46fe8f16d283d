#!/usr/bin/env python3
"""
id3v2 CLI - Thin entrypoint for reading a tag from a file.

Design Principles:
==================
- CLI is a dispatcher only
- No decoding logic inside CLI
- Surface errors verbatim from the decoding layer
- Exit non-zero on failure

Exit Codes:
===========
- 0: Success
- 1: Tag decoding error
- 4: System error (file not found, permissions, etc.)
"""

import argparse
import logging
import sys
from typing import List, Optional

from .errors import FileReadError, TagReadingError
from .reader import read_file
from .settings import DecoderSettings
from .validators import summarize_tag

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%H:%M:%S'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='id3v2',
        description='Read the ID3v2.4 tag at the start of an audio file',
    )
    parser.add_argument(
        'file',
        help='Path to the audio file'
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Print the decoded tag as JSON instead of a summary'
    )
    parser.add_argument(
        '--strict-syncsafe',
        action='store_true',
        help='Reject syncsafe integers with the top bit set'
    )
    parser.add_argument(
        '--no-validate-flag-sizes',
        action='store_true',
        help='Accept extended header CRC and restriction blocks of any size'
    )
    parser.add_argument(
        '--log-level',
        choices=LOG_LEVELS,
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entrypoint.

    Returns the exit code; when run as a script the code is passed to
    sys.exit.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.log_level)

    settings = DecoderSettings(
        strict_syncsafe=args.strict_syncsafe,
        validate_flag_sizes=not args.no_validate_flag_sizes,
    )

    try:
        tag = read_file(args.file, settings)
    except TagReadingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except FileReadError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 4

    if args.json:
        print(tag.model_dump_json(indent=2))
    else:
        print(summarize_tag(tag))
    return 0


if __name__ == '__main__':
    sys.exit(main())
