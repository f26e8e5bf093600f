# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for exiflib

Prints the EXIF directory entries of one or more image files.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from exiflib.config import DecoderConfig
from exiflib.entry import DecodedTag
from exiflib.exceptions import ExifLibError
from exiflib.reader import ExifReader
from exiflib.tag_format import TagFormat

logger = logging.getLogger(__name__)


def format_value(tag: DecodedTag) -> str:
    """
    Render a tag value for display.

    Rationals are shown as ``n/d``, undefined data as hex and entries that
    failed to decode as ``<error: ...>``.
    """
    if tag.value is None:
        return f"<error: {tag.error}>"
    value = tag.value.value
    if tag.value.format in (TagFormat.UNSIGNED_RATIONAL, TagFormat.SIGNED_RATIONAL):
        return f"{value[0]}/{value[1]}"
    if isinstance(value, bytes):
        return value.hex()
    return str(value)


def format_name(tag: DecodedTag) -> str:
    if tag.format is None:
        return f"Unknown({tag.format_code})"
    return tag.format.display_name


def tag_to_dict(tag: DecodedTag) -> Dict[str, Any]:
    return {
        'tag': f"0x{tag.tag:04x}",
        'format': format_name(tag),
        'components': tag.components,
        'length': tag.length,
        'value': format_value(tag) if tag.value is not None else None,
        'error': tag.error,
    }


def format_output(tags: List[DecodedTag], format_type: str = "text") -> str:
    """
    Format decoded tags based on format type.

    Args:
        tags: Decoded tags
        format_type: Output format ('text', 'json', 'csv')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps([tag_to_dict(tag) for tag in tags], indent=2, ensure_ascii=False)
    elif format_type == "csv":
        lines = ["Tag,Format,Value"]
        for tag in tags:
            # Escape quotes in CSV
            value_str = format_value(tag).replace('"', '""')
            lines.append(f'"0x{tag.tag:04x}","{format_name(tag)}","{value_str}"')
        return "\n".join(lines)
    else:  # text format (default)
        return "\n".join(
            f"0x{tag.tag:04x} {format_name(tag)} {format_value(tag)}" for tag in tags
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exiflib",
        description="exiflib - Print the EXIF directory entries of JPEG, RAF and TIFF files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print all entries
  exiflib image.jpg

  # Only string entries, as JSON
  exiflib --ascii-only -j image.raf
        """
    )
    parser.add_argument('files', nargs='+', help='File(s) to read')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('-j', '--json', action='store_true', help='Output entries in JSON format')
    output.add_argument('--csv', action='store_true', help='Output entries in CSV format')
    parser.add_argument('--ascii-only', action='store_true', help='Only print ASCII string entries')
    parser.add_argument('--no-sub-ifd', action='store_true', help='Do not follow the EXIF Sub-IFD pointer')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    format_type = "json" if args.json else "csv" if args.csv else "text"
    config = DecoderConfig(follow_sub_ifd=not args.no_sub_ifd)

    status = 0
    for file_path in args.files:
        try:
            tags = ExifReader(file_path, config=config).read()
        except ExifLibError as e:
            print(f"Error: {file_path}: {e.message}", file=sys.stderr)
            status = 1
            continue
        logger.debug(f"Read {len(tags)} entries from {file_path}")

        if args.ascii_only:
            tags = [tag for tag in tags if tag.format is TagFormat.ASCII_STRING]

        if len(args.files) > 1 and format_type == "text":
            print(f"======== {file_path}")
        print(format_output(tags, format_type))

    return status


if __name__ == "__main__":
    sys.exit(main())
