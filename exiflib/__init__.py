# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
exiflib - EXIF directory decoding in pure Python

Locates the EXIF block in JPEG, Fujifilm RAF and bare TIFF data, resolves
its byte order and decodes the entries of IFD0 and the EXIF Sub-IFD into
typed values. All parsing is done by directly reading the binary
structures.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from exiflib.config import DEFAULT_CONFIG, EXIF_SUB_IFD_POINTER, DecoderConfig
from exiflib.directory import decode_directory, decode_entries
from exiflib.endian import Endianness, resolve_endianness
from exiflib.entry import DecodedTag, DirectoryEntry, decode_entry
from exiflib.exceptions import (
    ComponentCountOverflow,
    ExifLibError,
    ExifNotFoundError,
    FormatError,
    InsufficientBytes,
    InvalidUtf8,
    MetadataReadError,
    OffsetOutOfRange,
    UnknownTagFormat,
    UnrecognizedEndianMarker,
)
from exiflib.numeric import NumericKind, decode_numeric
from exiflib.reader import ExifBlock, ExifReader, locate_exif, parse
from exiflib.tag_format import TAG_SIZES, TagFormat
from exiflib.values import TagValue, decode_value

__all__ = [
    "DEFAULT_CONFIG",
    "EXIF_SUB_IFD_POINTER",
    "DecoderConfig",
    "decode_directory",
    "decode_entries",
    "Endianness",
    "resolve_endianness",
    "DecodedTag",
    "DirectoryEntry",
    "decode_entry",
    "ComponentCountOverflow",
    "ExifLibError",
    "ExifNotFoundError",
    "FormatError",
    "InsufficientBytes",
    "InvalidUtf8",
    "MetadataReadError",
    "OffsetOutOfRange",
    "UnknownTagFormat",
    "UnrecognizedEndianMarker",
    "NumericKind",
    "decode_numeric",
    "ExifBlock",
    "ExifReader",
    "locate_exif",
    "parse",
    "TAG_SIZES",
    "TagFormat",
    "TagValue",
    "decode_value",
]
