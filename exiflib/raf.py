# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Fujifilm RAF header reader

RAF files start with a fixed-layout, big-endian header that records the
camera model and the location of the embedded JPEG preview. The preview
carries the camera's EXIF block.

Copyright 2025 DNAi inc.
"""

import struct
from dataclasses import dataclass
from typing import Tuple

from exiflib.exceptions import MetadataReadError, OffsetOutOfRange

RAF_MAGIC = b'FUJIFILM'

# (start, end) byte ranges of the header fields
FORMAT_RANGE = (0, 16)
VERSION_RANGE = (16, 20)
IDENTIFIER_RANGE = (20, 28)
MODEL_RANGE = (28, 60)
DIRECTORY_VERSION_RANGE = (60, 64)
JPEG_OFFSET_RANGE = (84, 88)
JPEG_LENGTH_RANGE = (88, 92)
CFA_HEADER_OFFSET_RANGE = (92, 96)
CFA_HEADER_LENGTH_RANGE = (96, 100)
CFA_OFFSET_RANGE = (100, 104)
CFA_LENGTH_RANGE = (104, 108)

HEADER_SIZE = CFA_LENGTH_RANGE[1]


@dataclass(frozen=True)
class RafHeader:
    """Fields of a RAF file header."""
    format: str
    version: str
    identifier: str
    model: str
    directory_version: str
    jpeg_offset: int
    jpeg_length: int
    cfa_header_offset: int
    cfa_header_length: int
    cfa_offset: int
    cfa_length: int

    def embedded_jpeg(self, data: bytes) -> bytes:
        """
        Extract the embedded JPEG preview from the RAF file data.

        Raises:
            OffsetOutOfRange: If the recorded range lies outside ``data``
        """
        end = self.jpeg_offset + self.jpeg_length
        if end > len(data):
            raise OffsetOutOfRange(
                f"Embedded JPEG range {self.jpeg_offset}..{end} exceeds "
                f"file of {len(data)} bytes"
            )
        return bytes(data[self.jpeg_offset:end])


def is_raf(data: bytes) -> bool:
    return data[:len(RAF_MAGIC)] == RAF_MAGIC


def _text(data: bytes, field: Tuple[int, int]) -> str:
    start, end = field
    return bytes(data[start:end]).decode('latin-1').replace('\x00', '')


def _u32(data: bytes, field: Tuple[int, int]) -> int:
    return struct.unpack('>I', data[field[0]:field[1]])[0]


def parse_raf_header(data: bytes) -> RafHeader:
    """
    Parse the fixed RAF header.

    Args:
        data: RAF file data

    Returns:
        RafHeader

    Raises:
        MetadataReadError: If the magic is missing or the header is truncated
    """
    if not is_raf(data):
        raise MetadataReadError("Invalid RAF file: missing FUJIFILM header")
    if len(data) < HEADER_SIZE:
        raise MetadataReadError(
            f"Invalid RAF file: header needs {HEADER_SIZE} bytes, got {len(data)}"
        )

    return RafHeader(
        format=_text(data, FORMAT_RANGE),
        version=_text(data, VERSION_RANGE),
        identifier=_text(data, IDENTIFIER_RANGE),
        model=_text(data, MODEL_RANGE),
        directory_version=_text(data, DIRECTORY_VERSION_RANGE),
        jpeg_offset=_u32(data, JPEG_OFFSET_RANGE),
        jpeg_length=_u32(data, JPEG_LENGTH_RANGE),
        cfa_header_offset=_u32(data, CFA_HEADER_OFFSET_RANGE),
        cfa_header_length=_u32(data, CFA_HEADER_LENGTH_RANGE),
        cfa_offset=_u32(data, CFA_OFFSET_RANGE),
        cfa_length=_u32(data, CFA_LENGTH_RANGE),
    )
