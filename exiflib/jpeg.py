# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG EXIF segment locator

EXIF data in a JPEG lives in an APP1 segment whose payload starts with
the ``Exif\\0\\0`` signature, immediately followed by the byte-order
marker of the EXIF block.

Copyright 2025 DNAi inc.
"""

import struct
from dataclasses import dataclass
from typing import Iterator, Optional

EXIF_SIGNATURE = b'Exif\x00\x00'
JPEG_SOI = b'\xff\xd8'

APP1 = 0xE1
SOS = 0xDA
EOI = 0xD9

# Markers that carry no length field
_STANDALONE_MARKERS = {0x01} | set(range(0xD0, 0xD8))


@dataclass(frozen=True)
class JpegSegment:
    """
    A marker segment of a JPEG file.

    Attributes:
        marker: Marker byte (e.g. 0xE1 for APP1)
        offset: Offset of the 0xFF byte introducing the marker
        length: Segment length field (includes its own two bytes)
        payload_offset: Offset of the first payload byte
    """
    marker: int
    offset: int
    length: int
    payload_offset: int

    @property
    def payload_end(self) -> int:
        return self.payload_offset + self.length - 2


def is_jpeg(data: bytes) -> bool:
    return data[:2] == JPEG_SOI


def iter_segments(data: bytes) -> Iterator[JpegSegment]:
    """
    Walk the marker segments of a JPEG file up to the start of scan.

    Stops quietly at SOS, EOI, a malformed marker or the end of the data.

    Args:
        data: JPEG file data

    Yields:
        JpegSegment for each length-carrying marker segment
    """
    if not is_jpeg(data):
        return

    offset = 2  # Skip JPEG SOI marker
    while offset + 4 <= len(data):
        if data[offset] != 0xFF:
            return

        marker = data[offset + 1]
        # Fill bytes
        if marker == 0xFF:
            offset += 1
            continue
        if marker in (SOS, EOI):
            return
        if marker in _STANDALONE_MARKERS:
            offset += 2
            continue

        length = struct.unpack('>H', data[offset + 2:offset + 4])[0]
        if length < 2:
            return

        yield JpegSegment(marker, offset, length, offset + 4)
        offset += 2 + length


def find_exif_segment(data: bytes) -> Optional[JpegSegment]:
    """Return the first APP1 segment carrying EXIF data, if any."""
    for segment in iter_segments(data):
        if segment.marker != APP1:
            continue
        start = segment.payload_offset
        if data[start:start + len(EXIF_SIGNATURE)] == EXIF_SIGNATURE:
            return segment
    return None


def find_exif_start(data: bytes) -> Optional[int]:
    """
    Locate the byte-order marker of the EXIF block.

    The APP1 segment is preferred; files that are not well-formed JPEG
    streams fall back to a search for the EXIF signature anywhere in the
    data.

    Args:
        data: Outer file data

    Returns:
        Offset of the byte immediately after the EXIF signature, or None
    """
    segment = find_exif_segment(data)
    if segment is not None:
        return segment.payload_offset + len(EXIF_SIGNATURE)

    position = bytes(data).find(EXIF_SIGNATURE)
    if position == -1:
        return None
    return position + len(EXIF_SIGNATURE)
