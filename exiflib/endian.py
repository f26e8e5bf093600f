# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Byte order resolution

An EXIF block starts with a two byte marker declaring the byte order of
every multi-byte field that follows: ``MM`` (Motorola) for big-endian,
``II`` (Intel) for little-endian.

Copyright 2025 DNAi inc.
"""

from enum import Enum

from exiflib.exceptions import UnrecognizedEndianMarker


class Endianness(Enum):
    """Byte order of an EXIF block. Values are ``struct`` prefixes."""
    BIG = '>'
    LITTLE = '<'

    @property
    def marker(self) -> bytes:
        """The two byte marker that declares this byte order."""
        return b'MM' if self is Endianness.BIG else b'II'


ENDIAN_MARKERS = {
    b'MM': Endianness.BIG,
    b'II': Endianness.LITTLE,
}


def resolve_endianness(marker: bytes) -> Endianness:
    """
    Resolve the byte order from a byte-order marker.

    Only the first two bytes of ``marker`` are inspected, so the caller may
    pass the start of the EXIF block directly.

    Args:
        marker: Bytes starting with ``MM`` or ``II``

    Returns:
        The matching Endianness

    Raises:
        UnrecognizedEndianMarker: If the first two bytes are not a marker
    """
    key = bytes(marker[:2])
    try:
        return ENDIAN_MARKERS[key]
    except KeyError:
        raise UnrecognizedEndianMarker(
            f"Unrecognized byte order marker: {key!r}"
        ) from None
