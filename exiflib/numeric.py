# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Endian-aware numeric decoding

Every multi-byte field in an EXIF block goes through this module; it is
the only place where byte order is applied.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum
from typing import Union

from exiflib.endian import Endianness
from exiflib.exceptions import InsufficientBytes

Number = Union[int, float]


class NumericKind(Enum):
    """Fixed-width numeric types. Values are ``struct`` format characters."""
    U8 = 'B'
    U16 = 'H'
    U32 = 'I'
    U64 = 'Q'
    I8 = 'b'
    I16 = 'h'
    I32 = 'i'
    I64 = 'q'
    F32 = 'f'
    F64 = 'd'

    @property
    def width(self) -> int:
        """Size of the type in bytes."""
        return struct.calcsize(self.value)


def decode_numeric(
    endian: Endianness,
    data: Union[bytes, bytearray, memoryview],
    kind: NumericKind,
    offset: int = 0
) -> Number:
    """
    Decode a single number from ``data``.

    Args:
        endian: Byte order of the data
        data: Buffer to read from
        kind: Numeric type to decode
        offset: Position within ``data`` where the number starts

    Returns:
        Decoded int or float

    Raises:
        InsufficientBytes: If fewer than ``kind.width`` bytes remain at ``offset``
    """
    width = kind.width
    if offset < 0 or offset + width > len(data):
        raise InsufficientBytes(
            f"Need {width} bytes at offset {offset}, buffer has {len(data)}"
        )
    return struct.unpack_from(f'{endian.value}{kind.value}', data, offset)[0]


def read_u16(endian: Endianness, data, offset: int = 0) -> int:
    return decode_numeric(endian, data, NumericKind.U16, offset)


def read_u32(endian: Endianness, data, offset: int = 0) -> int:
    return decode_numeric(endian, data, NumericKind.U32, offset)
