# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD entry decoding

Each directory entry is a fixed 12-byte record:

    offset 0   tag id           (u16)
    offset 2   format code      (u16)
    offset 4   component count  (u32)
    offset 8   value field      (4 bytes)

Values of at most 4 bytes are stored inline in the value field. Longer
values live elsewhere in the block and the value field holds their offset,
measured from the byte-order marker like every other offset in EXIF.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from exiflib.endian import Endianness
from exiflib.exceptions import (
    ComponentCountOverflow,
    FormatError,
    InsufficientBytes,
    OffsetOutOfRange,
)
from exiflib.numeric import read_u16, read_u32
from exiflib.tag_format import TagFormat, bytes_per_component, tag_format_from_code
from exiflib.values import TagValue, decode_value

logger = logging.getLogger(__name__)

ENTRY_SIZE = 12
INLINE_VALUE_SIZE = 4
U32_MAX = 0xFFFFFFFF

VARIABLE_LENGTH_FORMATS = frozenset({TagFormat.ASCII_STRING, TagFormat.UNDEFINED})


@dataclass(frozen=True)
class DirectoryEntry:
    """Raw fields of a 12-byte directory entry."""
    tag: int
    format_code: int
    components: int
    value_field: bytes

    @classmethod
    def parse(cls, endian: Endianness, entry: bytes) -> 'DirectoryEntry':
        """
        Read the raw fields of an entry record.

        Raises:
            InsufficientBytes: If ``entry`` is shorter than 12 bytes
        """
        if len(entry) < ENTRY_SIZE:
            raise InsufficientBytes(
                f"Directory entry needs {ENTRY_SIZE} bytes, got {len(entry)}"
            )
        return cls(
            tag=read_u16(endian, entry, 0),
            format_code=read_u16(endian, entry, 2),
            components=read_u32(endian, entry, 4),
            value_field=bytes(entry[8:12]),
        )


@dataclass(frozen=True)
class DecodedTag:
    """
    A directory entry together with its decoded value.

    Attributes:
        tag: Tag id
        format: Decoded format, None if the format code is unknown
        value: Decoded value, None if decoding this entry failed
        components: Component count stored in the entry
        bytes_per_component: Width of one component (0 for unknown formats)
        length: Total value length in bytes, None if it could not be computed
        format_code: Raw format code stored in the entry
        error: Message of the error that prevented decoding, if any
    """
    tag: int
    format: Optional[TagFormat]
    value: Optional[TagValue]
    components: int
    bytes_per_component: int
    length: Optional[int]
    format_code: int = 0
    error: Optional[str] = None


def compute_length(components: int, width: int) -> int:
    """
    Total value length, checked against the 32-bit unsigned range.

    Raises:
        ComponentCountOverflow: If ``components * width`` does not fit in a u32
    """
    length = components * width
    if length > U32_MAX:
        raise ComponentCountOverflow(
            f"{components} components of {width} bytes overflow a 32-bit length"
        )
    return length


def inline_value_bytes(entry: DirectoryEntry, tag_format: TagFormat, length: int) -> bytes:
    """
    The value stored in the entry's own value field.

    Numeric decoders read only the prefix they need. String and undefined
    values are trimmed to ``length`` so the field's padding is not returned.
    """
    if tag_format in VARIABLE_LENGTH_FORMATS:
        return entry.value_field[:length]
    return entry.value_field


def offset_value_bytes(
    endian: Endianness,
    buffer: bytes,
    entry: DirectoryEntry,
    length: int
) -> bytes:
    """
    Fetch an out-of-line value from the directory buffer.

    Args:
        endian: Byte order of the EXIF block
        buffer: EXIF block starting at the byte-order marker
        entry: Entry whose value field holds the offset
        length: Value length in bytes

    Returns:
        The ``length`` bytes at the stored offset

    Raises:
        OffsetOutOfRange: If the value range does not lie within ``buffer``
    """
    offset = read_u32(endian, entry.value_field)
    end = offset + length
    if end > len(buffer):
        raise OffsetOutOfRange(
            f"Value range {offset}..{end} exceeds buffer of {len(buffer)} bytes"
        )
    return bytes(buffer[offset:end])


def resolve_value_bytes(
    endian: Endianness,
    buffer: bytes,
    entry: DirectoryEntry,
    tag_format: TagFormat,
    length: int
) -> bytes:
    if length <= INLINE_VALUE_SIZE:
        return inline_value_bytes(entry, tag_format, length)
    return offset_value_bytes(endian, buffer, entry, length)


def decode_entry(endian: Endianness, buffer: bytes, entry: bytes) -> DecodedTag:
    """
    Decode one 12-byte directory entry.

    Failures scoped to this entry (unknown format, length overflow, value
    out of range, undecodable value) are recorded on the returned tag with
    ``value=None`` rather than raised.

    Args:
        endian: Byte order of the EXIF block
        buffer: EXIF block, the lookup space for out-of-line values
        entry: The 12-byte entry record

    Returns:
        DecodedTag for the entry

    Raises:
        InsufficientBytes: If ``entry`` is not a complete record
    """
    raw = DirectoryEntry.parse(endian, entry)

    tag_format = None
    width = 0
    length = None
    try:
        tag_format = tag_format_from_code(raw.format_code)
        width = bytes_per_component(tag_format)
        length = compute_length(raw.components, width)
        data = resolve_value_bytes(endian, buffer, raw, tag_format, length)
        value = decode_value(tag_format, endian, data)
    except FormatError as e:
        logger.debug(f"Tag 0x{raw.tag:04x}: {e}")
        return DecodedTag(
            tag=raw.tag,
            format=tag_format,
            value=None,
            components=raw.components,
            bytes_per_component=width,
            length=length,
            format_code=raw.format_code,
            error=str(e),
        )

    return DecodedTag(
        tag=raw.tag,
        format=tag_format,
        value=value,
        components=raw.components,
        bytes_per_component=width,
        length=length,
        format_code=raw.format_code,
    )
