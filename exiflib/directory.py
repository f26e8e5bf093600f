# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD directory walker

An Image File Directory is a u16 entry count followed by that many 12-byte
entries and a u32 link to the next directory. The walker decodes the
first directory (IFD0) and, when it holds an EXIF Sub-IFD pointer, the
directory that pointer references. Deeper directories and the next-IFD
chain are not traversed.

Copyright 2025 DNAi inc.
"""

import logging
from typing import List, Optional

from exiflib.config import DEFAULT_CONFIG, DecoderConfig
from exiflib.endian import Endianness
from exiflib.entry import ENTRY_SIZE, DecodedTag, decode_entry
from exiflib.exceptions import InsufficientBytes
from exiflib.numeric import read_u16, read_u32
from exiflib.tag_format import TagFormat

logger = logging.getLogger(__name__)

COUNT_SIZE = 2


def read_entry_count(endian: Endianness, buffer: bytes, directory_offset: int) -> int:
    """
    Read the number of entries stored at ``directory_offset``.

    Raises:
        InsufficientBytes: If the count field lies outside the buffer
    """
    return read_u16(endian, buffer, directory_offset)


def read_next_ifd_offset(
    endian: Endianness,
    buffer: bytes,
    directory_offset: int,
    count: int
) -> Optional[int]:
    """
    Read the link to the next directory, or None if it is not in the buffer.

    The link is informational only; the walker never follows it.
    """
    link_offset = directory_offset + COUNT_SIZE + count * ENTRY_SIZE
    try:
        return read_u32(endian, buffer, link_offset)
    except InsufficientBytes:
        return None


def decode_entries(
    endian: Endianness,
    buffer: bytes,
    directory_offset: int,
    config: DecoderConfig = DEFAULT_CONFIG
) -> List[DecodedTag]:
    """
    Decode the entries of a single directory, without following pointers.

    Args:
        endian: Byte order of the EXIF block
        buffer: EXIF block starting at the byte-order marker
        directory_offset: Offset of the directory's entry count field
        config: Decoder options

    Returns:
        Decoded tags in stored order. Entries whose value could not be
        decoded are included with ``value=None``.

    Raises:
        InsufficientBytes: If the entry count cannot be read
    """
    stored_count = read_entry_count(endian, buffer, directory_offset)
    logger.debug(f"Directory at {directory_offset} holds {stored_count} entries")

    count = stored_count
    if config.max_entries is not None and count > config.max_entries:
        logger.debug(f"Decoding only the first {config.max_entries} of {count} entries")
        count = config.max_entries

    tags = []
    entry_offset = directory_offset + COUNT_SIZE
    for index in range(count):
        entry_end = entry_offset + ENTRY_SIZE
        if entry_end > len(buffer):
            logger.warning(
                f"Directory at {directory_offset} is truncated: "
                f"entry {index} of {count} ends past the buffer"
            )
            break
        tags.append(decode_entry(endian, buffer, buffer[entry_offset:entry_end]))
        entry_offset = entry_end

    link = read_next_ifd_offset(endian, buffer, directory_offset, stored_count)
    if link is None:
        logger.debug("No next IFD link")
    else:
        logger.debug(f"IFD link: 0x{link:x}")

    return tags


def find_sub_ifd_offset(tags: List[DecodedTag], pointer_tag: int) -> Optional[int]:
    """
    Offset held by the first Sub-IFD pointer entry, if it is an unsigned long.
    """
    for tag in tags:
        if tag.tag != pointer_tag:
            continue
        if tag.value is not None and tag.value.format is TagFormat.UNSIGNED_LONG:
            return tag.value.value
        logger.debug(f"Sub-IFD pointer 0x{pointer_tag:04x} is not an unsigned long")
        return None
    return None


def decode_directory(
    endian: Endianness,
    buffer: bytes,
    directory_offset: int,
    config: Optional[DecoderConfig] = None
) -> List[DecodedTag]:
    """
    Decode a directory and its EXIF Sub-IFD.

    Entries of the directory at ``directory_offset`` come first, followed
    by the entries of the Sub-IFD its pointer entry references. A missing
    or unusable pointer, or a Sub-IFD whose entry count lies outside the
    buffer, leaves just the first directory's entries.

    Args:
        endian: Byte order of the EXIF block
        buffer: EXIF block starting at the byte-order marker
        directory_offset: Offset of the directory's entry count field
        config: Decoder options (defaults to DEFAULT_CONFIG)

    Returns:
        List of DecodedTag

    Raises:
        InsufficientBytes: If the first directory's entry count cannot be read
    """
    config = config or DEFAULT_CONFIG
    tags = decode_entries(endian, buffer, directory_offset, config)

    if not config.follow_sub_ifd:
        return tags

    sub_ifd_offset = find_sub_ifd_offset(tags, config.sub_ifd_pointer_tag)
    if sub_ifd_offset is None:
        return tags

    try:
        sub_tags = decode_entries(endian, buffer, sub_ifd_offset, config)
    except InsufficientBytes as e:
        logger.debug(f"Skipping Sub-IFD at {sub_ifd_offset}: {e}")
        return tags

    return tags + sub_tags
