import logging
import struct

import pytest

from exiflib.config import DecoderConfig
from exiflib.directory import (
    decode_directory,
    decode_entries,
    find_sub_ifd_offset,
    read_next_ifd_offset,
)
from exiflib.exceptions import InsufficientBytes
from exiflib.tag_format import TagFormat
from exiflib.values import TagValue

from .ifd_builder import BIG, LITTLE, RawEntry, build_tiff

IFD0_OFFSET = 8

INLINE_ENTRIES = [
    (0x0100, TagFormat.UNSIGNED_LONG, 4000),
    (0x0101, TagFormat.UNSIGNED_SHORT, 3000),
    (0x0112, TagFormat.UNSIGNED_SHORT, 1),
    (0x9000, TagFormat.UNDEFINED, b'0230'),
    (0x0001, TagFormat.ASCII_STRING, 'N'),
    (0x9204, TagFormat.SIGNED_SHORT, -2),
    (0xA001, TagFormat.SINGLE_FLOAT, 0.5),
    (0x0005, TagFormat.UNSIGNED_BYTE, 1),
    (0x0006, TagFormat.SIGNED_BYTE, -7),
]

ALL_FORMATS = [
    (0x0001, TagFormat.UNSIGNED_BYTE, 200),
    (0x010F, TagFormat.ASCII_STRING, 'FUJIFILM'),
    (0x0003, TagFormat.UNSIGNED_SHORT, 65535),
    (0x0004, TagFormat.UNSIGNED_LONG, 0xDEADBEEF),
    (0x829A, TagFormat.UNSIGNED_RATIONAL, (1, 250)),
    (0x0006, TagFormat.SIGNED_BYTE, -128),
    (0x927C, TagFormat.UNDEFINED, b'\x00\x01\x02\x03\x04\x05\x06'),
    (0x0008, TagFormat.SIGNED_SHORT, -32768),
    (0x0009, TagFormat.SIGNED_LONG, -123456),
    (0x9204, TagFormat.SIGNED_RATIONAL, (-1, 3)),
    (0x000B, TagFormat.SINGLE_FLOAT, 1.5),
    (0x000C, TagFormat.DOUBLE_FLOAT, 2.718281828459045),
]


def triples(tags):
    return [(tag.tag, tag.format, tag.value.value) for tag in tags]


@pytest.mark.parametrize('endian', [BIG, LITTLE])
def test_inline_directory_decodes_every_entry(endian):
    buffer = build_tiff(endian, INLINE_ENTRIES)
    tags = decode_directory(endian, buffer, IFD0_OFFSET)
    assert len(tags) == len(INLINE_ENTRIES)
    assert all(tag.value is not None for tag in tags)
    assert triples(tags) == INLINE_ENTRIES


@pytest.mark.parametrize('endian', [BIG, LITTLE])
def test_round_trip_every_format(endian):
    buffer = build_tiff(endian, ALL_FORMATS)
    tags = decode_directory(endian, buffer, IFD0_OFFSET)
    assert triples(tags) == ALL_FORMATS
    assert [tag.components for tag in tags] == [1, 9, 1, 1, 1, 1, 7, 1, 1, 1, 1, 1]


def test_entries_keep_stored_order():
    entries = [
        (0x0112, TagFormat.UNSIGNED_SHORT, 1),
        (0x0100, TagFormat.UNSIGNED_SHORT, 2),
        (0x0110, TagFormat.UNSIGNED_SHORT, 3),
    ]
    tags = decode_directory(BIG, build_tiff(BIG, entries), IFD0_OFFSET)
    assert [tag.tag for tag in tags] == [0x0112, 0x0100, 0x0110]


def test_overflowing_entry_does_not_abort_walk():
    entries = [
        (0x0100, TagFormat.UNSIGNED_SHORT, 10),
        RawEntry(0x0111, 4, 0x40000001, b'\x00\x00\x00\x10'),
        (0x0101, TagFormat.UNSIGNED_SHORT, 20),
    ]
    tags = decode_directory(BIG, build_tiff(BIG, entries), IFD0_OFFSET)
    assert len(tags) == 3
    assert tags[1].value is None
    assert tags[1].length is None
    assert tags[2].value == TagValue(TagFormat.UNSIGNED_SHORT, 20)


def test_failed_entries_are_retained():
    entries = [
        RawEntry(0x0100, 0, 1, b'\x00' * 4),
        RawEntry(0x010F, 2, 40, struct.pack('<I', 0xFFFF)),
        (0x0110, TagFormat.ASCII_STRING, 'X100V'),
    ]
    tags = decode_directory(LITTLE, build_tiff(LITTLE, entries), IFD0_OFFSET)
    assert [tag.tag for tag in tags] == [0x0100, 0x010F, 0x0110]
    assert [tag.value is None for tag in tags] == [True, True, False]
    assert tags[2].value.value == 'X100V'


@pytest.mark.parametrize('endian', [BIG, LITTLE])
def test_sub_ifd_entries_follow_ifd0(endian):
    ifd0 = [
        (0x010F, TagFormat.ASCII_STRING, 'Canon'),
        (0x0112, TagFormat.UNSIGNED_SHORT, 1),
    ]
    sub_ifd = [
        (0x829A, TagFormat.UNSIGNED_RATIONAL, (1, 125)),
        (0x8827, TagFormat.UNSIGNED_SHORT, 400),
        (0x9003, TagFormat.ASCII_STRING, '2024:01:01 12:00:00'),
    ]
    tags = decode_directory(endian, build_tiff(endian, ifd0, sub_ifd), IFD0_OFFSET)

    assert len(tags) == 3 + 3
    assert [tag.tag for tag in tags] == [0x010F, 0x0112, 0x8769, 0x829A, 0x8827, 0x9003]
    assert triples(tags[3:]) == sub_ifd


def test_sub_ifd_pointer_out_of_bounds_is_skipped():
    entries = [
        (0x010F, TagFormat.ASCII_STRING, 'Canon'),
        RawEntry(0x8769, 4, 1, struct.pack('>I', 0x00FFFFFF)),
    ]
    tags = decode_directory(BIG, build_tiff(BIG, entries), IFD0_OFFSET)
    assert len(tags) == 2
    assert tags[1].value == TagValue(TagFormat.UNSIGNED_LONG, 0x00FFFFFF)


def test_sub_ifd_pointer_with_wrong_format_is_ignored():
    entries = [(0x8769, TagFormat.UNSIGNED_SHORT, IFD0_OFFSET)]
    tags = decode_directory(BIG, build_tiff(BIG, entries), IFD0_OFFSET)
    assert len(tags) == 1


def test_only_one_sub_ifd_level_is_followed():
    # The Sub-IFD points back at IFD0; following it again would repeat entries
    sub_ifd = [(0x8769, TagFormat.UNSIGNED_LONG, IFD0_OFFSET)]
    ifd0 = [(0x0100, TagFormat.UNSIGNED_SHORT, 1)]
    tags = decode_directory(BIG, build_tiff(BIG, ifd0, sub_ifd), IFD0_OFFSET)
    assert [tag.tag for tag in tags] == [0x0100, 0x8769, 0x8769]


def test_sub_ifd_disabled_by_config():
    ifd0 = [(0x0100, TagFormat.UNSIGNED_SHORT, 1)]
    sub_ifd = [(0x8827, TagFormat.UNSIGNED_SHORT, 400)]
    buffer = build_tiff(BIG, ifd0, sub_ifd)
    tags = decode_directory(BIG, buffer, IFD0_OFFSET, DecoderConfig(follow_sub_ifd=False))
    assert [tag.tag for tag in tags] == [0x0100, 0x8769]


def test_max_entries_caps_each_directory():
    ifd0 = [(0x0100 + i, TagFormat.UNSIGNED_SHORT, i) for i in range(5)]
    tags = decode_entries(BIG, build_tiff(BIG, ifd0), IFD0_OFFSET, DecoderConfig(max_entries=2))
    assert [tag.tag for tag in tags] == [0x0100, 0x0101]


def test_max_entries_must_be_non_negative():
    with pytest.raises(ValueError):
        DecoderConfig(max_entries=-1)


def test_unreadable_entry_count_aborts():
    with pytest.raises(InsufficientBytes):
        decode_directory(BIG, b'MM\x00*\x00\x00\x00\x08', IFD0_OFFSET)


def test_truncated_directory_stops_walk(caplog):
    buffer = build_tiff(BIG, [(0x0100, TagFormat.UNSIGNED_SHORT, 1)] * 3)
    truncated = buffer[:IFD0_OFFSET + 2 + 12 * 2 + 5]
    with caplog.at_level(logging.WARNING, logger='exiflib.directory'):
        tags = decode_directory(BIG, truncated, IFD0_OFFSET)
    assert len(tags) == 2
    assert 'truncated' in caplog.text


def test_next_ifd_link_is_read_not_followed():
    buffer = bytearray(build_tiff(BIG, [(0x0100, TagFormat.UNSIGNED_SHORT, 1)]))
    link_offset = IFD0_OFFSET + 2 + 12
    struct.pack_into('>I', buffer, link_offset, IFD0_OFFSET)
    buffer = bytes(buffer)
    assert read_next_ifd_offset(BIG, buffer, IFD0_OFFSET, 1) == IFD0_OFFSET
    assert read_next_ifd_offset(BIG, buffer[:link_offset], IFD0_OFFSET, 1) is None
    assert len(decode_directory(BIG, buffer, IFD0_OFFSET)) == 1


def test_find_sub_ifd_offset():
    tags = decode_directory(BIG, build_tiff(BIG, [(0x8769, TagFormat.UNSIGNED_LONG, 26)]), IFD0_OFFSET)
    assert find_sub_ifd_offset(tags, 0x8769) == 26
    assert find_sub_ifd_offset(tags, 0x8825) is None


def test_decoding_is_idempotent():
    ifd0 = ALL_FORMATS + [RawEntry(0x0111, 4, 0x40000001, b'\x00' * 4)]
    sub_ifd = [(0x829A, TagFormat.UNSIGNED_RATIONAL, (1, 125))]
    buffer = build_tiff(LITTLE, ifd0, sub_ifd)
    assert decode_directory(LITTLE, buffer, IFD0_OFFSET) == decode_directory(LITTLE, buffer, IFD0_OFFSET)


def test_memoryview_buffer():
    buffer = memoryview(build_tiff(BIG, ALL_FORMATS))
    assert triples(decode_directory(BIG, buffer, IFD0_OFFSET)) == ALL_FORMATS
