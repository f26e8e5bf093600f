# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Tag value decoding

Converts the byte span of a directory entry into a typed value according
to the entry's format. The span has already been resolved (inline or
out-of-line) and bounds-checked by the entry decoder.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union

from exiflib.endian import Endianness
from exiflib.exceptions import InsufficientBytes, InvalidUtf8
from exiflib.numeric import NumericKind, decode_numeric
from exiflib.tag_format import TagFormat

Rational = Tuple[int, int]
Payload = Union[int, float, str, bytes, Rational]


@dataclass(frozen=True)
class TagValue:
    """
    A decoded tag value.

    Attributes:
        format: Format the value was decoded as
        value: int for byte/short/long formats, float for single/double,
            a (numerator, denominator) tuple for rationals, str for ASCII
            strings and bytes for undefined data
    """
    format: TagFormat
    value: Payload


# Formats decoded with a single numeric read at the start of the span
_NUMERIC_KINDS = {
    TagFormat.UNSIGNED_BYTE: NumericKind.U8,
    TagFormat.SIGNED_BYTE: NumericKind.I8,
    TagFormat.UNSIGNED_SHORT: NumericKind.U16,
    TagFormat.SIGNED_SHORT: NumericKind.I16,
    TagFormat.UNSIGNED_LONG: NumericKind.U32,
    TagFormat.SIGNED_LONG: NumericKind.I32,
    TagFormat.SINGLE_FLOAT: NumericKind.F32,
    TagFormat.DOUBLE_FLOAT: NumericKind.F64,
}

_RATIONAL_KINDS = {
    TagFormat.UNSIGNED_RATIONAL: NumericKind.U32,
    TagFormat.SIGNED_RATIONAL: NumericKind.I32,
}


def _numeric_decoder(kind: NumericKind) -> Callable[[Endianness, bytes], Payload]:
    def decode(endian: Endianness, data: bytes) -> Payload:
        return decode_numeric(endian, data, kind)
    return decode


def _rational_decoder(kind: NumericKind) -> Callable[[Endianness, bytes], Payload]:
    def decode(endian: Endianness, data: bytes) -> Payload:
        if len(data) < 8:
            raise InsufficientBytes(
                f"Rational value needs 8 bytes, got {len(data)}"
            )
        numerator = decode_numeric(endian, data, kind, 0)
        denominator = decode_numeric(endian, data, kind, 4)
        return (numerator, denominator)
    return decode


def decode_ascii(endian: Endianness, data: bytes) -> str:
    """
    Decode an ASCII string value.

    The whole span is decoded as UTF-8 and every NUL character is removed.
    Encoders pad with trailing NULs but some also embed them mid-string.
    """
    try:
        text = bytes(data).decode('utf-8', errors='strict')
    except UnicodeDecodeError as e:
        raise InvalidUtf8(f"String value is not valid UTF-8: {e}") from None
    return text.replace('\x00', '')


def decode_undefined(endian: Endianness, data: bytes) -> bytes:
    return bytes(data)


def _build_decoders() -> Dict[TagFormat, Callable[[Endianness, bytes], Payload]]:
    decoders = {}
    for tag_format, kind in _NUMERIC_KINDS.items():
        decoders[tag_format] = _numeric_decoder(kind)
    for tag_format, kind in _RATIONAL_KINDS.items():
        decoders[tag_format] = _rational_decoder(kind)
    decoders[TagFormat.ASCII_STRING] = decode_ascii
    decoders[TagFormat.UNDEFINED] = decode_undefined
    return decoders


DECODERS = _build_decoders()


def decode_value(tag_format: TagFormat, endian: Endianness, data: bytes) -> TagValue:
    """
    Decode a value span according to its format.

    Args:
        tag_format: Format of the entry
        endian: Byte order of the EXIF block
        data: Resolved value bytes

    Returns:
        The decoded TagValue

    Raises:
        InsufficientBytes: If the span is too short for the format
        InvalidUtf8: If an ASCII string is not valid UTF-8
    """
    return TagValue(tag_format, DECODERS[tag_format](endian, data))
