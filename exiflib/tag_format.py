# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF tag format table

Maps the 16-bit format code stored in a directory entry to its format
and component width.

Copyright 2025 DNAi inc.
"""

from enum import IntEnum

from exiflib.exceptions import UnknownTagFormat


class TagFormat(IntEnum):
    """EXIF tag data types"""
    UNSIGNED_BYTE = 1
    ASCII_STRING = 2
    UNSIGNED_SHORT = 3
    UNSIGNED_LONG = 4
    UNSIGNED_RATIONAL = 5
    SIGNED_BYTE = 6
    UNDEFINED = 7
    SIGNED_SHORT = 8
    SIGNED_LONG = 9
    SIGNED_RATIONAL = 10
    SINGLE_FLOAT = 11
    DOUBLE_FLOAT = 12

    @property
    def display_name(self) -> str:
        """CamelCase name, e.g. ``UnsignedRational``."""
        return ''.join(part.capitalize() for part in self.name.split('_'))


# EXIF tag sizes in bytes
TAG_SIZES = {
    TagFormat.UNSIGNED_BYTE: 1,
    TagFormat.ASCII_STRING: 1,
    TagFormat.UNSIGNED_SHORT: 2,
    TagFormat.UNSIGNED_LONG: 4,
    TagFormat.UNSIGNED_RATIONAL: 8,
    TagFormat.SIGNED_BYTE: 1,
    TagFormat.UNDEFINED: 1,
    TagFormat.SIGNED_SHORT: 2,
    TagFormat.SIGNED_LONG: 4,
    TagFormat.SIGNED_RATIONAL: 8,
    TagFormat.SINGLE_FLOAT: 4,
    TagFormat.DOUBLE_FLOAT: 8,
}


def tag_format_from_code(code: int) -> TagFormat:
    """
    Look up the format for a format code.

    Raises:
        UnknownTagFormat: If ``code`` is not in 1..12
    """
    try:
        return TagFormat(code)
    except ValueError:
        raise UnknownTagFormat(f"Unknown tag format code: {code}") from None


def bytes_per_component(tag_format: TagFormat) -> int:
    return TAG_SIZES[tag_format]
