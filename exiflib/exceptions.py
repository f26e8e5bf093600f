# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for exiflib

This module defines the exceptions raised while locating and decoding
EXIF directories.

Copyright 2025 DNAi inc.
"""


class ExifLibError(Exception):
    """
    Base exception for all exiflib errors.

    All exiflib exceptions inherit from this class, allowing
    catch-all error handling for any exiflib-related errors.
    """
    def __init__(self, message: str = ""):
        """
        Initialize the exception with an optional error message.

        Args:
            message: Descriptive error message explaining what went wrong
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(ExifLibError):
    """
    Raised when metadata cannot be read from a file.

    This exception is raised when:
    - No file path or file data was supplied
    - The container header is truncated or malformed
    - The EXIF directory structure cannot be walked at all
    """
    pass


class ExifNotFoundError(MetadataReadError):
    """
    Raised when a file contains no EXIF block.

    Neither a TIFF byte-order marker at the start of the data nor an
    ``Exif\\0\\0`` signature anywhere inside it could be found.
    """
    pass


class FormatError(ExifLibError):
    """
    Base class for errors in the binary EXIF format itself.

    Structural format errors (byte order, directory entry count) abort
    decoding. Errors scoped to a single directory entry are recorded on
    that entry and decoding continues.
    """
    pass


class UnrecognizedEndianMarker(FormatError):
    """Raised when the byte-order marker is neither ``MM`` nor ``II``."""
    pass


class InsufficientBytes(FormatError):
    """Raised when a read needs more bytes than the buffer holds."""
    pass


class UnknownTagFormat(FormatError):
    """Raised when a directory entry uses a format code outside 1..12."""
    pass


class ComponentCountOverflow(FormatError):
    """
    Raised when component count times component width overflows.

    The value length of an entry is a 32-bit unsigned quantity; corrupt
    or hostile component counts can push the product past that range.
    """
    pass


class InvalidUtf8(FormatError):
    """Raised when an ASCII string value is not valid UTF-8."""
    pass


class OffsetOutOfRange(FormatError):
    """Raised when an out-of-line value points outside the buffer."""
    pass
