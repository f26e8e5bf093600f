# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF reader

Locates the EXIF block inside a JPEG, a Fujifilm RAF or a bare TIFF
block and decodes its directories.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from exiflib.config import DecoderConfig
from exiflib.directory import decode_directory
from exiflib.endian import ENDIAN_MARKERS, Endianness, resolve_endianness
from exiflib.entry import DecodedTag
from exiflib.exceptions import ExifNotFoundError, FormatError, MetadataReadError
from exiflib.jpeg import find_exif_start
from exiflib.numeric import read_u32
from exiflib.raf import is_raf, parse_raf_header

logger = logging.getLogger(__name__)

# The first IFD offset follows the marker and the 0x002A magic number
FIRST_IFD_OFFSET_POSITION = 4


@dataclass(frozen=True)
class ExifBlock:
    """
    An EXIF block positioned at its byte-order marker.

    Attributes:
        buffer: Block data; offsets inside EXIF are relative to its start
        endian: Byte order declared by the marker
        first_ifd_offset: Offset of IFD0's entry count field
        start: Offset of the block within the outer file data
    """
    buffer: bytes
    endian: Endianness
    first_ifd_offset: int
    start: int = 0

    def entries(self, config: Optional[DecoderConfig] = None) -> List[DecodedTag]:
        """Decode IFD0 and its EXIF Sub-IFD."""
        return decode_directory(self.endian, self.buffer, self.first_ifd_offset, config)


def locate_exif(data: bytes) -> ExifBlock:
    """
    Find the EXIF block in ``data``.

    Data that already starts with a byte-order marker is treated as a bare
    TIFF block; anything else is searched for the EXIF signature.

    Raises:
        ExifNotFoundError: If no EXIF block is present
        UnrecognizedEndianMarker: If the signature is not followed by a marker
        InsufficientBytes: If the block is too short to hold the IFD0 offset
    """
    if bytes(data[:2]) in ENDIAN_MARKERS:
        start = 0
    else:
        start = find_exif_start(data)
        if start is None:
            raise ExifNotFoundError("No EXIF data found")

    buffer = data[start:]
    endian = resolve_endianness(buffer[:2])
    first_ifd_offset = read_u32(endian, buffer, FIRST_IFD_OFFSET_POSITION)
    logger.debug(
        f"EXIF block at {start}: {endian.name.lower()}-endian, IFD0 at {first_ifd_offset}"
    )
    return ExifBlock(buffer, endian, first_ifd_offset, start)


def parse(data: bytes) -> ExifBlock:
    """
    Detect the container format of ``data`` and locate its EXIF block.

    For RAF files the EXIF block is taken from the embedded JPEG preview,
    so block offsets are relative to that preview.
    """
    if is_raf(data):
        header = parse_raf_header(data)
        logger.debug(f"RAF file from {header.model}, JPEG at {header.jpeg_offset}")
        return locate_exif(header.embedded_jpeg(data))
    return locate_exif(data)


class ExifReader:
    """
    Reader for EXIF directories in JPEG, RAF and TIFF data.

    Example:
        >>> tags = ExifReader("photo.jpg").read()
        >>> for tag in tags:
        ...     print(hex(tag.tag), tag.value)
    """

    def __init__(
        self,
        file_path: Optional[Union[str, Path]] = None,
        file_data: Optional[bytes] = None,
        config: Optional[DecoderConfig] = None
    ):
        """
        Initialize the reader.

        Args:
            file_path: Path to the image file
            file_data: Raw file data (alternative to file_path)
            config: Decoder options
        """
        self.file_path = file_path
        self.file_data = file_data
        self.config = config
        self.block: Optional[ExifBlock] = None

    def read(self) -> List[DecodedTag]:
        """
        Read the EXIF tags of the file.

        Returns:
            Decoded tags of IFD0 followed by its EXIF Sub-IFD

        Raises:
            ExifNotFoundError: If the file has no EXIF block
            MetadataReadError: If the file cannot be read or its EXIF
                structure is unusable
        """
        if self.file_path:
            try:
                with open(self.file_path, 'rb') as f:
                    self.file_data = f.read()
            except OSError as e:
                raise MetadataReadError(f"Cannot read {self.file_path}: {e}") from e
        elif not self.file_data:
            raise MetadataReadError("No file path or file data provided")

        try:
            self.block = parse(self.file_data)
            return self.block.entries(self.config)
        except FormatError as e:
            raise MetadataReadError(f"Failed to read EXIF data: {e}") from e
