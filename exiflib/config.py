# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Decoder configuration

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from typing import Optional

EXIF_SUB_IFD_POINTER = 0x8769


@dataclass(frozen=True)
class DecoderConfig:
    """
    Options for directory decoding.

    The defaults decode every stored entry and follow the EXIF Sub-IFD
    pointer of the first directory.

    Attributes:
        follow_sub_ifd: Append the entries of the Sub-IFD referenced by
            ``sub_ifd_pointer_tag`` after the first directory's entries
        sub_ifd_pointer_tag: Tag id of the Sub-IFD pointer entry
        max_entries: Decode at most this many entries per directory
            (None decodes the stored entry count)
    """
    follow_sub_ifd: bool = True
    sub_ifd_pointer_tag: int = EXIF_SUB_IFD_POINTER
    max_entries: Optional[int] = None

    def __post_init__(self):
        if self.max_entries is not None and self.max_entries < 0:
            raise ValueError(f"max_entries must be non-negative, got {self.max_entries}")


DEFAULT_CONFIG = DecoderConfig()
