from __future__ import annotations
"""File system settings passed in at construction time."""

from dataclasses import dataclass

LISTING_LENGTH_MAX = 1000
DEFAULT_BLOCK_SIZE_BYTES = 512 * 1024 * 1024


def cap_listing_length(value: int) -> int:
    """Clamp a configured page size to the range accepted by object stores."""

    return min(max(int(value), 1), LISTING_LENGTH_MAX)


@dataclass(frozen=True)
class FileSystemSettings:
    """Tunables consumed by :class:`~objectfs.filesystem.ObjectFileSystem`."""

    listing_length: int = LISTING_LENGTH_MAX
    block_size_bytes_default: int = DEFAULT_BLOCK_SIZE_BYTES

    @property
    def page_size(self) -> int:
        return cap_listing_length(self.listing_length)
