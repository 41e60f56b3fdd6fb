from __future__ import annotations
"""Capability interface every object store driver implements."""
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from .models import ListingChunk, ObjectStatus


class ObjectStoreBackend(ABC):
    """Primitive operations of a flat key-value object store.

    Keys passed to these methods are already stripped of the root prefix.
    Single-object calls report failure through their return value; only
    listings raise, with :class:`~objectfs.errors.BackendIOError`.
    """

    @property
    @abstractmethod
    def root_key(self) -> str:
        """Full path of the root, including scheme and bucket."""

    @property
    @abstractmethod
    def folder_suffix(self) -> str:
        """Suffix appended to a key to mark it as a directory."""

    @abstractmethod
    def create_empty_object(self, key: str) -> bool:
        """Create a zero-byte object at ``key``."""

    @abstractmethod
    def create_object(self, key: str) -> BinaryIO:
        """Open a writable stream whose content is stored at ``key`` on close."""

    @abstractmethod
    def copy_object(self, src_key: str, dst_key: str) -> bool:
        """Copy ``src_key`` to ``dst_key``; returns ``False`` if the copy failed."""

    @abstractmethod
    def delete_object(self, key: str) -> bool:
        """Delete ``key``; returns ``False`` if it could not be removed."""

    @abstractmethod
    def get_object_status(self, key: str) -> Optional[ObjectStatus]:
        """Return metadata for ``key``, or ``None`` if it does not exist."""

    @abstractmethod
    def get_object_listing(
        self, prefix: str, recursive: bool, *, page_size: int
    ) -> Optional[ListingChunk]:
        """Begin a paginated listing of the keys starting with ``prefix``.

        Without ``recursive`` the listing is grouped on the path separator, so
        deeper keys are reported once through ``common_prefixes``.
        """
