from __future__ import annotations
"""Recursive delete and rename built from single-object primitives.

None of these operations is atomic. They stop at the first failing step and
leave whatever was already done in place; callers observe a partially
deleted or partially renamed tree rather than a rollback.
"""
import logging

from .backend import ObjectStoreBackend
from .directories import DirectoryEmulator
from .errors import (
    AlreadyExistsError,
    BackendIOError,
    DirectoryNotEmptyError,
    InvalidPrefixError,
    NotFoundError,
    ObjectFSError,
)
from .listing import ListingEngine
from .models import ChildEntry
from .paths import PathTranslator, join

LOGGER = logging.getLogger(__name__)


class RecursiveOperationEngine:
    """Directory delete and directory/file rename for an object store."""

    def __init__(
        self,
        backend: ObjectStoreBackend,
        translator: PathTranslator,
        directories: DirectoryEmulator,
        listing: ListingEngine,
    ):
        self._backend = backend
        self._paths = translator
        self._directories = directories
        self._listing = listing

    def delete_directory(self, path: str, recursive: bool = False) -> bool:
        try:
            self._delete_directory(path, recursive)
        except ObjectFSError as exc:
            LOGGER.error("Unable to delete directory %s: %s", path, exc)
            return False
        return True

    def rename_directory(self, src: str, dst: str) -> bool:
        try:
            self._rename_directory(src, dst)
        except ObjectFSError as exc:
            LOGGER.error("Unable to rename directory %s to %s: %s", src, dst, exc)
            return False
        return True

    def rename_file(self, src: str, dst: str) -> bool:
        try:
            self._rename_file(src, dst)
        except ObjectFSError as exc:
            LOGGER.error("Unable to rename file %s to %s: %s", src, dst, exc)
            return False
        return True

    def _list_or_raise(self, path: str, recursive: bool) -> list[ChildEntry]:
        children = self._listing.list_children(path, recursive)
        if children is None:
            raise NotFoundError(f"{path} could not be listed as a directory")
        return children

    def _delete_directory(self, path: str, recursive: bool) -> None:
        if not recursive:
            if self._list_or_raise(path, False):
                raise DirectoryNotEmptyError(
                    f"{path} is not empty; delete it recursively to remove its children"
                )
        else:
            for child in self._list_or_raise(path, True):
                key = self._paths.strip_root_prefix(join(path, child.name))
                if child.is_directory:
                    key = self._directories.to_folder_marker_key(key)
                if not self._backend.delete_object(key):
                    raise BackendIOError(f"failed to delete {key}, delete aborted")
                LOGGER.debug("Deleted %s", key)
                if child.is_directory:
                    self._delete_placeholder(join(path, child.name))

        self._delete_placeholder(path)
        marker_key = self._directories.marker_key_for(path)
        if not self._backend.delete_object(marker_key):
            raise BackendIOError(f"failed to delete folder marker {marker_key}")

    def _delete_placeholder(self, path: str) -> None:
        """Delete the ``dir/`` key some tools write for a directory, if present."""

        key = self._paths.to_listing_prefix(path)
        if not key or self._backend.get_object_status(key) is None:
            return
        if not self._backend.delete_object(key):
            raise BackendIOError(f"failed to delete folder placeholder {key}, delete aborted")
        LOGGER.debug("Deleted %s", key)

    def _ensure_absent(self, path: str) -> None:
        if self._directories.is_file(path) or self._directories.is_directory(path):
            raise AlreadyExistsError(f"destination {path} already exists")

    def _rename_directory(self, src: str, dst: str) -> None:
        if self._paths.to_listing_prefix(dst).startswith(self._paths.to_listing_prefix(src)):
            raise InvalidPrefixError(f"destination {dst} is inside source {src}")
        children = self._list_or_raise(src, False)
        self._ensure_absent(dst)

        src_marker = self._directories.marker_key_for(src)
        dst_marker = self._directories.marker_key_for(dst)
        if not self._backend.copy_object(src_marker, dst_marker):
            raise BackendIOError(f"failed to copy folder marker {src_marker} to {dst_marker}")

        for child in children:
            child_src = join(src, child.name)
            child_dst = join(dst, child.name)
            if child.is_directory:
                self._rename_directory(child_src, child_dst)
            else:
                self._rename_file(child_src, child_dst)

        self._delete_directory(src, recursive=True)

    def _rename_file(self, src: str, dst: str) -> None:
        if not self._directories.is_file(src):
            raise NotFoundError(f"source {src} does not exist or is a directory")
        self._ensure_absent(dst)

        src_key = self._paths.strip_root_prefix(src)
        dst_key = self._paths.strip_root_prefix(dst)
        if not self._backend.copy_object(src_key, dst_key):
            raise BackendIOError(f"failed to copy {src_key} to {dst_key}")
        if not self._backend.delete_object(src_key):
            raise BackendIOError(
                f"copied {src_key} to {dst_key} but failed to delete the source; both keys exist"
            )
