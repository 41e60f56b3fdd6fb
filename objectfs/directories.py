from __future__ import annotations
"""Directory emulation through zero-byte folder marker objects."""
import logging
from typing import Optional

from .backend import ObjectStoreBackend
from .errors import BackendIOError, ConflictError, MissingParentError, ObjectFSError
from .models import ObjectStatus
from .paths import PATH_SEPARATOR, PathTranslator

LOGGER = logging.getLogger(__name__)


class DirectoryEmulator:
    """Creates, probes and self-heals folder markers in an object store.

    A directory ``a/b`` is represented by an empty object at
    ``a/b<folder suffix>``. Directories written by other tools only exist
    implicitly, as the common prefix of their contents; they are converted into
    marked directories the first time they are probed.
    """

    def __init__(self, backend: ObjectStoreBackend, translator: PathTranslator):
        self._backend = backend
        self._paths = translator

    def to_folder_marker_key(self, path: str) -> str:
        if path.endswith(PATH_SEPARATOR):
            path = path[: -len(PATH_SEPARATOR)]
        return path + self._backend.folder_suffix

    def marker_key_for(self, path: str) -> str:
        """Return the backend key of the folder marker for ``path``."""

        return self.to_folder_marker_key(self._paths.strip_root_prefix(path))

    def create_marker(self, path: str) -> bool:
        return self._backend.create_empty_object(self.marker_key_for(path))

    def probe_directory(self, path: str) -> Optional[ObjectStatus]:
        """Return the marker metadata for ``path`` if it is a directory.

        If the marker is missing but keys exist below ``path``, the marker is
        created and its metadata returned. Backend failures while looking for
        such keys are reported as "not a directory" and only logged.
        """
        if self._paths.is_root(path):
            raise ValueError("The root has no folder marker")
        marker_key = self.marker_key_for(path)
        status = self._backend.get_object_status(marker_key)
        if status is not None:
            return status

        prefix = self._paths.to_listing_prefix(path)
        try:
            chunk = self._backend.get_object_listing(prefix, True, page_size=1)
        except BackendIOError as exc:
            LOGGER.warning(
                "Treating %s as not a directory, listing %r failed: %s", path, prefix, exc
            )
            return None
        if chunk is None or not chunk.object_names:
            return None

        LOGGER.debug("Creating missing folder marker %s", marker_key)
        self._backend.create_empty_object(marker_key)
        return self._backend.get_object_status(marker_key)

    def is_directory(self, path: str) -> bool:
        return self._paths.is_root(path) or self.probe_directory(path) is not None

    def is_file(self, path: str) -> bool:
        return self._backend.get_object_status(self._paths.strip_root_prefix(path)) is not None

    def parent_exists(self, path: str) -> bool:
        """Return whether the parent of ``path`` is a directory.

        The root, and keys directly below it, always have an existing parent.
        """
        if self._paths.is_root(path):
            return True
        parent = self._paths.parent_of(path)
        return parent is None or self.is_directory(parent)

    def make_directories(self, path: str, create_parent: bool = True) -> bool:
        """Create the directory ``path``; returns ``False`` if it cannot be made.

        With ``create_parent`` missing ancestors are created first, outermost
        first. Ancestors created before a failure are left in place.
        """
        try:
            self._make_directories(path, create_parent)
        except ObjectFSError as exc:
            LOGGER.error("Cannot create directory %s: %s", path, exc)
            return False
        return True

    def _make_directories(self, path: str, create_parent: bool) -> None:
        if not self._paths.is_root(path):
            path = path.rstrip(PATH_SEPARATOR)
        if self.is_directory(path):
            return
        if self.is_file(path):
            raise ConflictError(f"{path} is already a file")

        if not create_parent:
            if not self.parent_exists(path):
                raise MissingParentError(f"parent of {path} does not exist")
            self._create_marker_or_raise(path)
            return

        pending = [path]
        parent = self._paths.parent_of(path)
        while parent is not None and not self.is_directory(parent):
            pending.append(parent)
            parent = self._paths.parent_of(parent)

        for directory in reversed(pending):
            if directory != path and self.is_file(directory):
                raise ConflictError(f"ancestor {directory} is already a file")
            self._create_marker_or_raise(directory)

    def _create_marker_or_raise(self, path: str) -> None:
        if not self.create_marker(path):
            raise BackendIOError(f"failed to create folder marker {self.marker_key_for(path)}")
