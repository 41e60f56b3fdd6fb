from __future__ import annotations
"""File system facade over an object store backend."""
import logging
from typing import BinaryIO, Optional

from .backend import ObjectStoreBackend
from .directories import DirectoryEmulator
from .errors import NotFoundError
from .listing import ListingEngine
from .models import ChildEntry, ObjectStatus
from .operations import RecursiveOperationEngine
from .paths import PathTranslator
from .settings import FileSystemSettings

LOGGER = logging.getLogger(__name__)

SPACE_TOTAL = "total"
SPACE_FREE = "free"
SPACE_USED = "used"


class ObjectFileSystem:
    """Hierarchical file system view of a flat object store.

    Paths may be given with the backend's root prefix (``s3://bucket/a/b``),
    with a leading separator (``/a/b``) or relative to the root (``a/b``).
    """

    def __init__(
        self,
        backend: ObjectStoreBackend,
        settings: FileSystemSettings | None = None,
    ):
        self._backend = backend
        self._settings = settings or FileSystemSettings()
        self._paths = PathTranslator(backend.root_key)
        self._directories = DirectoryEmulator(backend, self._paths)
        self._listing = ListingEngine(backend, self._paths, self._directories, self._settings)
        self._operations = RecursiveOperationEngine(
            backend, self._paths, self._directories, self._listing
        )

    @property
    def backend(self) -> ObjectStoreBackend:
        return self._backend

    @property
    def settings(self) -> FileSystemSettings:
        return self._settings

    @property
    def paths(self) -> PathTranslator:
        return self._paths

    def is_directory(self, path: str) -> bool:
        return self._directories.is_directory(path)

    def is_file(self, path: str) -> bool:
        return self._directories.is_file(path)

    def mkdirs(self, path: str, create_parent: bool = True) -> bool:
        return self._directories.make_directories(path, create_parent)

    def create(self, path: str) -> Optional[BinaryIO]:
        """Open an upload stream for ``path``, creating its parent directories.

        Returns ``None`` when the parent directories cannot be created.
        """
        parent = self._paths.parent_of(path)
        if parent is not None and not self.mkdirs(parent, create_parent=True):
            return None
        return self._backend.create_object(self._paths.strip_root_prefix(path))

    def delete_file(self, path: str) -> bool:
        return self._backend.delete_object(self._paths.strip_root_prefix(path))

    def delete_directory(self, path: str, recursive: bool = False) -> bool:
        return self._operations.delete_directory(path, recursive)

    def rename_file(self, src: str, dst: str) -> bool:
        return self._operations.rename_file(src, dst)

    def rename_directory(self, src: str, dst: str) -> bool:
        return self._operations.rename_directory(src, dst)

    def list_status(self, path: str, recursive: bool = False) -> Optional[list[ChildEntry]]:
        return self._listing.list_children(path, recursive)

    def list(self, path: str) -> Optional[list[str]]:
        """Return the names of the immediate children of ``path``."""

        return _names(self._listing.list_children(path, False))

    def list_recursive(self, path: str) -> Optional[list[str]]:
        """Return the relative names of every descendant of ``path``."""

        return _names(self._listing.list_children(path, True))

    def get_file_size(self, path: str) -> int:
        return self._require_status(path).size_bytes

    def get_modification_time_ms(self, path: str) -> int:
        return self._require_status(path).last_modified_ms

    def get_block_size_bytes(self, path: str) -> int:
        return self._settings.block_size_bytes_default

    def get_space(self, path: str, space_type: str = SPACE_TOTAL) -> int:
        # Object stores do not report capacity; negative means unknown.
        if space_type not in {SPACE_TOTAL, SPACE_FREE, SPACE_USED}:
            raise ValueError(f"Unknown space type: {space_type}")
        return -1

    def _require_status(self, path: str) -> ObjectStatus:
        status = self._backend.get_object_status(self._paths.strip_root_prefix(path))
        if status is None:
            LOGGER.error("Error fetching metadata for %s, assuming it does not exist", path)
            raise NotFoundError(path)
        return status


def _names(children: Optional[list[ChildEntry]]) -> Optional[list[str]]:
    if children is None:
        return None
    return [child.name for child in children]
