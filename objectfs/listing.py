from __future__ import annotations
"""Merged directory listings over paginated object store listings."""
import logging
from typing import Optional

from .backend import ObjectStoreBackend
from .directories import DirectoryEmulator
from .models import ChildEntry, iter_chunks
from .paths import PATH_SEPARATOR, PathTranslator
from .settings import FileSystemSettings

LOGGER = logging.getLogger(__name__)


class ListingEngine:
    """Lists the children of a pseudo-directory.

    Directories show up in an object listing in two ways: as marker objects
    carrying the folder suffix, for directories created through this package,
    and as common prefixes, for directories that only exist because some key
    lives below them. Both are merged into one set of entries keyed by name.
    Keys ending in the separator (``dir/``, the folder placeholders written by
    S3 consoles) are directories too.

    A name is reported once; when it was seen both as a file and as a
    directory the directory wins. A common prefix therefore gets a marker
    synthesized even when the same name was already recorded as a file, not
    only when the name is new.

    Example for the path ``ufs`` listed with a ``/`` delimiter::

        object   ufs/                      -> discarded (empty name)
        object   ufs/dir1<suffix>          -> dir1, directory
        object   ufs/file                  -> file
        prefix   ufs/dir1/                 -> dir1, already known
        prefix   ufs/dir2/                 -> dir2, marker created
    """

    def __init__(
        self,
        backend: ObjectStoreBackend,
        translator: PathTranslator,
        directories: DirectoryEmulator,
        settings: FileSystemSettings | None = None,
    ):
        self._backend = backend
        self._paths = translator
        self._directories = directories
        self._settings = settings or FileSystemSettings()

    @property
    def page_size(self) -> int:
        return self._settings.page_size

    def list_children(self, path: str, recursive: bool = False) -> Optional[list[ChildEntry]]:
        """Return the entries below ``path``, or ``None`` if it is not a directory.

        Recursive listings name descendants relative to ``path`` (``d/f``).
        The order of the returned entries is unspecified.

        Raises:
            BackendIOError: when the backend fails while paging through results.
        """
        if not self._directories.is_directory(path):
            return None
        prefix = self._paths.to_listing_prefix(path)
        first = self._backend.get_object_listing(prefix, recursive, page_size=self.page_size)
        if first is None:
            return None

        suffix = self._backend.folder_suffix
        children: dict[str, bool] = {}
        for chunk in iter_chunks(first):
            for object_name in chunk.object_names:
                child = self._paths.child_name(object_name, prefix)
                is_directory = child.endswith(suffix)
                if is_directory:
                    child = child[: -len(suffix)]
                elif child.endswith(PATH_SEPARATOR):
                    child = child[: -len(PATH_SEPARATOR)]
                    is_directory = True
                if child:
                    children[child] = children.get(child, False) or is_directory

            for common_prefix in chunk.common_prefixes:
                child = self._paths.child_name(common_prefix, prefix)
                child = child.split(PATH_SEPARATOR, 1)[0]
                if not child or children.get(child):
                    continue
                # Created by another tool; give it a marker so later probes hit directly.
                LOGGER.debug("Creating folder marker for inferred directory %s", common_prefix)
                if not self._directories.create_marker(common_prefix):
                    LOGGER.warning("Unable to create folder marker for %s", common_prefix)
                children[child] = True

        return [ChildEntry(name=name, is_directory=flag) for name, flag in children.items()]
