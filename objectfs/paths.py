from __future__ import annotations
"""Path helpers mapping file system paths onto object store keys."""
from typing import Optional

from .errors import InvalidPrefixError

PATH_SEPARATOR = "/"


def normalize(path: str) -> str:
    """Return ``path`` with a trailing separator."""

    return path if path.endswith(PATH_SEPARATOR) else path + PATH_SEPARATOR


def join(parent: str, name: str) -> str:
    """Join ``parent`` and ``name`` with exactly one separator."""

    base = parent.rstrip(PATH_SEPARATOR)
    child = name.strip(PATH_SEPARATOR)
    if not base:
        return child
    if not child:
        return base
    return f"{base}{PATH_SEPARATOR}{child}"


class PathTranslator:
    """Translates paths under a root key such as ``s3://bucket`` into keys."""

    def __init__(self, root_key: str):
        if not root_key:
            raise ValueError("root_key must not be empty")
        self._root_key = root_key
        self._root_prefix = normalize(root_key)

    @property
    def root_key(self) -> str:
        return self._root_key

    def strip_root_prefix(self, path: str) -> str:
        """Remove the root prefix, or a leading separator, from ``path``.

        ``s3://bucket/a/b`` and ``/a/b`` both become ``a/b``; ``a/b`` is returned
        unchanged and the bare root key ``s3://bucket`` becomes the empty key.
        Stripping repeats until nothing more can be removed, so the result is
        stable under a second application.
        """
        stripped = path
        while True:
            if normalize(stripped) == self._root_prefix:
                return ""
            if stripped.startswith(self._root_prefix):
                stripped = stripped[len(self._root_prefix):]
            elif stripped.startswith(PATH_SEPARATOR):
                stripped = stripped[len(PATH_SEPARATOR):]
            else:
                return stripped

    def is_root(self, path: str) -> bool:
        if normalize(path) == self._root_prefix:
            return True
        return self.strip_root_prefix(path) == ""

    def parent_of(self, path: str) -> Optional[str]:
        """Return the parent of ``path``; ``None`` for the root and top-level keys."""

        if self.is_root(path):
            return None
        index = path.rfind(PATH_SEPARATOR)
        if index < 0:
            return None
        return path[:index]

    def child_name(self, child: str, parent: str) -> str:
        if child.startswith(parent):
            return child[len(parent):]
        raise InvalidPrefixError(f"Invalid prefix. Parent: {parent} Child: {child}")

    def to_listing_prefix(self, path: str) -> str:
        """Return the key prefix selecting everything below ``path``.

        The root maps to the empty prefix.
        """
        prefix = normalize(self.strip_root_prefix(path))
        return "" if prefix == PATH_SEPARATOR else prefix
