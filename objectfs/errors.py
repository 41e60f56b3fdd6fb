from __future__ import annotations
"""Errors raised by the object file system."""


class ObjectFSError(Exception):
    """Base class for failures of file system level operations."""


class NotFoundError(ObjectFSError, FileNotFoundError):
    """Raised when a path does not exist, or not in the expected form."""


class AlreadyExistsError(ObjectFSError, FileExistsError):
    """Raised when a destination already exists as a file or directory."""


class ConflictError(AlreadyExistsError):
    """Raised when a directory is requested where a file already lives."""


class DirectoryNotEmptyError(ObjectFSError):
    """Raised when a non-recursive delete targets a directory with children."""


class InvalidPrefixError(ObjectFSError, ValueError):
    """Raised when a child key does not start with its parent prefix."""


class MissingParentError(ObjectFSError):
    """Raised when a directory is created below a parent that does not exist."""


class BackendIOError(ObjectFSError, OSError):
    """Raised when the object store cannot complete a request."""
