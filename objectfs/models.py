from __future__ import annotations
"""Value types exchanged between the object store and the file system layer."""
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional


@dataclass(frozen=True)
class ObjectStatus:
    """Metadata snapshot for a single object."""

    size_bytes: int
    last_modified_ms: int


@dataclass
class ListingChunk:
    """One page of a listing plus a lazy pointer to the following page."""

    object_names: list[str] = field(default_factory=list)
    common_prefixes: list[str] = field(default_factory=list)
    fetch_next: Optional[Callable[[], Optional["ListingChunk"]]] = field(
        default=None, repr=False, compare=False
    )

    def next_chunk(self) -> Optional["ListingChunk"]:
        """Return the next page, or ``None`` when the listing is exhausted.

        Raises:
            BackendIOError: when the backend fails to fetch the page.
        """
        if self.fetch_next is None:
            return None
        return self.fetch_next()


def iter_chunks(first: Optional[ListingChunk]) -> Iterator[ListingChunk]:
    """Walk a chunk sequence starting at ``first``; pages are fetched on demand."""

    chunk = first
    while chunk is not None:
        yield chunk
        chunk = chunk.next_chunk()


@dataclass(frozen=True)
class ChildEntry:
    """A single entry of a merged directory listing."""

    name: str
    is_directory: bool = False
