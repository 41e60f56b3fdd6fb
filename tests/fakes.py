"""In-memory test doubles for the object store backend."""
import io

from objectfs.backend import ObjectStoreBackend
from objectfs.errors import BackendIOError
from objectfs.models import ListingChunk, ObjectStatus

SUFFIX = "_$folder$"


class FakeUploadStream(io.BytesIO):
    def __init__(self, store, key):
        super().__init__()
        self._store = store
        self._key = key

    def close(self):
        if not self.closed:
            self._store.objects[self._key] = self.getvalue()
        super().close()


class FakeObjectStore(ObjectStoreBackend):
    """Dictionary-backed object store with failure injection."""

    def __init__(self, objects=None, root_key="mem://bucket", folder_suffix=SUFFIX):
        self.objects = dict(objects or {})
        self._root_key = root_key
        self._folder_suffix = folder_suffix
        self.failing_deletes = set()
        self.failing_copies = set()
        self.failing_creates = set()
        self.listing_error = None
        self.fail_listing_after_pages = None
        self.extra_common_prefixes = []
        self.created = []
        self.deleted = []
        self.copied = []
        self.listing_calls = []

    @property
    def root_key(self):
        return self._root_key

    @property
    def folder_suffix(self):
        return self._folder_suffix

    def create_empty_object(self, key):
        if key in self.failing_creates:
            return False
        self.created.append(key)
        self.objects[key] = b""
        return True

    def create_object(self, key):
        return FakeUploadStream(self, key)

    def copy_object(self, src_key, dst_key):
        if src_key in self.failing_copies or src_key not in self.objects:
            return False
        self.copied.append((src_key, dst_key))
        self.objects[dst_key] = self.objects[src_key]
        return True

    def delete_object(self, key):
        if key in self.failing_deletes:
            return False
        self.deleted.append(key)
        self.objects.pop(key, None)
        return True

    def get_object_status(self, key):
        if key not in self.objects:
            return None
        return ObjectStatus(size_bytes=len(self.objects[key]), last_modified_ms=1000)

    def get_object_listing(self, prefix, recursive, *, page_size):
        self.listing_calls.append((prefix, recursive, page_size))
        if self.listing_error is not None:
            raise self.listing_error

        entries = []
        seen_prefixes = set()
        for key in sorted(self.objects):
            if not key.startswith(prefix):
                continue
            rest = key[len(prefix):]
            if not recursive and "/" in rest:
                common = prefix + rest[: rest.index("/") + 1]
                if common not in seen_prefixes:
                    seen_prefixes.add(common)
                    entries.append(("prefix", common))
                continue
            entries.append(("object", key))
        if not recursive:
            for common in self.extra_common_prefixes:
                if common.startswith(prefix) and common not in seen_prefixes:
                    seen_prefixes.add(common)
                    entries.append(("prefix", common))

        pages = [entries[i:i + page_size] for i in range(0, len(entries), page_size)] or [[]]
        return self._chunk(pages, 0)

    def _chunk(self, pages, index):
        if self.fail_listing_after_pages is not None and index >= self.fail_listing_after_pages:
            raise BackendIOError("listing page unavailable")
        page = pages[index]
        fetch_next = None
        if index + 1 < len(pages):
            def fetch_next():
                return self._chunk(pages, index + 1)
        return ListingChunk(
            object_names=[name for kind, name in page if kind == "object"],
            common_prefixes=[name for kind, name in page if kind == "prefix"],
            fetch_next=fetch_next,
        )
