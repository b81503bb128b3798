"""In-memory cache store with LRU eviction and TTL expiry."""

import time
from collections import OrderedDict
from collections.abc import Callable

from .models import CacheEntry, CacheStore


class MemoryCacheStore(CacheStore):
    """Bounded in-process cache store.

    Entries beyond max_entries are evicted least-recently-used first.
    Entries older than ttl_seconds are dropped when read.

    Args:
        max_entries: Maximum number of entries kept
        ttl_seconds: Entry lifetime in seconds, or None for no expiry
        clock: Returns the current time in epoch seconds
    """

    def __init__(
        self,
        max_entries: int = 500,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entries: OrderedDict[str, tuple[float, CacheEntry]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, content_hash: str) -> CacheEntry | None:
        item = self._entries.get(content_hash)
        if item is None:
            return None

        stored_at, entry = item
        if self.ttl_seconds is not None and self.clock() - stored_at > self.ttl_seconds:
            del self._entries[content_hash]
            return None

        self._entries.move_to_end(content_hash)
        return entry

    def set(self, entry: CacheEntry) -> None:
        self._entries[entry.content_hash] = (self.clock(), entry)
        self._entries.move_to_end(entry.content_hash)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
