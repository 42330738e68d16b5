"""
In-process cache store.

Thread-safe store for development, tests and single-process applications.
Entries live in an ordered mapping guarded by one lock per store instance,
next to an inverted tag index. Expired entries are purged lazily whenever
entries() or size() is called, and before capacity is checked on write.
"""

import threading
import time
from collections import OrderedDict
from collections.abc import Iterable

from loguru import logger

from semcache.cache.base import BaseCacheStore
from semcache.cache.entry import CacheEntry, normalize_tags


class InMemoryCacheStore(BaseCacheStore):
    """
    In-memory store backed by an ``OrderedDict``.

    Eviction tie-break: among entries sharing the oldest ``created_at``,
    the one inserted first is evicted. Overwriting a key keeps its position.

    Example:
        >>> store = InMemoryCacheStore(max_size=1000)
        >>> store.write("3f9a0c1d2e4b5a69", entry)
        >>> live = store.entries()
    """

    def __init__(self, max_size: int | None = None):
        """
        Initialize the store.

        Args:
            max_size: Maximum number of entries. None or 0 means unlimited.
        """
        super().__init__(max_size=max_size)
        self._data: OrderedDict[str, CacheEntry] = OrderedDict()
        self._tags_index: dict[str, set[str]] = {}
        self._lock = threading.RLock()

    def write(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            previous = self._data.get(key)
            if previous is None:
                self._cleanup_expired()
                if self._at_capacity(len(self._data)):
                    self._evict_oldest()
            else:
                self._unindex(key, previous)

            self._data[key] = entry
            for tag in entry.tags:
                self._tags_index.setdefault(tag, set()).add(key)

    def entries(self) -> list[CacheEntry]:
        with self._lock:
            self._cleanup_expired()
            return list(self._data.values())

    def delete(self, key: str) -> None:
        with self._lock:
            self._delete_locked(key)

    def invalidate_by_tags(self, tags: str | Iterable[str]) -> None:
        with self._lock:
            removed = 0
            normalized = normalize_tags(tags)
            for tag in normalized:
                for key in list(self._tags_index.get(tag, ())):
                    if key in self._data:
                        self._delete_locked(key)
                        removed += 1
                self._tags_index.pop(tag, None)
            logger.debug(f"Invalidated {removed} entries by tags {list(normalized)}")

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._tags_index.clear()

    def size(self) -> int:
        with self._lock:
            self._cleanup_expired()
            return len(self._data)

    def _delete_locked(self, key: str) -> None:
        entry = self._data.pop(key, None)
        if entry is not None:
            self._unindex(key, entry)

    def _unindex(self, key: str, entry: CacheEntry) -> None:
        for tag in entry.tags:
            keys = self._tags_index.get(tag)
            if keys is None:
                continue
            keys.discard(key)
            if not keys:
                del self._tags_index[tag]

    def _cleanup_expired(self) -> None:
        now = time.time()
        expired_keys = [key for key, entry in self._data.items() if entry.expired(now)]
        for key in expired_keys:
            self._delete_locked(key)
        if expired_keys:
            logger.debug(f"Purged {len(expired_keys)} expired cache entries")

    def _evict_oldest(self) -> None:
        victim = self.select_oldest(self._data.items())
        if victim is not None:
            self._delete_locked(victim)
            logger.debug(f"Evicted oldest cache entry: {victim}")
