"""Base store interface for semcache."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any

from semcache.cache.entry import CacheEntry


class BaseCacheStore(ABC):
    """
    Abstract base class for cache stores.

    A store owns the entries written by the cache engine, keyed by the
    derived cache key, plus an inverted tag index (tag -> keys).

    Capacity eviction is shared by every backend: when ``max_size`` is set,
    the store is full and the key being written is new, exactly one live
    entry with the oldest ``created_at`` is removed first. Access recency
    plays no part. Overwriting an existing key never evicts.
    """

    def __init__(self, max_size: int | None = None):
        self.max_size = max_size or None

    @abstractmethod
    def write(self, key: str, entry: CacheEntry) -> None:
        """
        Insert or replace an entry.

        Args:
            key: The cache key
            entry: The cache entry to store
        """
        pass

    @abstractmethod
    def entries(self) -> list[CacheEntry]:
        """
        Return every live (non-expired) entry.

        Backends may purge expired entries they meet during the call.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """
        Delete an entry and drop it from every tag index.

        Deleting an absent key is a no-op.
        """
        pass

    @abstractmethod
    def invalidate_by_tags(self, tags: str | Iterable[str]) -> None:
        """
        Delete every entry carrying any of the given tags.

        Args:
            tags: A single tag or a collection of tags (union)
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries and tag indices."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Return the number of tracked entries."""
        pass

    @staticmethod
    def select_oldest(candidates: Iterable[tuple[Any, CacheEntry]]) -> Any | None:
        """
        Pick the eviction victim among ``(key, entry)`` pairs.

        Returns the key whose entry has the smallest ``created_at``. On ties
        the first pair in iteration order wins, so callers control the
        tie-break through the order they pass candidates in.
        """
        victim_key = None
        victim_created_at = None
        for key, entry in candidates:
            if victim_created_at is None or entry.created_at < victim_created_at:
                victim_key = key
                victim_created_at = entry.created_at
        return victim_key

    def _at_capacity(self, current_size: int) -> bool:
        return self.max_size is not None and current_size >= self.max_size
