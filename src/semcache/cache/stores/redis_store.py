"""
Redis cache store.

Shared store for multi-process and distributed deployments. Entries are
serialized to JSON and written with native Redis expiry when they carry a
ttl. Two secondary indices are kept next to them: one set per tag and one
set of every entry key, so the store can enumerate and invalidate without
KEYS scans over the whole database.

Concurrency: every single command is atomic on the server, but multi-step
sequences (count -> evict -> write) are not transactional across processes.
Concurrent writers against one namespace may briefly overshoot max_size or
evict the same victim twice.
"""

import json
import math
from collections.abc import Iterator, Iterable
from contextlib import contextmanager
from typing import Any

import redis
from loguru import logger

from semcache.cache.base import BaseCacheStore
from semcache.cache.entry import CacheEntry, normalize_tags
from semcache.cache.keys import KeyLayout
from semcache.errors import StoreError


class RedisCacheStore(BaseCacheStore):
    """
    Redis-based cache store.

    Key layout per namespace:
        {ns}:entry:{key}   JSON entry, with EX when the entry has a ttl
        {ns}:tag:{tag}     set of entry keys carrying the tag
        {ns}:keys          set of all entry keys

    Eviction tie-break: among entries sharing the oldest ``created_at``,
    the one with the lexicographically smallest Redis key is evicted.

    Example:
        >>> store = RedisCacheStore(redis_url="redis://localhost:6379/0", max_size=5000)
        >>> store.write("3f9a0c1d2e4b5a69", entry)
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        redis_url: str | None = None,
        namespace: str = "semantic_cache",
        max_size: int | None = None,
        **connection_options: Any
    ):
        """
        Initialize the Redis store.

        Args:
            client: Existing Redis client. Takes precedence over redis_url.
            redis_url: Redis connection URL (e.g. "redis://localhost:6379/0").
            namespace: Prefix for every key written by this store.
            max_size: Maximum number of entries. None or 0 means unlimited.
            **connection_options: Passed to ``redis.Redis`` when neither
                client nor redis_url is given.
        """
        super().__init__(max_size=max_size)
        self.namespace = namespace
        self.layout = KeyLayout(namespace)

        if client is not None:
            self._client = client
        elif redis_url:
            self._client = redis.Redis.from_url(redis_url, decode_responses=True)
        else:
            connection_options.setdefault("decode_responses", True)
            self._client = redis.Redis(**connection_options)

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client (for advanced operations)."""
        return self._client

    def write(self, key: str, entry: CacheEntry) -> None:
        full_key = self.layout.entry(key)
        payload = self._encode(full_key, entry)

        with self._guard("write", full_key):
            exists = bool(self._client.sismember(self.layout.keys, full_key))
            if exists:
                previous = self._load(full_key)
                if previous is not None:
                    self._unindex(full_key, previous)
            elif self.max_size is not None and self._client.scard(self.layout.keys) >= self.max_size:
                self._evict_oldest()

            pipe = self._client.pipeline()
            if entry.ttl:
                pipe.set(full_key, payload, ex=max(1, math.ceil(entry.ttl)))
            else:
                pipe.set(full_key, payload)
            for tag in entry.tags:
                pipe.sadd(self.layout.tag(tag), full_key)
            pipe.sadd(self.layout.keys, full_key)
            pipe.execute()

    def entries(self) -> list[CacheEntry]:
        with self._guard("entries"):
            return [entry for _, entry in self._scan()]

    def delete(self, key: str) -> None:
        full_key = self.layout.entry(key)
        with self._guard("delete", full_key):
            self._delete_raw(full_key)

    def invalidate_by_tags(self, tags: str | Iterable[str]) -> None:
        with self._guard("invalidate_by_tags"):
            for tag in normalize_tags(tags):
                tag_key = self.layout.tag(tag)
                members = [self._text(m) for m in self._client.smembers(tag_key)]
                for full_key in members:
                    self._delete_raw(full_key)
                self._client.delete(tag_key)
                logger.debug(f"Invalidated {len(members)} entries tagged '{tag}'")

    def clear(self) -> None:
        with self._guard("clear"):
            members = [self._text(m) for m in self._client.smembers(self.layout.keys)]
            pipe = self._client.pipeline()
            for full_key in members:
                pipe.delete(full_key)
            pipe.delete(self.layout.keys)
            for tag_key in self._client.scan_iter(match=self.layout.tag_pattern):
                pipe.delete(tag_key)
            pipe.execute()

    def size(self) -> int:
        with self._guard("size"):
            return int(self._client.scard(self.layout.keys))

    @contextmanager
    def _guard(self, operation: str, key: str | None = None) -> Iterator[None]:
        try:
            yield
        except redis.RedisError as e:
            logger.error(f"Redis {operation} failed for namespace '{self.namespace}': {e}")
            raise StoreError(
                f"Redis {operation} failed",
                details={"namespace": self.namespace, "key": key},
                original_error=e,
            ) from e

    def _scan(self) -> list[tuple[str, CacheEntry]]:
        """Load live entries, dropping index members whose payload is gone or expired."""
        members = sorted(self._text(m) for m in self._client.smembers(self.layout.keys))
        if not members:
            return []

        values = self._client.mget(members)
        live: list[tuple[str, CacheEntry]] = []

        for full_key, value in zip(members, values):
            if value is None:
                # Expired natively; only the index still knows about it
                self._client.srem(self.layout.keys, full_key)
                continue

            entry = self._decode(full_key, value)
            if entry.expired():
                self._remove(full_key, entry)
                continue

            live.append((full_key, entry))

        return live

    def _evict_oldest(self) -> None:
        live = self._scan()
        if len(live) < self.max_size:
            return
        victim = self.select_oldest(live)
        if victim is not None:
            self._delete_raw(victim)
            logger.debug(f"Evicted oldest cache entry: {victim}")

    def _load(self, full_key: str) -> CacheEntry | None:
        value = self._client.get(full_key)
        if value is None:
            return None
        return self._decode(full_key, value)

    def _delete_raw(self, full_key: str) -> None:
        entry = self._load(full_key)
        self._remove(full_key, entry)

    def _remove(self, full_key: str, entry: CacheEntry | None) -> None:
        pipe = self._client.pipeline()
        if entry is not None:
            for tag in entry.tags:
                pipe.srem(self.layout.tag(tag), full_key)
        pipe.delete(full_key)
        pipe.srem(self.layout.keys, full_key)
        pipe.execute()

    def _unindex(self, full_key: str, entry: CacheEntry) -> None:
        for tag in entry.tags:
            self._client.srem(self.layout.tag(tag), full_key)

    def _encode(self, full_key: str, entry: CacheEntry) -> str:
        try:
            return entry.to_json()
        except (TypeError, ValueError) as e:
            raise StoreError(
                "Cache entry could not be serialized",
                details={"key": full_key},
                original_error=e,
            ) from e

    def _decode(self, full_key: str, value: str | bytes) -> CacheEntry:
        try:
            return CacheEntry.from_json(value)
        except (json.JSONDecodeError, TypeError, ValueError) as e:
            raise StoreError(
                "Stored cache entry could not be decoded",
                details={"key": full_key},
                original_error=e,
            ) from e

    @staticmethod
    def _text(value: str | bytes) -> str:
        return value.decode("utf-8") if isinstance(value, bytes) else value
